from __future__ import annotations

import random
import string

import pytest

from barrie_transit_gtfs.cleaning.label_pipelines import clean_stop_name, clean_trip_headsign
from barrie_transit_gtfs.cleaning import text_cleaners as tc


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  BAYFIELD   street ,north ", "Bayfield Street, North"),
        ("rvh main entrance", "RVH Main Entrance"),
        ("G.C. to DBT", "G.C. To DBT"),
        ("Hello !", "Hello!"),
        ("NB Yonge", "NB Yonge"),
        ("A Bayfield St", "A Bayfield St"),
        ("PRISCILLA'S PLACE", "Priscilla's Place"),
        ("Allandale Waterfront go Station", "Allandale Waterfront GO Station"),
        ("", ""),
    ],
)
def test_clean_label(raw: str, expected: str) -> None:
    """Spacing, punctuation and capitalization are normalized."""
    assert tc.clean_label(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "  BAYFIELD   street ,north ",
        "a,b ,c",
        "McDONALD  rd.",
        "D D.T. Via G.C.",
        "dbt / gc / go / rvh",
        "1ST AVENUE",
        " , ",
        "gST",
        "mAIN ST",
        "iDEAL",
        "YONGE ST nB",
    ],
)
def test_clean_label_is_idempotent(raw: str) -> None:
    once = tc.clean_label(raw)
    assert tc.clean_label(once) == once


LABEL_ALPHABET = string.ascii_letters + string.digits + "  ,.!?'-/&"


@pytest.mark.parametrize("seed", range(5))
def test_clean_label_is_idempotent_on_random_labels(seed: int) -> None:
    """Mixed-case words, digits and punctuation settle after one pass."""
    rng = random.Random(seed)
    for _ in range(2000):
        raw = "".join(rng.choice(LABEL_ALPHABET) for _ in range(rng.randint(0, 24)))
        once = tc.clean_label(raw)
        assert tc.clean_label(once) == once, raw


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("gST", "Gst"),
        ("mAIN ST", "Main St"),
        ("ESSA RD", "Essa Rd"),
        ("KING ST NB", "King St NB"),
        ("A DBT", "A DBT"),
        ("PP", "Pp"),
    ],
)
def test_clean_label_title_cases_uppercase_words(raw: str, expected: str) -> None:
    assert tc.clean_label(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Bayfield Street", "Bayfield St"),
        ("BAYFIELD AVENUE", "BAYFIELD Ave"),
        ("Park Place", "Pk Pl"),
        ("Fenchurch Manor", "Fenchurch Mnr"),
        ("Streetsville Rd", "Streetsville Rd"),
        ("Bayfield St", "Bayfield St"),
        ("", ""),
    ],
)
def test_clean_street_types(raw: str, expected: str) -> None:
    assert tc.clean_street_types(raw) == expected


def test_replace_at_and_and() -> None:
    assert tc.replace_at("Yonge at Bayfield") == "Yonge / Bayfield"
    assert tc.replace_at("Yonge AT Bayfield") == "Yonge / Bayfield"
    assert tc.replace_at("Attwood Dr") == "Attwood Dr"
    assert tc.replace_and("Duckworth and Grove") == "Duckworth & Grove"
    assert tc.replace_and("Anderson Rd") == "Anderson Rd"


def test_upcase_acronym_whole_word_only() -> None:
    assert tc.upcase_acronym("to dbt via Dbt", "dbt") == "to DBT via DBT"
    assert tc.upcase_acronym("dbtx", "dbt") == "dbtx"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Downtown to Allandale via Bayfield", "Allandale"),
        ("A to B to C", "C"),
        ("Georgian College via Duckworth", "Georgian College"),
        ("Park Place", "Park Place"),
        ("Tornado Way", "Tornado Way"),
        ("", ""),
    ],
)
def test_keep_to_remove_via(raw: str, expected: str) -> None:
    assert tc.keep_to_remove_via(raw) == expected


def test_strip_trailing_entrance() -> None:
    assert tc.strip_trailing_entrance("RVH Main Entrance") == "RVH"
    assert tc.strip_trailing_entrance("Entrance Way") == "Entrance Way"


def test_clean_numbers_and_bounds() -> None:
    assert tc.clean_numbers("First Avenue") == "1st Avenue"
    assert tc.clean_numbers("2ND Line") == "2nd Line"
    assert tc.clean_bounds("Yonge Northbound") == "Yonge NB"
    assert tc.clean_bounds("Essa south bound") == "Essa SB"
    assert tc.clean_bounds("Eastview") == "Eastview"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Downtown to Allandale via Bayfield", "Allandale"),
        ("Georgian College and RVH Main Entrance", "Georgian College & RVH"),
        ("dbt via Bayfield", "DBT"),
        ("A gc", "A GC"),
        ("Yonge Street Northbound", "Yonge St NB"),
    ],
)
def test_clean_trip_headsign(raw: str, expected: str) -> None:
    assert clean_trip_headsign(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Yonge at Bayfield Street", "Yonge / Bayfield St"),
        ("Duckworth and Grove Street", "Duckworth & Grove St"),
        ("DOWNTOWN BARRIE TERMINAL", "Downtown Barrie Terminal"),
        ("ESSA RD AT MAPLEVIEW DR", "Essa Rd / Mapleview Dr"),
        ("YONGE AT BAYFIELD ST", "Yonge / Bayfield St"),
    ],
)
def test_clean_stop_name(raw: str, expected: str) -> None:
    assert clean_stop_name(raw) == expected
