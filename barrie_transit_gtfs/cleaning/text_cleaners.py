"""Canonicalize free-text labels from the Barrie Transit GTFS feed.

Every cleaner is a plain ``str -> str`` function. Matching is case-insensitive
on ASCII word boundaries, already-short forms pass through unchanged, and an
empty string comes back empty. The trip-headsign and stop-name pipelines in
:mod:`barrie_transit_gtfs.cleaning.label_pipelines` chain them in a fixed
order; each cleaner is idempotent on its own.
"""

from __future__ import annotations

import re

# =============================================================================
# CONFIGURATION
# =============================================================================

# Kept (or restored) in uppercase by clean_label.
ACRONYMS: tuple[str, ...] = ("DBT", "GC", "GO", "RVH")

STREET_TYPES: tuple[tuple[str, str], ...] = (
    ("Avenue", "Ave"),
    ("Boulevard", "Blvd"),
    ("Centre", "Ctr"),
    ("Center", "Ctr"),
    ("Circle", "Cir"),
    ("Court", "Ct"),
    ("Crescent", "Cres"),
    ("Drive", "Dr"),
    ("Expressway", "Expy"),
    ("Gardens", "Gdns"),
    ("Heights", "Hts"),
    ("Highway", "Hwy"),
    ("Lane", "Ln"),
    ("Manor", "Mnr"),
    ("Park", "Pk"),
    ("Parkway", "Pkwy"),
    ("Place", "Pl"),
    ("Plaza", "Plz"),
    ("Point", "Pt"),
    ("Road", "Rd"),
    ("Square", "Sq"),
    ("Street", "St"),
    ("Terrace", "Ter"),
    ("Trail", "Trl"),
)

BOUNDS: tuple[tuple[str, str], ...] = (
    ("north", "NB"),
    ("south", "SB"),
    ("east", "EB"),
    ("west", "WB"),
)

# Fully uppercase words kept as they are besides ACRONYMS and single letters.
KEEP_UPPER: tuple[str, ...] = tuple(short for _, short in BOUNDS)

ORDINALS: tuple[tuple[str, str], ...] = (
    ("first", "1st"),
    ("second", "2nd"),
    ("third", "3rd"),
    ("fourth", "4th"),
    ("fifth", "5th"),
    ("sixth", "6th"),
    ("seventh", "7th"),
    ("eighth", "8th"),
    ("ninth", "9th"),
    ("tenth", "10th"),
)

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

_FLAGS = re.IGNORECASE | re.ASCII

ACRONYM_SET = frozenset(ACRONYMS)
KEEP_UPPER_SET = ACRONYM_SET | frozenset(KEEP_UPPER)
STREET_TYPE_MAP = {long.lower(): short for long, short in STREET_TYPES}
BOUND_MAP = {cardinal: short for cardinal, short in BOUNDS}
ORDINAL_MAP = {word: number for word, number in ORDINALS}

WHITESPACE_RE = re.compile(r"\s+")
SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,.!?])")
MISSING_SPACE_AFTER_PUNCT_RE = re.compile(r"([,!?])(?=[^\s,.!?])")
WORD_RE = re.compile(r"(?<![\w'.])[A-Za-z][A-Za-z']*")

STREET_TYPES_RE = re.compile(
    r"\b(" + "|".join(re.escape(long) for long, _ in STREET_TYPES) + r")\b", _FLAGS
)
BOUNDS_RE = re.compile(r"\b(north|south|east|west)\s?bound\b", _FLAGS)
ORDINAL_WORDS_RE = re.compile(r"\b(" + "|".join(ORDINAL_MAP) + r")\b", _FLAGS)
ORDINAL_SUFFIX_RE = re.compile(r"\b(\d+)(st|nd|rd|th)\b", _FLAGS)

AT_RE = re.compile(r"\s+\bat\b\s+", _FLAGS)
AND_RE = re.compile(r"\s+\band\b\s+", _FLAGS)
TO_RE = re.compile(r"\s+\bto\b\s+", _FLAGS)
VIA_RE = re.compile(r"\s+\bvia\b(\s.*)?$", _FLAGS)
TRAILING_ENTRANCE_RE = re.compile(r"\s+\S+\s+entrance\s*$", _FLAGS)

# =============================================================================
# FUNCTIONS
# =============================================================================


def _case_word(match: re.Match[str]) -> str:
    word = match.group(0)
    if word.upper() in ACRONYM_SET:
        return word.upper()
    if word[0].islower():
        word = word[0].upper() + word[1:]
    if word.isupper() and len(word) > 1 and word not in KEEP_UPPER_SET:
        return word.capitalize()
    return word


def clean_label(label: str) -> str:
    """Trim, normalize spacing and punctuation, and fix word capitalization.

    Words starting in lowercase are capitalized, then fully uppercase words
    are title-cased. Single letters and the ``KEEP_UPPER`` bounds (``NB``)
    stay uppercase, ``ACRONYMS`` are forced to uppercase whatever their input
    case, and dotted initialisms such as ``G.C.`` are kept as they are.
    """
    label = WHITESPACE_RE.sub(" ", label).strip()
    label = SPACE_BEFORE_PUNCT_RE.sub(r"\1", label)
    label = MISSING_SPACE_AFTER_PUNCT_RE.sub(r"\1 ", label)
    label = WORD_RE.sub(_case_word, label)
    return label.strip()


def clean_street_types(label: str) -> str:
    """Replace long street-type words (``Street``, ``Avenue``, ...) with their short form."""
    return STREET_TYPES_RE.sub(lambda m: STREET_TYPE_MAP[m.group(1).lower()], label)


def replace_at(label: str) -> str:
    """``Yonge at Bayfield`` -> ``Yonge / Bayfield``."""
    return AT_RE.sub(" / ", label)


def replace_and(label: str) -> str:
    """``Yonge and Bayfield`` -> ``Yonge & Bayfield``."""
    return AND_RE.sub(" & ", label)


def upcase_acronym(label: str, word: str) -> str:
    """Uppercase every whole-word occurrence of *word* in *label*."""
    pattern = re.compile(r"\b" + re.escape(word) + r"\b", _FLAGS)
    return pattern.sub(word.upper(), label)


def keep_to_remove_via(label: str) -> str:
    """Keep only the destination of ``<origin> to <destination> via <street>``."""
    parts = TO_RE.split(label)
    label = parts[-1]
    return VIA_RE.sub("", label).strip()


def strip_trailing_entrance(label: str) -> str:
    """``RVH Main Entrance`` -> ``RVH``."""
    return TRAILING_ENTRANCE_RE.sub("", label)


def clean_numbers(label: str) -> str:
    """Spell ordinals as digits (``First`` -> ``1st``) and lowercase ordinal suffixes."""
    label = ORDINAL_WORDS_RE.sub(lambda m: ORDINAL_MAP[m.group(1).lower()], label)
    return ORDINAL_SUFFIX_RE.sub(lambda m: m.group(1) + m.group(2).lower(), label)


def clean_bounds(label: str) -> str:
    """``Northbound`` / ``north bound`` -> ``NB`` (and likewise SB, EB, WB)."""
    return BOUNDS_RE.sub(lambda m: BOUND_MAP[m.group(1).lower()], label)
