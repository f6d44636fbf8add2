"""Ordered cleaner chains for trip headsigns and stop names."""

from __future__ import annotations

from barrie_transit_gtfs.cleaning.text_cleaners import (
    clean_bounds,
    clean_label,
    clean_numbers,
    clean_street_types,
    keep_to_remove_via,
    replace_and,
    replace_at,
    strip_trailing_entrance,
    upcase_acronym,
)


def clean_trip_headsign(headsign: str) -> str:
    """``Downtown to Allandale via Bayfield`` -> ``Allandale``."""
    headsign = keep_to_remove_via(headsign)
    headsign = strip_trailing_entrance(headsign)
    headsign = replace_and(headsign)
    headsign = clean_numbers(headsign)
    headsign = clean_bounds(headsign)
    headsign = upcase_acronym(headsign, "dbt")
    headsign = upcase_acronym(headsign, "gc")
    headsign = clean_street_types(headsign)
    return clean_label(headsign)


def clean_stop_name(stop_name: str) -> str:
    """``Yonge at Bayfield Street`` -> ``Yonge / Bayfield St``."""
    stop_name = replace_at(stop_name)
    stop_name = replace_and(stop_name)
    stop_name = clean_street_types(stop_name)
    return clean_label(stop_name)
