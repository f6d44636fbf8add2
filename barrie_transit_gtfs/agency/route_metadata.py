"""Route labels and colors for Barrie Transit."""

from __future__ import annotations

import logging

from barrie_transit_gtfs.agency.errors import MissingRouteColor, UnmergeableRouteLongNames
from barrie_transit_gtfs.agency.gtfs_records import GRoute, NormalizedRoute
from barrie_transit_gtfs.agency.identifiers import route_numeric_id
from barrie_transit_gtfs.cleaning.text_cleaners import clean_label, clean_street_types

# =============================================================================
# CONFIGURATION
# =============================================================================

AGENCY_COLOR = "336699"  # blue, from the agency web site CSS

# Fallback colors when routes.txt leaves route_color empty, by numeric route id.
ROUTE_COLORS: dict[int, str] = {
    1: "EC008C",
    2: "ED1C24",
    3: "0089CF",
    4: "918BC3",
    5: "8ED8F8",
    6: "B2D235",
    7: "F58220",
    8: "000000",
    11: "FFFF00",
    90: "007236",
    100: "57AD40",
}

GEORGIAN_EXPRESS_ROUTE_ID = 100
GEORGIAN_EXPRESS_LONG_NAME = "Georgian Express"

LONG_NAME_SEPARATORS = " -/&"

LOGGER = logging.getLogger(__name__)

# =============================================================================
# FUNCTIONS
# =============================================================================


def agency_color() -> str:
    return AGENCY_COLOR


def route_long_name(route: GRoute) -> str:
    """Clean the GTFS long name; all-caps names are lowercased first."""
    long_name = route.route_long_name
    if long_name.isupper():
        long_name = long_name.lower()
    long_name = clean_street_types(long_name)
    return clean_label(long_name)


def route_color(route: GRoute) -> str:
    """Feed color when present, else the fallback color of the numeric route id."""
    if route.route_color.strip():
        return route.route_color
    route_id = route_numeric_id(route.route_short_name, route)
    color = ROUTE_COLORS.get(route_id)
    if color is None:
        raise MissingRouteColor(f"Unexpected route color for route {route_id}", route)
    return color


def default_merge_route_long_name(long_name: str, long_name_to_merge: str, row=None) -> str:
    """Merge two long names of the same route id.

    Identical names are kept, a name containing the other wins, otherwise the
    longest common word prefix (without trailing separators) is used.
    """
    if long_name_to_merge in long_name:
        return long_name
    if long_name in long_name_to_merge:
        return long_name_to_merge
    common: list[str] = []
    for word, word_to_merge in zip(long_name.split(" "), long_name_to_merge.split(" ")):
        if word != word_to_merge:
            break
        common.append(word)
    merged = " ".join(common).rstrip(LONG_NAME_SEPARATORS)
    if not merged:
        raise UnmergeableRouteLongNames(
            f"Unexpected route long names to merge: {long_name!r} & {long_name_to_merge!r}",
            row,
        )
    return merged


def merge_route_long_name(route: NormalizedRoute, route_to_merge: NormalizedRoute) -> str:
    """Return the long name kept when two GTFS routes collapse onto one route id."""
    if route.id == GEORGIAN_EXPRESS_ROUTE_ID and route_to_merge.id == GEORGIAN_EXPRESS_ROUTE_ID:
        LOGGER.debug(
            "Route %d: %r & %r -> %r",
            route.id,
            route.long_name,
            route_to_merge.long_name,
            GEORGIAN_EXPRESS_LONG_NAME,
        )
        return GEORGIAN_EXPRESS_LONG_NAME
    return default_merge_route_long_name(route.long_name, route_to_merge.long_name, route)
