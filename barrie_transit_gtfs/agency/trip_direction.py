"""Direction id and headsign assignment for Barrie Transit trips.

The feed publishes two GTFS routes per physical route (``3A`` / ``3B``) and
reuses the same ``direction_id`` for both, so the direction comes from the
route short name suffix instead: A and C run one way, B and D the other.

Route 11 is unlettered and its terminals flip direction ids between feed
releases. Its trips are classified by headsign; the first trip seen for a
terminal pair fixes the direction of that pair (from the feed, or as the
complement of the other pair) for the rest of the run.
"""

from __future__ import annotations

import logging
import re

from barrie_transit_gtfs.agency.conversion_context import UNSET, ConversionContext
from barrie_transit_gtfs.agency.errors import (
    InconsistentDirection,
    InvalidDirection,
    UnexpectedHeadsign,
    UnexpectedRouteSuffix,
)
from barrie_transit_gtfs.agency.gtfs_records import GRoute, GTrip, NormalizedTrip
from barrie_transit_gtfs.agency.identifiers import route_numeric_id
from barrie_transit_gtfs.agency.route_metadata import route_long_name
from barrie_transit_gtfs.cleaning.label_pipelines import clean_trip_headsign

# =============================================================================
# CONFIGURATION
# =============================================================================

SUFFIX_DIRECTIONS: dict[str, int] = {
    "A": 0,
    "C": 0,
    "B": 1,
    "D": 1,
}

ROUTE_11_ID = 11

# GTFS headsign -> (canonical headsign, ConversionContext slot it binds)
ROUTE_11_HEADSIGNS: dict[str, tuple[str, str]] = {
    "Priscillas Place": ("Priscillas Pl", "priscillas_place_id"),
    "A Rec to Lockhart": ("Lockhart", "priscillas_place_id"),
    "PP": ("Pk Pl", "pk_pl_id"),
    "Allandale Rec": ("Allandale Rec", "pk_pl_id"),
}

PAIRED_SLOTS: dict[str, str] = {
    "priscillas_place_id": "pk_pl_id",
    "pk_pl_id": "priscillas_place_id",
}

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

LETTERED_RSN_RE = re.compile(r"([0-9]+)([A-Za-z])")
NUMERIC_RSN_RE = re.compile(r"[0-9]+")

LOGGER = logging.getLogger(__name__)

# =============================================================================
# FUNCTIONS
# =============================================================================


def parse_direction_id(raw: str, row=None) -> int:
    """Return the feed ``direction_id`` as 0 or 1."""
    raw = raw.strip()
    if raw not in ("0", "1"):
        raise InvalidDirection(f"Unexpected direction_id {raw!r}", row)
    return int(raw)


def resolve_route_11_direction(ctx: ConversionContext, trip: GTrip) -> tuple[str, int]:
    """Return ``(canonical headsign, direction id)`` for a route 11 trip.

    Updates the direction slots of *ctx* the first time a terminal pair is seen.
    """
    try:
        headsign, bound_slot = ROUTE_11_HEADSIGNS[trip.trip_headsign.strip()]
    except KeyError:
        raise UnexpectedHeadsign(
            f"Route {ROUTE_11_ID}: unexpected trip headsign {trip.trip_headsign!r}", trip
        ) from None
    paired_slot = PAIRED_SLOTS[bound_slot]
    bound = getattr(ctx, bound_slot)
    paired = getattr(ctx, paired_slot)

    if bound == UNSET:
        if paired == UNSET:
            bound = parse_direction_id(trip.direction_id, trip)
        else:
            bound = 1 - paired
        setattr(ctx, bound_slot, bound)
        LOGGER.debug("Route %d: %s bound to direction %d", ROUTE_11_ID, bound_slot, bound)
    elif paired == bound:
        raise InconsistentDirection(
            f"Route {ROUTE_11_ID}: {bound_slot} and {paired_slot} both set to {bound}", trip
        )
    return headsign, bound


def set_trip_headsign(ctx: ConversionContext, route: GRoute, trip: GTrip) -> NormalizedTrip:
    """Decide the canonical headsign and direction id of *trip* on *route*."""
    route_id = route_numeric_id(route.route_short_name, route)
    if route_id == ROUTE_11_ID:
        headsign, direction_id = resolve_route_11_direction(ctx, trip)
        return NormalizedTrip(route_id=route_id, headsign=headsign, direction_id=direction_id)

    rsn = route.route_short_name.strip()
    lettered = LETTERED_RSN_RE.fullmatch(rsn)
    if lettered is not None:
        letter = lettered.group(2)
        if letter not in SUFFIX_DIRECTIONS:
            raise UnexpectedRouteSuffix(f"Route {route_id}: unexpected suffix {letter!r}", route)
        direction_id = SUFFIX_DIRECTIONS[letter]
        headsign = clean_trip_headsign(f"{letter} {route_long_name(route)}")
    elif NUMERIC_RSN_RE.fullmatch(rsn):
        direction_id = parse_direction_id(trip.direction_id, trip)
        headsign = clean_trip_headsign(trip.trip_headsign) or route_long_name(route)
    else:
        raise UnexpectedRouteSuffix(f"Route {route_id}: unexpected short name {rsn!r}", route)
    return NormalizedTrip(route_id=route_id, headsign=headsign, direction_id=direction_id)
