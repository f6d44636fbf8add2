"""Collapse two headsigns sharing a route and direction into one.

Only the pairs listed in ``MERGE_GROUPS`` can be merged: both headsigns must
belong to the same group, and the group's canonical headsign is kept.
"""

from __future__ import annotations

import logging

from barrie_transit_gtfs.agency.errors import UnmergeableHeadsigns
from barrie_transit_gtfs.agency.gtfs_records import NormalizedTrip

# =============================================================================
# CONFIGURATION
# =============================================================================

# route id -> ((accepted headsigns, canonical headsign), ...)
MERGE_GROUPS: dict[int, tuple[tuple[frozenset[str], str], ...]] = {
    11: (
        # "Allandale Rec" is the spelling set on trips, "Allendale Rec" the merged one.
        (frozenset({"Pk Pl", "Allendale Rec", "Allandale Rec"}), "Allendale Rec"),
        (frozenset({"Priscillas Pl", "Lockhart"}), "Lockhart"),
    ),
    100: (
        (
            frozenset({"A GC", "A G.C.", "C Kozlov Mall", "C G.M. Via G.C.", "Kozlov Mall"}),
            "Kozlov Mall",
        ),
        (frozenset({"A Red Express", "C Red Express", "Red Express"}), "Red Express"),
        (
            frozenset({"B DBT", "B D.T.", "D DBT", "D D.T. Via G.C.", "DBT"}),
            "DBT",  # Downtown Barrie Terminal
        ),
        (frozenset({"B Blue Express", "D Blue Express", "Blue Express"}), "Blue Express"),
    ),
}

LOGGER = logging.getLogger(__name__)

# =============================================================================
# FUNCTIONS
# =============================================================================


def merge_headsign_values(route_id: int, headsign: str, headsign_to_merge: str, row=None) -> str:
    """Return the canonical headsign for two headsigns of *route_id*."""
    values = {headsign, headsign_to_merge}
    for accepted, canonical in MERGE_GROUPS.get(route_id, ()):
        if values <= accepted:
            LOGGER.debug(
                "Route %d: %r & %r -> %r", route_id, headsign, headsign_to_merge, canonical
            )
            return canonical
    raise UnmergeableHeadsigns(
        f"Route {route_id}: unexpected trips to merge: {headsign!r} & {headsign_to_merge!r}",
        row,
    )


def merge_headsign(trip: NormalizedTrip, trip_to_merge: NormalizedTrip) -> NormalizedTrip:
    """Merge two normalized trips of the same route and direction."""
    headsign = merge_headsign_values(
        trip.route_id, trip.headsign, trip_to_merge.headsign, (trip, trip_to_merge)
    )
    return NormalizedTrip(
        route_id=trip.route_id, headsign=headsign, direction_id=trip.direction_id
    )
