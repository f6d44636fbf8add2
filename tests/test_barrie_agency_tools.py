from __future__ import annotations

import dataclasses

import pytest

from barrie_transit_gtfs.agency.barrie_agency_tools import BARRIE_TRANSIT_TOOLS as TOOLS
from barrie_transit_gtfs.agency.conversion_context import ConversionContext
from barrie_transit_gtfs.agency.gtfs_records import (
    GRoute,
    GStop,
    GTrip,
    NormalizedRoute,
    NormalizedStop,
    NormalizedTrip,
)


def test_agency_identity() -> None:
    assert TOOLS.agency_name == "Barrie Transit"
    assert TOOLS.agency_color() == "336699"
    assert TOOLS.agency_route_type() == 3
    assert TOOLS.default_exclude() is True


def test_tools_value_is_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        TOOLS.agency_name = "Other"  # type: ignore[misc]


def test_bayfield_route_and_trip_direction() -> None:
    route = GRoute(route_id="R3A", route_short_name="3A", route_long_name="BAYFIELD STREET")
    assert TOOLS.normalize_route(route) == NormalizedRoute(3, "3", "Bayfield St", "0089CF")
    trip = GTrip(trip_id="T1", route_id="R3A", service_id="WKDY", direction_id="1")
    assert TOOLS.set_trip_headsign(ConversionContext(), route, trip).direction_id == 0


def test_georgian_express_route() -> None:
    route = GRoute(route_id="R100B", route_short_name="100B", route_long_name="georgian express")
    assert TOOLS.normalize_route(route) == NormalizedRoute(
        100, "100", "Georgian Express", "57AD40"
    )
    trip = GTrip(trip_id="T1", route_id="R100B", service_id="WKDY", direction_id="0")
    assert TOOLS.set_trip_headsign(ConversionContext(), route, trip).direction_id == 1


@pytest.mark.parametrize(
    ("stop_code", "stop_name", "expected"),
    [
        ("247", "Yonge at Bayfield Street", NormalizedStop(247, "Yonge / Bayfield St")),
        ("AG 12", "Allandale Waterfront GO", NormalizedStop(100012, "Allandale Waterfront GO")),
    ],
)
def test_normalize_stop(stop_code: str, stop_name: str, expected: NormalizedStop) -> None:
    stop = GStop(stop_id="S", stop_code=stop_code, stop_name=stop_name)
    assert TOOLS.normalize_stop(stop) == expected


def test_merge_headsign_and_cleaning() -> None:
    merged = TOOLS.merge_headsign(
        NormalizedTrip(11, "Pk Pl", 1), NormalizedTrip(11, "Allendale Rec", 1)
    )
    assert merged.headsign == "Allendale Rec"
    assert TOOLS.clean_trip_headsign("Downtown to Allandale via Bayfield") == "Allandale"
