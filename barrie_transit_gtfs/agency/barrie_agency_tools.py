"""The Barrie Transit bus adapter handed to a GTFS conversion run.

``AgencyTools`` is a plain value carrying the agency decision functions;
``BARRIE_TRANSIT_TOOLS`` wires in the Barrie Transit ones. A conversion run
calls them once per GTFS row and owns everything else (reading, dedup,
output).

Feed sources:
    http://www.myridebarrie.ca/gtfs/
    http://www.myridebarrie.ca/gtfs/google_transit.zip
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from barrie_transit_gtfs.agency import headsign_merge, route_metadata, service_filter, trip_direction
from barrie_transit_gtfs.agency.conversion_context import ConversionContext
from barrie_transit_gtfs.agency.gtfs_records import (
    GCalendar,
    GCalendarDate,
    GRoute,
    GStop,
    GTrip,
    NormalizedRoute,
    NormalizedStop,
    NormalizedTrip,
)
from barrie_transit_gtfs.agency.identifiers import (
    route_canonical_short_name,
    route_numeric_id,
    stop_numeric_id,
)
from barrie_transit_gtfs.cleaning.label_pipelines import clean_stop_name, clean_trip_headsign

AGENCY_NAME = "Barrie Transit"


def get_route_id(route: GRoute) -> int:
    return route_numeric_id(route.route_short_name, route)


def get_route_short_name(route: GRoute) -> str:
    return route_canonical_short_name(route.route_short_name, route)


def get_stop_id(stop: GStop) -> int:
    return stop_numeric_id(stop.stop_code, stop)


def get_stop_name(stop: GStop) -> str:
    return clean_stop_name(stop.stop_name)


@dataclass(frozen=True)
class AgencyTools:
    """Decision functions for one agency."""

    agency_name: str
    agency_color: Callable[[], str]
    agency_route_type: Callable[[], service_filter.RouteType]
    route_id: Callable[[GRoute], int]
    route_short_name: Callable[[GRoute], str]
    route_long_name: Callable[[GRoute], str]
    route_color: Callable[[GRoute], str]
    merge_route_long_name: Callable[[NormalizedRoute, NormalizedRoute], str]
    set_trip_headsign: Callable[[ConversionContext, GRoute, GTrip], NormalizedTrip]
    merge_headsign: Callable[[NormalizedTrip, NormalizedTrip], NormalizedTrip]
    clean_trip_headsign: Callable[[str], str]
    stop_id: Callable[[GStop], int]
    stop_name: Callable[[GStop], str]
    default_exclude: Callable[[], bool]
    excluding_all: Callable[[ConversionContext], bool]
    exclude_calendar: Callable[[ConversionContext, GCalendar], bool]
    exclude_calendar_date: Callable[[ConversionContext, GCalendarDate], bool]
    exclude_trip: Callable[[ConversionContext, GTrip], bool]

    def normalize_route(self, route: GRoute) -> NormalizedRoute:
        return NormalizedRoute(
            id=self.route_id(route),
            short_name=self.route_short_name(route),
            long_name=self.route_long_name(route),
            color=self.route_color(route),
        )

    def normalize_stop(self, stop: GStop) -> NormalizedStop:
        return NormalizedStop(id=self.stop_id(stop), name=self.stop_name(stop))


BARRIE_TRANSIT_TOOLS = AgencyTools(
    agency_name=AGENCY_NAME,
    agency_color=route_metadata.agency_color,
    agency_route_type=service_filter.agency_route_type,
    route_id=get_route_id,
    route_short_name=get_route_short_name,
    route_long_name=route_metadata.route_long_name,
    route_color=route_metadata.route_color,
    merge_route_long_name=route_metadata.merge_route_long_name,
    set_trip_headsign=trip_direction.set_trip_headsign,
    merge_headsign=headsign_merge.merge_headsign,
    clean_trip_headsign=clean_trip_headsign,
    stop_id=get_stop_id,
    stop_name=get_stop_name,
    default_exclude=service_filter.default_exclude,
    excluding_all=service_filter.excluding_all,
    exclude_calendar=service_filter.exclude_calendar,
    exclude_calendar_date=service_filter.exclude_calendar_date,
    exclude_trip=service_filter.exclude_trip,
)
