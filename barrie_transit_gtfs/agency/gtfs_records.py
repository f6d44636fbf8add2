"""GTFS input rows and the normalized records derived from them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

# =============================================================================
# HELPERS
# =============================================================================


def _text(row: Mapping[str, Any], column: str) -> str:
    """Return *column* of *row* as a string; missing, ``None`` and NaN become ``""``."""
    value = row.get(column, "")
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


# =============================================================================
# GTFS INPUT ROWS
# =============================================================================


@dataclass(frozen=True)
class GRoute:
    """One row of routes.txt."""

    route_id: str
    route_short_name: str
    route_long_name: str = ""
    route_color: str = ""
    route_text_color: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> GRoute:
        return cls(
            route_id=_text(row, "route_id"),
            route_short_name=_text(row, "route_short_name"),
            route_long_name=_text(row, "route_long_name"),
            route_color=_text(row, "route_color"),
            route_text_color=_text(row, "route_text_color"),
        )


@dataclass(frozen=True)
class GTrip:
    """One row of trips.txt. ``direction_id`` is kept raw ("0", "1" or "")."""

    trip_id: str
    route_id: str
    service_id: str
    trip_headsign: str = ""
    direction_id: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> GTrip:
        return cls(
            trip_id=_text(row, "trip_id"),
            route_id=_text(row, "route_id"),
            service_id=_text(row, "service_id"),
            trip_headsign=_text(row, "trip_headsign"),
            direction_id=_text(row, "direction_id"),
        )


@dataclass(frozen=True)
class GStop:
    """One row of stops.txt."""

    stop_id: str
    stop_code: str
    stop_name: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> GStop:
        return cls(
            stop_id=_text(row, "stop_id"),
            stop_code=_text(row, "stop_code"),
            stop_name=_text(row, "stop_name"),
        )


@dataclass(frozen=True)
class GCalendar:
    """One row of calendar.txt (weekday flags are not needed by the predicates)."""

    service_id: str
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> GCalendar:
        return cls(
            service_id=_text(row, "service_id"),
            start_date=_text(row, "start_date"),
            end_date=_text(row, "end_date"),
        )


@dataclass(frozen=True)
class GCalendarDate:
    """One row of calendar_dates.txt."""

    service_id: str
    date: str = ""
    exception_type: str = ""

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> GCalendarDate:
        return cls(
            service_id=_text(row, "service_id"),
            date=_text(row, "date"),
            exception_type=_text(row, "exception_type"),
        )


# =============================================================================
# NORMALIZED RECORDS
# =============================================================================


@dataclass(frozen=True)
class NormalizedRoute:
    id: int
    short_name: str
    long_name: str
    color: str


@dataclass(frozen=True)
class NormalizedTrip:
    route_id: int
    headsign: str
    direction_id: int


@dataclass(frozen=True)
class NormalizedStop:
    id: int
    name: str
