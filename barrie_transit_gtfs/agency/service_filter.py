"""Inclusion predicates for calendars, calendar exceptions and trips.

The host computes the set of useful ``service_id`` values once per run with
:func:`extract_useful_service_ids` and stores it on the
:class:`ConversionContext`; the predicates below only consult that set.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from enum import IntEnum

import pandas as pd

from barrie_transit_gtfs.agency.conversion_context import ConversionContext
from barrie_transit_gtfs.agency.gtfs_records import GCalendar, GCalendarDate, GTrip

# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_EXCLUDE = True

# A service is useful when it runs on any day of [today, today + lookahead].
USEFUL_SERVICE_LOOKAHEAD_DAYS = 7

WEEKDAY_COLUMNS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

GTFS_DATE_FORMAT = "%Y%m%d"

LOGGER = logging.getLogger(__name__)


class RouteType(IntEnum):
    """GTFS ``route_type`` values used by the agency."""

    BUS = 3


# =============================================================================
# PREDICATES
# =============================================================================


def agency_route_type() -> RouteType:
    return RouteType.BUS


def default_exclude() -> bool:
    """Opt in to dropping rows whose service is not in the useful set."""
    return DEFAULT_EXCLUDE


def excluding_all(ctx: ConversionContext) -> bool:
    """True when calendars were read but no service is useful."""
    return ctx.useful_service_ids is not None and not ctx.useful_service_ids


def _exclude_service(ctx: ConversionContext, service_id: str) -> bool:
    if not default_exclude() or ctx.useful_service_ids is None:
        return False
    return service_id not in ctx.useful_service_ids


def exclude_calendar(ctx: ConversionContext, calendar: GCalendar) -> bool:
    return _exclude_service(ctx, calendar.service_id)


def exclude_calendar_date(ctx: ConversionContext, calendar_date: GCalendarDate) -> bool:
    return _exclude_service(ctx, calendar_date.service_id)


def exclude_trip(ctx: ConversionContext, trip: GTrip) -> bool:
    return _exclude_service(ctx, trip.service_id)


# =============================================================================
# USEFUL SERVICES
# =============================================================================


def build_service_calendar(
    calendar_df: pd.DataFrame | None,
    calendar_dates_df: pd.DataFrame | None,
) -> dict[str, set[str]]:
    """Merge calendar and calendar_dates into active-date sets per service_id."""
    svc_dates: dict[str, set[str]] = {}

    if calendar_df is not None:
        for row in calendar_df.itertuples(index=False):
            start = pd.to_datetime(str(row.start_date), format=GTFS_DATE_FORMAT)
            end = pd.to_datetime(str(row.end_date), format=GTFS_DATE_FORMAT)
            rng = pd.date_range(start, end)
            # rng.dayofweek maps Monday=0, Sunday=6
            days_active = [str(getattr(row, day)).strip() == "1" for day in WEEKDAY_COLUMNS]
            mask = [days_active[d] for d in rng.dayofweek]
            svc_dates.setdefault(str(row.service_id), set()).update(
                rng[mask].strftime(GTFS_DATE_FORMAT)
            )

    if calendar_dates_df is not None:
        for cd in calendar_dates_df.itertuples(index=False):
            svc_set = svc_dates.setdefault(str(cd.service_id), set())
            exception_type = str(cd.exception_type).strip()
            if exception_type == "1":
                svc_set.add(str(cd.date))
            elif exception_type == "2":
                svc_set.discard(str(cd.date))

    return svc_dates


def _services_active_between(svc_dates: dict[str, set[str]], start: date, end: date) -> set[str]:
    first = start.strftime(GTFS_DATE_FORMAT)
    last = end.strftime(GTFS_DATE_FORMAT)
    return {sid for sid, dates in svc_dates.items() if any(first <= d <= last for d in dates)}


def extract_useful_service_ids(
    calendar_df: pd.DataFrame | None,
    calendar_dates_df: pd.DataFrame | None,
    today: date,
    lookahead_days: int = USEFUL_SERVICE_LOOKAHEAD_DAYS,
) -> frozenset[str] | None:
    """Return the service ids running in the next *lookahead_days* days.

    When the feed has not started yet, the window is moved to the first
    active date after it. ``None`` means the feed has no calendar data.
    """
    if calendar_df is None and calendar_dates_df is None:
        LOGGER.warning("No calendar.txt nor calendar_dates.txt: keeping every service.")
        return None

    svc_dates = build_service_calendar(calendar_df, calendar_dates_df)
    window_end = today + timedelta(days=lookahead_days)
    useful = _services_active_between(svc_dates, today, window_end)

    if not useful:
        last = window_end.strftime(GTFS_DATE_FORMAT)
        upcoming = sorted(d for dates in svc_dates.values() for d in dates if d > last)
        if upcoming:
            start = datetime.strptime(upcoming[0], GTFS_DATE_FORMAT).date()
            LOGGER.info("No service around %s; using the feed start %s instead.", today, start)
            useful = _services_active_between(
                svc_dates, start, start + timedelta(days=lookahead_days)
            )

    LOGGER.info("Useful services: %d of %d.", len(useful), len(svc_dates))
    return frozenset(useful)
