from __future__ import annotations

from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from barrie_transit_gtfs.agency import service_filter as sf
from barrie_transit_gtfs.agency.conversion_context import ConversionContext
from barrie_transit_gtfs.agency.gtfs_records import GCalendar, GCalendarDate, GTrip

FIXTURE_DIR = Path(__file__).parent / "fixtures" / "barrie_gtfs"


@pytest.fixture()
def calendar_df() -> pd.DataFrame:
    return pd.read_csv(FIXTURE_DIR / "calendar.txt", dtype=str)


@pytest.fixture()
def calendar_dates_df() -> pd.DataFrame:
    return pd.read_csv(FIXTURE_DIR / "calendar_dates.txt", dtype=str)


def test_build_service_calendar_applies_exceptions(calendar_df, calendar_dates_df) -> None:
    svc = sf.build_service_calendar(calendar_df, calendar_dates_df)
    assert "20261016" in svc["WKDY"]  # Friday
    assert "20261017" not in svc["WKDY"]
    assert "20261225" not in svc["WKDY"]  # removed by calendar_dates
    assert "20261017" in svc["SAT"]
    assert "20200704" not in svc["OLD"]
    assert "20200703" in svc["OLD"]


def test_calendar_dates_only_service() -> None:
    dates = pd.DataFrame(
        {"service_id": ["HOL"], "date": ["20261016"], "exception_type": ["1"]}
    )
    assert sf.build_service_calendar(None, dates) == {"HOL": {"20261016"}}
    useful = sf.extract_useful_service_ids(None, dates, date(2026, 10, 16))
    assert useful == frozenset({"HOL"})


@pytest.mark.parametrize(
    ("today", "expected"),
    [
        (date(2026, 10, 16), {"WKDY", "SAT"}),
        # Before the feed starts: the window moves to 2026-01-01.
        (date(2025, 6, 1), {"WKDY", "SAT"}),
        (date(2020, 7, 1), {"OLD"}),
        (date(2030, 1, 1), set()),
    ],
)
def test_extract_useful_service_ids(calendar_df, calendar_dates_df, today, expected) -> None:
    useful = sf.extract_useful_service_ids(calendar_df, calendar_dates_df, today)
    assert useful == frozenset(expected)


def test_lookahead_window(calendar_df) -> None:
    saturday = date(2026, 10, 17)
    assert sf.extract_useful_service_ids(calendar_df, None, saturday, lookahead_days=0) == frozenset(
        {"SAT"}
    )
    assert sf.extract_useful_service_ids(calendar_df, None, saturday, lookahead_days=2) == frozenset(
        {"SAT", "WKDY"}
    )


def test_no_calendar_data_keeps_everything() -> None:
    ctx = ConversionContext(
        useful_service_ids=sf.extract_useful_service_ids(None, None, date(2026, 10, 16))
    )
    assert ctx.useful_service_ids is None
    assert not sf.excluding_all(ctx)
    assert not sf.exclude_trip(ctx, GTrip(trip_id="T", route_id="R", service_id="ANY"))


def test_predicates_consult_useful_set() -> None:
    ctx = ConversionContext(useful_service_ids=frozenset({"WKDY"}))
    assert not sf.exclude_calendar(ctx, GCalendar(service_id="WKDY"))
    assert sf.exclude_calendar(ctx, GCalendar(service_id="OLD"))
    assert not sf.exclude_calendar_date(ctx, GCalendarDate(service_id="WKDY", date="20261225"))
    assert sf.exclude_calendar_date(ctx, GCalendarDate(service_id="OLD", date="20200704"))
    assert not sf.exclude_trip(ctx, GTrip(trip_id="T1", route_id="R3A", service_id="WKDY"))
    assert sf.exclude_trip(ctx, GTrip(trip_id="T2", route_id="R3A", service_id="OLD"))
    assert not sf.excluding_all(ctx)


def test_excluding_all_when_nothing_is_useful() -> None:
    assert sf.excluding_all(ConversionContext(useful_service_ids=frozenset()))


def test_agency_constants() -> None:
    assert sf.default_exclude() is True
    assert sf.agency_route_type() == sf.RouteType.BUS == 3
