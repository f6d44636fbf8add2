"""Convert the Barrie Transit GTFS feed into the app's route/trip/stop files.

Reads the feed (zip or folder), keeps only the services running now, then
normalizes every route, trip and stop through the agency decision functions.
Routes collapsing onto the same numeric id and trips sharing a route and
direction are merged. Any agency decision failure aborts the run.

Outputs (in ``output_dir``, each name preceded by ``files_prefix``):
    - gtfs_rts_routes.txt: id, short_name, long_name, color
    - gtfs_rts_trips.txt: route_id, direction_id, headsign
    - gtfs_rts_stops.txt: id, name

Usage:
    barrie-transit-gtfs [input] [output_dir] [files_prefix] [--today YYYYMMDD]
                        [--lookahead-days N] [--log-level LEVEL] [--log-file PATH]
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from pathlib import Path

import pandas as pd

from barrie_transit_gtfs.agency.barrie_agency_tools import BARRIE_TRANSIT_TOOLS, AgencyTools
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
from barrie_transit_gtfs.agency.service_filter import (
    USEFUL_SERVICE_LOOKAHEAD_DAYS,
    extract_useful_service_ids,
)
from barrie_transit_gtfs.pipeline.gtfs_loader import load_gtfs_feed
from barrie_transit_gtfs.utils.logging_helper import setup_logging

# =============================================================================
# CONFIGURATION
# =============================================================================

DEFAULT_INPUT = "input/gtfs.zip"
DEFAULT_OUTPUT_DIR = "../../mtransitapps/ca-barrie-transit-bus-android/res/raw/"
DEFAULT_FILES_PREFIX = ""

ROUTES_FILENAME = "gtfs_rts_routes.txt"
TRIPS_FILENAME = "gtfs_rts_trips.txt"
STOPS_FILENAME = "gtfs_rts_stops.txt"

ROUTE_COLUMNS = ["id", "short_name", "long_name", "color"]
TRIP_COLUMNS = ["route_id", "direction_id", "headsign"]
STOP_COLUMNS = ["id", "name"]

LOGGER = logging.getLogger(__name__)

# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class Config:
    """Runtime configuration."""

    input_path: Path
    output_dir: Path
    files_prefix: str = DEFAULT_FILES_PREFIX
    lookahead_days: int = USEFUL_SERVICE_LOOKAHEAD_DAYS


@dataclass
class ConversionResult:
    """Normalized tables of one run and the files written for them."""

    routes: pd.DataFrame
    trips: pd.DataFrame
    stops: pd.DataFrame
    written: list[Path] = field(default_factory=list)


# =============================================================================
# NORMALIZATION
# =============================================================================


def _records(data: dict[str, pd.DataFrame], table: str) -> list[dict]:
    df = data.get(table)
    return [] if df is None else df.to_dict("records")


def normalize_routes(
    tools: AgencyTools, routes: list[GRoute]
) -> dict[int, NormalizedRoute]:
    """Normalize routes, merging those that share a numeric id."""
    by_id: dict[int, NormalizedRoute] = {}
    for g_route in routes:
        route = tools.normalize_route(g_route)
        existing = by_id.get(route.id)
        if existing is None:
            by_id[route.id] = route
        elif existing.long_name != route.long_name:
            long_name = tools.merge_route_long_name(existing, route)
            by_id[route.id] = NormalizedRoute(
                id=existing.id,
                short_name=existing.short_name,
                long_name=long_name,
                color=existing.color,
            )
    return by_id


def normalize_trips(
    tools: AgencyTools,
    ctx: ConversionContext,
    trips: list[GTrip],
    routes_by_gtfs_id: dict[str, GRoute],
) -> dict[tuple[int, int], NormalizedTrip]:
    """Assign headsign and direction to every trip; merge per route and direction."""
    by_key: dict[tuple[int, int], NormalizedTrip] = {}
    for g_trip in trips:
        g_route = routes_by_gtfs_id.get(g_trip.route_id)
        if g_route is None:
            raise ValueError(f"Trip {g_trip.trip_id!r} references unknown route {g_trip.route_id!r}")
        trip = tools.set_trip_headsign(ctx, g_route, g_trip)
        key = (trip.route_id, trip.direction_id)
        existing = by_key.get(key)
        if existing is None:
            by_key[key] = trip
        elif existing.headsign != trip.headsign:
            by_key[key] = tools.merge_headsign(existing, trip)
    return by_key


def normalize_stops(tools: AgencyTools, stops: list[GStop]) -> dict[int, NormalizedStop]:
    """Normalize stops; the first name wins for a duplicated stop id."""
    by_id: dict[int, NormalizedStop] = {}
    for g_stop in stops:
        stop = tools.normalize_stop(g_stop)
        existing = by_id.get(stop.id)
        if existing is None:
            by_id[stop.id] = stop
        elif existing.name != stop.name:
            LOGGER.warning(
                "Stop %d: keeping name %r, ignoring %r", stop.id, existing.name, stop.name
            )
    return by_id


def _frame(records: list, columns: list[str], sort_by: list[str]) -> pd.DataFrame:
    if not records:
        return pd.DataFrame(columns=columns)
    df = pd.DataFrame([asdict(r) for r in records], columns=columns)
    return df.sort_values(sort_by).reset_index(drop=True)


def write_outputs(result: ConversionResult, output_dir: Path, files_prefix: str) -> list[Path]:
    """Write the three normalized tables as CSV and return their paths."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for df, filename in (
        (result.routes, ROUTES_FILENAME),
        (result.trips, TRIPS_FILENAME),
        (result.stops, STOPS_FILENAME),
    ):
        path = output_dir / f"{files_prefix}{filename}"
        df.to_csv(path, index=False)
        LOGGER.info("Wrote %d rows → %s", len(df), path)
        written.append(path)
    return written


# =============================================================================
# CONVERSION
# =============================================================================


def convert(
    config: Config,
    tools: AgencyTools = BARRIE_TRANSIT_TOOLS,
    today: date | None = None,
) -> ConversionResult:
    """Run one conversion of the feed at ``config.input_path``."""
    LOGGER.info("Generating %s bus data...", tools.agency_name)
    start = time.perf_counter()
    today = today or date.today()

    data = load_gtfs_feed(config.input_path)
    ctx = ConversionContext(
        useful_service_ids=extract_useful_service_ids(
            data.get("calendar"), data.get("calendar_dates"), today, config.lookahead_days
        )
    )

    if tools.excluding_all(ctx):
        LOGGER.warning("No useful service in the feed: writing empty outputs.")
        result = ConversionResult(
            routes=_frame([], ROUTE_COLUMNS, ROUTE_COLUMNS[:1]),
            trips=_frame([], TRIP_COLUMNS, TRIP_COLUMNS[:2]),
            stops=_frame([], STOP_COLUMNS, STOP_COLUMNS[:1]),
        )
    else:
        calendars = [GCalendar.from_row(r) for r in _records(data, "calendar")]
        calendar_dates = [GCalendarDate.from_row(r) for r in _records(data, "calendar_dates")]
        kept_calendars = [c for c in calendars if not tools.exclude_calendar(ctx, c)]
        kept_dates = [d for d in calendar_dates if not tools.exclude_calendar_date(ctx, d)]
        LOGGER.info(
            "Kept %d/%d calendars and %d/%d calendar dates.",
            len(kept_calendars),
            len(calendars),
            len(kept_dates),
            len(calendar_dates),
        )

        g_routes = [GRoute.from_row(r) for r in _records(data, "routes")]
        g_trips = [GTrip.from_row(r) for r in _records(data, "trips")]
        kept_trips = [t for t in g_trips if not tools.exclude_trip(ctx, t)]
        LOGGER.info("Kept %d/%d trips.", len(kept_trips), len(g_trips))

        routes = normalize_routes(tools, g_routes)
        trips = normalize_trips(tools, ctx, kept_trips, {r.route_id: r for r in g_routes})
        stops = normalize_stops(tools, [GStop.from_row(r) for r in _records(data, "stops")])

        result = ConversionResult(
            routes=_frame(list(routes.values()), ROUTE_COLUMNS, ["id"]),
            trips=_frame(list(trips.values()), TRIP_COLUMNS, ["route_id", "direction_id"]),
            stops=_frame(list(stops.values()), STOP_COLUMNS, ["id"]),
        )

    result.written = write_outputs(result, config.output_dir, config.files_prefix)
    LOGGER.info(
        "Generating %s bus data... DONE in %.1f s.",
        tools.agency_name,
        time.perf_counter() - start,
    )
    return result


# =============================================================================
# MAIN
# =============================================================================


def _gtfs_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYYMMDD, got {value!r}") from exc


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    p = argparse.ArgumentParser(description="Convert the Barrie Transit GTFS feed.")
    p.add_argument("input", nargs="?", default=DEFAULT_INPUT, help="GTFS zip or folder.")
    p.add_argument(
        "output_dir", nargs="?", default=DEFAULT_OUTPUT_DIR, help="Folder for output files."
    )
    p.add_argument(
        "files_prefix", nargs="?", default=DEFAULT_FILES_PREFIX, help="Output file name prefix."
    )
    p.add_argument(
        "--today",
        type=_gtfs_date,
        default=None,
        help="Reference date YYYYMMDD for useful services (default: today).",
    )
    p.add_argument(
        "--lookahead-days",
        type=int,
        default=USEFUL_SERVICE_LOOKAHEAD_DAYS,
        help="Days after the reference date a service must run to be kept.",
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file.")
    return p


def main(argv: list[str] | None = None) -> int:
    """Entrypoint. Returns the process exit status."""
    args = build_arg_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    cfg = Config(
        input_path=Path(args.input).expanduser(),
        output_dir=Path(args.output_dir).expanduser(),
        files_prefix=args.files_prefix,
        lookahead_days=args.lookahead_days,
    )
    try:
        convert(cfg, today=args.today)
    except (OSError, ValueError, RuntimeError) as exc:
        LOGGER.error("Conversion aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
