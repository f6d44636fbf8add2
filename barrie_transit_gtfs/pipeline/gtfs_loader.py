"""Load the GTFS tables a conversion run needs, from a zip or a folder."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import IO, Callable, Sequence

import pandas as pd

# =============================================================================
# CONFIGURATION
# =============================================================================

REQUIRED_FILES: tuple[str, ...] = (
    "routes.txt",
    "trips.txt",
    "stops.txt",
)

OPTIONAL_FILES: tuple[str, ...] = (
    "calendar.txt",
    "calendar_dates.txt",
)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "routes": {"route_id", "route_short_name"},
    "trips": {"trip_id", "route_id", "service_id"},
    "stops": {"stop_id", "stop_code", "stop_name"},
    "calendar": {
        "service_id",
        "monday",
        "tuesday",
        "wednesday",
        "thursday",
        "friday",
        "saturday",
        "sunday",
        "start_date",
        "end_date",
    },
    "calendar_dates": {"service_id", "date", "exception_type"},
}

LOGGER = logging.getLogger(__name__)

# =============================================================================
# FUNCTIONS
# =============================================================================


def _read_table(opener: Callable[[], IO[bytes]], file_name: str, source: Path) -> pd.DataFrame:
    """Read one GTFS table with every column as ``str`` (keeps leading zeros)."""
    try:
        with opener() as fh:
            df = pd.read_csv(fh, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except pd.errors.EmptyDataError as exc:
        raise ValueError(f"File '{file_name}' in '{source}' is empty.") from exc
    except pd.errors.ParserError as exc:
        raise ValueError(f"Parser error in '{file_name}' in '{source}': {exc}") from exc
    except OSError as exc:
        raise RuntimeError(f"OS error reading file '{file_name}' in '{source}': {exc}") from exc
    LOGGER.info("Loaded %-20s | %6d rows", file_name, len(df))
    return df


def _validate_columns(dfs: dict[str, pd.DataFrame]) -> None:
    """Raise ``ValueError`` if any required GTFS column is missing."""
    missing_msgs: list[str] = []
    for tbl, df in dfs.items():
        missing = REQUIRED_COLUMNS.get(tbl, set()) - set(df.columns)
        if missing:
            missing_msgs.append(f"{tbl}.txt → missing {', '.join(sorted(missing))}")
    if missing_msgs:
        joined = "\n".join(" • " + msg for msg in missing_msgs)
        raise ValueError(f"GTFS validation failed – required columns not found:\n{joined}")


def load_gtfs_feed(
    gtfs_path: Path,
    required: Sequence[str] = REQUIRED_FILES,
    optional: Sequence[str] = OPTIONAL_FILES,
) -> dict[str, pd.DataFrame]:
    """Load a GTFS feed from a ``.zip`` archive or an unpacked folder.

    Args:
        gtfs_path: Feed zip or folder.
        required: Files that must be present.
        optional: Files loaded when present and otherwise skipped.

    Returns:
        Mapping of file stem → DataFrame, e.g. ``data["trips"]``.

    Raises:
        OSError: Path missing, or one of *required* absent.
        ValueError: Empty or unparseable file, missing required columns, or a
            path that is neither a folder nor a zip.
        RuntimeError: Generic OS error while reading a file.
    """
    if not gtfs_path.exists():
        raise OSError(f"The GTFS path '{gtfs_path}' does not exist.")

    data: dict[str, pd.DataFrame] = {}
    wanted = list(required) + list(optional)

    if gtfs_path.is_dir():
        present = {name for name in wanted if (gtfs_path / name).is_file()}
        missing = [name for name in required if name not in present]
        if missing:
            raise OSError(f"Missing GTFS files in '{gtfs_path}': {', '.join(missing)}")
        for name in wanted:
            if name in present:
                data[Path(name).stem] = _read_table(
                    lambda name=name: (gtfs_path / name).open("rb"), name, gtfs_path
                )

    elif gtfs_path.suffix.lower() == ".zip":
        LOGGER.info("Reading GTFS zip %s", gtfs_path)
        with zipfile.ZipFile(gtfs_path, "r") as zf:
            # Some feeds nest the tables in a sub-folder of the archive.
            members = {Path(info.filename).name: info.filename for info in zf.infolist()}
            missing = [name for name in required if name not in members]
            if missing:
                raise OSError(f"Missing GTFS files in '{gtfs_path}': {', '.join(missing)}")
            for name in wanted:
                if name in members:
                    data[Path(name).stem] = _read_table(
                        lambda member=members[name]: zf.open(member), name, gtfs_path
                    )

    else:
        raise ValueError("GTFS path must be a folder or a .zip file.")

    _validate_columns(data)
    return data
