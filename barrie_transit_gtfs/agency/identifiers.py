"""Stable numeric ids from Barrie Transit route short names and stop codes.

Route variants (``3A``, ``3B``) collapse onto the id of their digit prefix.
Stop codes are either plain digits or one of the prefixed forms listed in
``STOP_PREFIX_OFFSETS``.
"""

from __future__ import annotations

import re
from typing import Any

from barrie_transit_gtfs.agency.errors import InvalidRouteName, UnknownStopPrefix

# =============================================================================
# CONFIGURATION
# =============================================================================

# Stop-code prefix -> id offset added to the trailing digits.
STOP_PREFIX_OFFSETS: dict[str, int] = {
    "AG ": 100_000,
}

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

DIGITS_RE = re.compile(r"[0-9]+")

# =============================================================================
# FUNCTIONS
# =============================================================================


def route_canonical_short_name(short_name: str, row: Any = None) -> str:
    """Return the first run of digits in *short_name* (``"100B"`` -> ``"100"``)."""
    match = DIGITS_RE.search(short_name)
    if match is None:
        raise InvalidRouteName(f"Unexpected route short name {short_name!r}", row)
    return match.group()


def route_numeric_id(short_name: str, row: Any = None) -> int:
    """Return the numeric route id shared by every variant of a route."""
    if DIGITS_RE.fullmatch(short_name):
        return int(short_name)
    return int(route_canonical_short_name(short_name, row))


def stop_numeric_id(stop_code: str, row: Any = None) -> int:
    """Return the stop id for *stop_code*.

    ``"247"`` -> 247, ``"AG 12"`` -> 100012. Anything else raises
    :class:`UnknownStopPrefix`.
    """
    stop_code = stop_code.strip()
    if DIGITS_RE.fullmatch(stop_code):
        return int(stop_code)
    for prefix, offset in STOP_PREFIX_OFFSETS.items():
        digits = stop_code[len(prefix):]
        if stop_code.startswith(prefix) and DIGITS_RE.fullmatch(digits):
            return offset + int(digits)
    raise UnknownStopPrefix(f"Unexpected stop code {stop_code!r}", row)
