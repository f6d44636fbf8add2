"""Fatal errors raised by the Barrie Transit decision functions.

Every error aborts the conversion run. The offending GTFS row travels with the
exception (``.row``) so the caller can report it.
"""

from __future__ import annotations

from typing import Any


class AgencyToolsError(ValueError):
    """Base class for every fatal agency decision failure."""

    def __init__(self, message: str, row: Any = None) -> None:
        self.row = row
        if row is not None:
            message = f"{message} (row: {row!r})"
        super().__init__(message)


class InvalidRouteName(AgencyToolsError):
    """Route short name has no digit run."""


class UnexpectedRouteSuffix(AgencyToolsError):
    """Lettered route short name with a suffix outside A, B, C, D."""


class UnexpectedHeadsign(AgencyToolsError):
    """Route 11 trip headsign outside the known terminal table."""


class InconsistentDirection(AgencyToolsError):
    """Route 11 direction slots cannot satisfy the complement rule."""


class InvalidDirection(AgencyToolsError):
    """Feed ``direction_id`` needed but not ``0`` or ``1``."""


class MissingRouteColor(AgencyToolsError):
    """No feed color and no fallback color for the route."""


class UnknownStopPrefix(AgencyToolsError):
    """Stop code neither all digits nor an accepted prefix form."""


class UnmergeableHeadsigns(AgencyToolsError):
    """Headsign pair outside the merge tables."""


class UnmergeableRouteLongNames(AgencyToolsError):
    """Route long names share no common prefix."""
