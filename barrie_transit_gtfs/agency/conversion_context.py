"""Per-run state threaded through the Barrie Transit decision functions."""

from __future__ import annotations

from dataclasses import dataclass

UNSET = -1


@dataclass
class ConversionContext:
    """State for one conversion run.

    Attributes:
        useful_service_ids: ``service_id`` values worth keeping, computed by
            the host from the calendars. ``None`` means no calendar data, so
            nothing is excluded.
        pk_pl_id: Direction bound to the route 11 "Pk Pl" / "Allandale Rec"
            terminals, or ``UNSET``.
        priscillas_place_id: Direction bound to the route 11
            "Priscillas Pl" / "Lockhart" terminals, or ``UNSET``.
    """

    useful_service_ids: frozenset[str] | None = None
    pk_pl_id: int = UNSET
    priscillas_place_id: int = UNSET
