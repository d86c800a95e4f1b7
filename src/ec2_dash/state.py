from __future__ import annotations

from enum import Enum


class DashboardMode(Enum):
    TABLE = "table"
    MODAL = "modal"
    TERMINATED = "terminated"


class DashboardEvent(Enum):
    OUTCOME = "outcome"
    ACKNOWLEDGE = "acknowledge"
    QUIT = "quit"


_TRANSITIONS = {
    (DashboardMode.TABLE, DashboardEvent.OUTCOME): DashboardMode.MODAL,
    (DashboardMode.TABLE, DashboardEvent.QUIT): DashboardMode.TERMINATED,
    (DashboardMode.MODAL, DashboardEvent.ACKNOWLEDGE): DashboardMode.TABLE,
}


def transition(mode: DashboardMode, event: DashboardEvent) -> DashboardMode:
    """Return the next mode; events that do not apply leave the mode unchanged."""
    return _TRANSITIONS.get((mode, event), mode)
