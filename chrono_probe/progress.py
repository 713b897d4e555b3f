"""Progress reporting for long running builds and measurements.

Observers are plain callables receiving a :class:`ProgressEvent`. They are
always invoked between timing loops, never inside one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    """One progress notification.

    Fields:
        stage: ``"build"`` while generating inputs, ``"measure"`` while timing.
        label: Algorithm name for ``"measure"``, input type name for ``"build"``.
        done: Completed groups so far.
        total: Number of groups in this stage.
    """

    stage: str
    label: str
    done: int
    total: int

    @property
    def percent(self) -> float:
        return 100.0 * self.done / self.total if self.total else 100.0


ProgressObserver = Callable[[ProgressEvent], None]


def no_progress(event: ProgressEvent) -> None:
    """Default observer: ignore every event."""


def is_checkpoint(done: int, total: int) -> bool:
    """True roughly every 10% of ``total`` and on the last step."""
    return done == total or done % max(1, total // 10) == 0


def log_progress(logger: logging.Logger, event: ProgressEvent) -> None:
    logger.info(
        "%s %s: %d/%d (%.0f%%)",
        event.stage,
        event.label,
        event.done,
        event.total,
        event.percent,
    )
