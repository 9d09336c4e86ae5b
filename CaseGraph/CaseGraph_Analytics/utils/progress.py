"""
Progress reporting for long-running graph computations.

Betweenness, bridge search, the force simulation and annealing wrap their
main loop in a :class:`ProgressTracker`. Start and completion go to INFO,
intermediate steps to DEBUG.
"""

import logging
import time
from typing import Optional

from .math import format_time_duration


class ProgressTracker:
    """
    Context manager reporting how far a bounded loop has come.

    Args:
        total: Number of work units (node pairs, links, ticks)
        title: Description used in every message
        logger: Logger to report through, defaults to this module's logger
        report_every: Share of ``total`` between two DEBUG progress messages

    Attributes:
        current: Work units completed so far
        elapsed: Seconds spent inside the ``with`` block, set on exit
    """

    def __init__(
        self,
        total: int,
        title: str = "Processing",
        logger: Optional[logging.Logger] = None,
        report_every: float = 0.1,
    ):
        self.total = total
        self.title = title
        self.logger = logger or logging.getLogger(__name__)
        self.current = 0
        self.elapsed: Optional[float] = None
        self._step = max(1, int(total * report_every))
        self._started = 0.0

    def __enter__(self) -> "ProgressTracker":
        self._started = time.perf_counter()
        self.logger.info(f"Starting {self.title}...")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.elapsed = time.perf_counter() - self._started
        if exc_type is not None:
            self.logger.debug(
                f"{self.title} aborted at {self.current}/{self.total} ({exc_type.__name__})"
            )
            return
        self.logger.info(f"Completed {self.title} in {format_time_duration(self.elapsed)}")

    @property
    def fraction(self) -> float:
        """Completed share of the work, 1.0 for an empty loop."""
        if self.total <= 0:
            return 1.0
        return self.current / self.total

    def update(self, current: int) -> None:
        """Record that ``current`` units are done."""
        self.current = current
        if self.total > 0 and current % self._step == 0:
            self.logger.debug(f"{self.title}: {self.fraction:.0%} ({current}/{self.total})")


__all__ = ["ProgressTracker"]
