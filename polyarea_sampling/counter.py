"""
Sample Counter Module
=====================

Shared accumulator for sampling progress.

Design:
- Mutable state (checked, inside) behind a single lock
- Paired commit: both counters move together in one critical section
- Immutable snapshots (CounterSnapshot), never torn
"""

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class CounterSnapshot:
    """
    Immutable (checked, inside) pair read from SampleCounters.

    Design:
    - Frozen dataclass (thread-safe read)
    - Value object (no identity)
    """

    checked: int = 0
    inside: int = 0

    @property
    def outside(self) -> int:
        return self.checked - self.inside

    @property
    def inside_ratio(self) -> float:
        """Fraction of checked samples classified inside (0.0 before any sample)."""
        if self.checked == 0:
            return 0.0
        return self.inside / self.checked

    def __str__(self) -> str:
        return f"checked={self.checked}, inside={self.inside}"


class SampleCounters:
    """
    Thread-safe counters shared by all sampling workers.

    Workers accumulate locally and commit whole batches with add(); the
    progress reporter and the estimator read consistent pairs with
    snapshot().

    Invariant (at every snapshot):
        0 <= inside <= checked <= total_points

    Usage:
        counters = SampleCounters(total_points=10_000)

        # Worker thread
        counters.add(checked=1024, inside=251)

        # Observer thread
        snapshot = counters.snapshot()
    """

    def __init__(self, total_points: int):
        """
        Args:
            total_points: Upper bound for checked
        """
        self.total_points = total_points
        self._checked = 0
        self._inside = 0
        self._lock = threading.Lock()

    def add(self, checked: int, inside: int) -> None:
        """
        Commit a batch of classified samples.

        Args:
            checked: Samples classified in the batch
            inside: Samples of the batch classified inside

        Raises:
            ValueError: If the batch would break the counter invariant
        """
        if checked < 0 or not 0 <= inside <= checked:
            raise ValueError(
                f"Invalid batch: checked={checked}, inside={inside}"
            )

        with self._lock:
            if self._checked + checked > self.total_points:
                raise ValueError(
                    f"Batch of {checked} would exceed total_points="
                    f"{self.total_points} (checked={self._checked})"
                )
            self._checked += checked
            self._inside += inside

    def snapshot(self) -> CounterSnapshot:
        """Get an immutable, consistent (checked, inside) pair."""
        with self._lock:
            return CounterSnapshot(checked=self._checked, inside=self._inside)

    @property
    def checked(self) -> int:
        return self.snapshot().checked

    @property
    def inside(self) -> int:
        return self.snapshot().inside

    @property
    def complete(self) -> bool:
        return self.checked >= self.total_points

    def __repr__(self) -> str:
        return f"SampleCounters({self.snapshot()}, total_points={self.total_points})"
