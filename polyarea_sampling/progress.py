"""
Progress Reporter Module
========================

Concurrent observer of a sampling run.

Design:
- Own daemon thread, read-only on the shared counters
- Fixed interval via Event.wait() so stop() wakes it immediately
- Emitted percentages never decrease
- Always emits a final state before exiting
"""

import sys
import threading
from typing import Callable, Optional, TextIO

from polyarea_sampling.counter import SampleCounters, CounterSnapshot

ProgressCallback = Callable[[int, CounterSnapshot], None]


def percent_complete(checked: int, total_points: int) -> int:
    """Whole percent of samples processed, floor(checked * 100 / total)."""
    return (checked * 100) // total_points


class ConsoleProgress:
    """
    Default progress sink: overwrites one line on a text stream.

    Usage:
        reporter = ProgressReporter(counters, total, on_progress=ConsoleProgress())
    """

    def __init__(self, stream: Optional[TextIO] = None, label: str = "progress"):
        self.stream = stream if stream is not None else sys.stdout
        self.label = label

    def __call__(self, percent: int, snapshot: CounterSnapshot) -> None:
        self.stream.write(f"\r{self.label}: {percent}%")
        self.stream.flush()


class ProgressReporter:
    """
    Periodically reads shared counters and reports percent complete.

    Lifecycle:
        reporter.start()   # spawn observer thread
        ...                # workers run
        reporter.stop()    # wake, emit final state, join

    The reporter exits on its own once it observes checked >= total_points.
    Values may lag behind the workers by up to one batch per worker.
    """

    def __init__(
        self,
        counters: SampleCounters,
        total_points: int,
        interval: float = 1.0,
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Args:
            counters: Shared counters to observe
            total_points: Samples in the run (100%)
            interval: Seconds between reports
            on_progress: Callback(percent, snapshot), ConsoleProgress by default
        """
        self.counters = counters
        self.total_points = total_points
        self.interval = interval
        self.on_progress = on_progress if on_progress is not None else ConsoleProgress()

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_percent = -1

    @property
    def last_percent(self) -> int:
        """Last emitted percentage (-1 before the first report)."""
        return self._last_percent

    def start(self) -> None:
        """Spawn the observer thread."""
        if self._thread is not None:
            raise RuntimeError("ProgressReporter already started")

        self._thread = threading.Thread(
            target=self._run, name="progress-reporter", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Request a final report and wait for the observer thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        while True:
            stopped = self._stop_event.wait(self.interval)
            snapshot = self.counters.snapshot()
            self._emit(snapshot)

            if stopped or snapshot.checked >= self.total_points:
                break

    def _emit(self, snapshot: CounterSnapshot) -> None:
        percent = max(percent_complete(snapshot.checked, self.total_points), self._last_percent)
        self._last_percent = percent
        self.on_progress(percent, snapshot)
