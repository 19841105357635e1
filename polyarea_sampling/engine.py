"""
Sampling Engine - concurrent Monte Carlo sampling over a polygon.

This module provides the SamplingEngine class which partitions the random
samples of a run across worker threads, classifies them with the geometry
kernel and aggregates the results in shared counters.

Threading Model:
- N Worker Threads (one per share, CPU-bound, independent random streams)
- Progress Reporter Thread (read-only observer, optional)
- Caller Thread (spawns, joins, returns final counters)

Thread Safety:
- polygon / ray caster: immutable, shared without locking
- counters: SampleCounters, one lock around each paired batch commit
- random generators: one per worker, never shared
- cancel / abort: threading.Event checked between batches
"""

import threading
import time
from typing import List, Optional, Tuple

import numpy as np

from polyarea_geometry import Point, Polygon, RayCaster
from polyarea_sampling.config import RunConfig, InvalidConfig
from polyarea_sampling.counter import SampleCounters, CounterSnapshot
from polyarea_sampling.progress import ProgressReporter, ProgressCallback
from polyarea_sampling.logging import StructuredLogger, LogEvent, create_logger


class SamplingCancelled(RuntimeError):
    """Raised by run() when cancel() stopped the workers early."""

    def __init__(self, snapshot: CounterSnapshot, total_points: int):
        super().__init__(
            f"Sampling cancelled after {snapshot.checked} of {total_points} samples"
        )
        self.snapshot = snapshot


def partition_points(total_points: int, worker_count: int) -> List[int]:
    """
    Split total_points into one share per worker.

    Every worker gets total_points // worker_count; the remainder goes to the
    last worker.
    """
    share, remainder = divmod(total_points, worker_count)
    shares = [share] * worker_count
    shares[-1] += remainder
    return shares


def spawn_generators(worker_count: int, seed: Optional[int] = None) -> List[np.random.Generator]:
    """Independent random streams, one per worker, from a single seed."""
    seed_sequence = np.random.SeedSequence(seed)
    return [np.random.default_rng(child) for child in seed_sequence.spawn(worker_count)]


def _as_polygon(polygon) -> Polygon:
    if isinstance(polygon, Polygon):
        return polygon
    return Polygon.from_points(polygon)


class SamplingEngine:
    """
    Runs one Monte Carlo sampling run at a time.

    Workers draw batches of uniform points inside the sampling domain,
    classify them into local accumulators, and commit each batch to the
    shared counters in a single critical section.

    Usage:
        config = RunConfig(total_points=1_000_000, worker_count=4, seed=42)
        engine = SamplingEngine(config)

        snapshot = engine.run(polygon)  # blocks until every worker joins
        area = estimate(snapshot, config)
    """

    def __init__(
        self,
        config: RunConfig,
        on_progress: Optional[ProgressCallback] = None,
        report_progress: bool = True,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            config: Validated run configuration
            on_progress: Progress callback (ConsoleProgress when None)
            report_progress: Run a ProgressReporter alongside the workers
            logger: Structured logger (component "engine" by default)
        """
        if not isinstance(config, RunConfig):
            raise InvalidConfig(
                f"config must be a RunConfig, got {type(config).__name__}"
            )

        self.config = config
        self.on_progress = on_progress
        self.report_progress = report_progress
        self.logger = logger or create_logger("engine")

        self._cancel_event = threading.Event()
        self._abort_event = threading.Event()
        self._errors: List[Tuple[int, BaseException]] = []
        self._errors_lock = threading.Lock()

    def cancel(self) -> None:
        """Stop the run in progress; workers exit after their current batch."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(self, polygon) -> CounterSnapshot:
        """
        Classify config.total_points random samples against polygon.

        Args:
            polygon: Polygon, or sequence of (x, y) vertices

        Returns:
            Final counters, checked == total_points

        Raises:
            InvalidPolygon: Fewer than 3 vertices (before any thread starts)
            InvalidConfig: Ray end point does not clear the polygon
            SamplingCancelled: cancel() was called during the run
            Exception: First exception raised by a worker
        """
        polygon = _as_polygon(polygon)
        config = self.config

        try:
            caster = RayCaster.for_polygon(polygon, config.domain.x_max, config.ray_extreme_x)
        except ValueError as e:
            raise InvalidConfig(str(e)) from e

        if not config.domain.contains_polygon(polygon):
            self.logger.warning(
                event=LogEvent.DOMAIN_MISMATCH,
                message="Polygon extends beyond the sampling domain",
                metadata={'polygon_bounds': polygon.bounds, 'domain': config.domain.bounds}
            )

        self._cancel_event.clear()
        self._abort_event.clear()
        self._errors = []

        counters = SampleCounters(config.total_points)
        shares = partition_points(config.total_points, config.worker_count)
        generators = spawn_generators(config.worker_count, config.seed)

        reporter = None
        if self.report_progress:
            reporter = ProgressReporter(
                counters,
                config.total_points,
                interval=config.progress_interval,
                on_progress=self.on_progress,
            )

        workers = [
            threading.Thread(
                target=self._worker,
                args=(worker_id, share, rng, caster, counters),
                name=f"sampling-worker-{worker_id}",
            )
            for worker_id, (share, rng) in enumerate(zip(shares, generators))
        ]

        self.logger.info(
            event=LogEvent.RUN_STARTED,
            message="Sampling started",
            metadata={
                'total_points': config.total_points,
                'workers': config.worker_count,
                'vertices': len(polygon),
                'domain': config.domain.bounds,
                'ray_extreme_x': caster.extreme_x,
            }
        )

        started = time.perf_counter()
        if reporter is not None:
            reporter.start()
        try:
            for worker in workers:
                worker.start()
            for worker in workers:
                worker.join()
        finally:
            self._abort_event.set()
            if reporter is not None:
                reporter.stop()

        elapsed = time.perf_counter() - started
        snapshot = counters.snapshot()

        if self._errors:
            worker_id, error = self._errors[0]
            self.logger.error(
                event=LogEvent.WORKER_FAILED,
                message=f"Sampling worker {worker_id} failed",
                metadata={'failed_workers': len(self._errors), 'checked': snapshot.checked},
                exc_info=error
            )
            raise error

        if snapshot.checked < config.total_points:
            self.logger.warning(
                event=LogEvent.RUN_CANCELLED,
                message="Sampling cancelled",
                metadata={'checked': snapshot.checked, 'total_points': config.total_points}
            )
            raise SamplingCancelled(snapshot, config.total_points)

        self.logger.info(
            event=LogEvent.RUN_COMPLETED,
            message="Sampling finished",
            metadata={
                'checked': snapshot.checked,
                'inside': snapshot.inside,
                'inside_ratio': round(snapshot.inside_ratio, 6),
                'elapsed_s': round(elapsed, 3),
            }
        )
        return snapshot

    def _worker(
        self,
        worker_id: int,
        share: int,
        rng: np.random.Generator,
        caster: RayCaster,
        counters: SampleCounters,
    ) -> None:
        domain = self.config.domain
        batch_size = self.config.batch_size

        try:
            done = 0
            while done < share:
                if self._cancel_event.is_set() or self._abort_event.is_set():
                    return

                n = min(batch_size, share - done)
                xs = rng.uniform(domain.x_min, domain.x_max, n)
                ys = rng.uniform(domain.y_min, domain.y_max, n)

                inside = 0
                for x, y in zip(xs.tolist(), ys.tolist()):
                    if caster.contains(Point(x, y)):
                        inside += 1

                counters.add(checked=n, inside=inside)
                done += n

            self.logger.debug(
                event=LogEvent.WORKER_FINISHED,
                message=f"Worker {worker_id} finished",
                metadata={'worker_id': worker_id, 'share': share}
            )
        except Exception as e:
            with self._errors_lock:
                self._errors.append((worker_id, e))
            self._abort_event.set()


def run(
    polygon,
    config: RunConfig,
    on_progress: Optional[ProgressCallback] = None,
    report_progress: bool = True,
) -> CounterSnapshot:
    """Run one sampling run with a fresh SamplingEngine."""
    engine = SamplingEngine(config, on_progress=on_progress, report_progress=report_progress)
    return engine.run(polygon)
