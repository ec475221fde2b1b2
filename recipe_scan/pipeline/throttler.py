"""
Bounded-concurrency execution of group pipelines.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple
import structlog

from recipe_scan.grouping import Group
from recipe_scan.observability.metrics import PipelineMetrics, get_metrics
from recipe_scan.pipeline.outcome import Outcome, Skipped

logger = structlog.get_logger(__name__)

DEFAULT_CONCURRENCY = 5

ProgressCallback = Callable[[int, int], None]


def _crash_outcome(group: Group, error: BaseException) -> Skipped:
    return Skipped(group.label, f"unexpected error: {type(error).__name__}: {error}")


class Throttler:
    """
    Runs one worker call per group with at most `limit` running at once.

    Submission is gated by a bounded semaphore, so the launch loop blocks
    while `limit` runs are in flight. Every group produces exactly one
    Outcome; a worker that raises is reported as Skipped.
    """

    def __init__(self, limit: int = DEFAULT_CONCURRENCY):
        if limit < 1:
            raise ValueError("Concurrency limit must be at least 1")
        self.limit = limit
        self._lock = threading.Lock()
        self._completed = 0
        self._total = 0

    @property
    def progress(self) -> Tuple[int, int]:
        """(completed, total) for the current or last run."""
        with self._lock:
            return self._completed, self._total

    def _guarded(
        self,
        metrics: PipelineMetrics,
        worker: Callable[[Group], Outcome],
        group: Group
    ) -> Outcome:
        metrics.active_pipelines.inc()
        try:
            return worker(group)
        except Exception as e:
            logger.exception("pipeline_crashed", group=group.label, error=str(e))
            metrics.record_outcome("crashed")
            return _crash_outcome(group, e)
        finally:
            metrics.active_pipelines.dec()

    def run(
        self,
        groups: Sequence[Group],
        worker: Callable[[Group], Outcome],
        on_progress: Optional[ProgressCallback] = None
    ) -> List[Outcome]:
        """
        Run worker(group) for every group.

        Args:
            groups: Groups to process
            worker: Callable producing an Outcome, usually ExtractionPipeline.run
            on_progress: Called with (completed, total) after each completion,
                from the thread that finished the run

        Returns:
            One Outcome per group, in completion order
        """
        total = len(groups)
        with self._lock:
            self._completed = 0
            self._total = total

        if total == 0:
            return []

        # Collectors must be registered before the first worker starts
        metrics = get_metrics()
        gate = threading.BoundedSemaphore(self.limit)
        outcomes: List[Outcome] = []

        def finish(group: Group, future: Future):
            gate.release()
            try:
                outcome = future.result()
            except BaseException as e:
                outcome = _crash_outcome(group, e)
            with self._lock:
                outcomes.append(outcome)
                self._completed += 1
                completed = self._completed
            if on_progress is not None:
                on_progress(completed, total)

        logger.info("batch_started", groups=total, concurrency=self.limit)

        with ThreadPoolExecutor(max_workers=self.limit, thread_name_prefix="pipeline") as executor:
            for group in groups:
                gate.acquire()
                future = executor.submit(self._guarded, metrics, worker, group)
                future.add_done_callback(partial(finish, group))

        logger.info("batch_finished", groups=total, outcomes=len(outcomes))
        return outcomes
