"""
Prometheus metrics for monitoring.
"""

import threading
from functools import lru_cache
from prometheus_client import Counter, Histogram, Gauge, Info

from recipe_scan import __version__


class PipelineMetrics:
    """Recipe extraction pipeline metrics."""

    def __init__(self):
        # Service metrics
        self.service_calls_total = Counter(
            "recipe_scan_service_calls_total",
            "Total AI service calls",
            ["operation", "status"]
        )

        self.service_retries_total = Counter(
            "recipe_scan_service_retries_total",
            "Retried AI service calls",
            ["operation", "reason"]
        )

        # Pipeline metrics
        self.groups_total = Counter(
            "recipe_scan_groups_total",
            "Groups that reached a terminal outcome",
            ["outcome"]
        )

        self.stage_duration = Histogram(
            "recipe_scan_stage_duration_seconds",
            "Pipeline stage duration",
            ["stage"],
            buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0)
        )

        self.items_skipped = Counter(
            "recipe_scan_items_skipped_total",
            "Input items that yielded no text"
        )

        # System metrics
        self.active_pipelines = Gauge(
            "recipe_scan_active_pipelines",
            "Currently running group pipelines"
        )

        # Info
        self.info = Info(
            "recipe_scan",
            "Recipe scan pipeline information"
        )
        self.info.info({
            "version": __version__,
            "service": "gemini"
        })

    def record_call(self, operation: str, status: str):
        """Record one service call attempt."""
        self.service_calls_total.labels(operation=operation, status=status).inc()

    def record_retry(self, operation: str, reason: str):
        """Record a retried call."""
        self.service_retries_total.labels(operation=operation, reason=reason).inc()

    def record_outcome(self, outcome: str):
        """Record a group's terminal outcome."""
        self.groups_total.labels(outcome=outcome).inc()

    def record_stage(self, stage: str, duration: float):
        """Record how long a pipeline stage took."""
        self.stage_duration.labels(stage=stage).observe(duration)

    def record_item_skipped(self):
        self.items_skipped.inc()


_metrics_lock = threading.Lock()


@lru_cache()
def _build_metrics() -> PipelineMetrics:
    return PipelineMetrics()


def get_metrics() -> PipelineMetrics:
    """
    Get singleton metrics instance.

    Collectors register with the global registry on construction, so the
    first build is serialised across threads.
    """
    with _metrics_lock:
        return _build_metrics()
