"""Observability module - logging and metrics."""

from recipe_scan.observability.logging import batch_context, setup_logging
from recipe_scan.observability.metrics import get_metrics, PipelineMetrics

__all__ = ["batch_context", "setup_logging", "get_metrics", "PipelineMetrics"]
