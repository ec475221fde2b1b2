"""Group extraction pipeline, scheduling and aggregation."""

from recipe_scan.pipeline.aggregator import BatchResult, SkipEntry, aggregate
from recipe_scan.pipeline.extraction import ClassificationVerdict, ExtractionPipeline
from recipe_scan.pipeline.outcome import Outcome, Skipped, Success
from recipe_scan.pipeline.sanitize import fix_title_case, sanitize, sanitize_record
from recipe_scan.pipeline.throttler import Throttler

__all__ = [
    "BatchResult",
    "SkipEntry",
    "aggregate",
    "ClassificationVerdict",
    "ExtractionPipeline",
    "Outcome",
    "Skipped",
    "Success",
    "fix_title_case",
    "sanitize",
    "sanitize_record",
    "Throttler",
]
