"""End-to-end batch run: groups in, aggregated result out."""

from typing import Optional, Sequence

from recipe_scan.grouping import Group
from recipe_scan.pipeline.aggregator import BatchResult, aggregate
from recipe_scan.pipeline.extraction import ExtractionPipeline
from recipe_scan.pipeline.throttler import ProgressCallback, Throttler


def run_batch(
    groups: Sequence[Group],
    pipeline: ExtractionPipeline,
    concurrency: int,
    on_progress: Optional[ProgressCallback] = None
) -> BatchResult:
    """Run every group through the pipeline and aggregate the outcomes."""
    throttler = Throttler(concurrency)
    outcomes = throttler.run(groups, pipeline.run, on_progress=on_progress)
    return aggregate(outcomes)
