"""
Per-group extraction pipeline.

Stages run strictly in order for one group:

    A  text acquisition     one extract_text call per photo
    B  classification       up to two classify calls
    C  structuring          one structure call
    D  enrichment           nutrition estimate, non-fatal
    E  post-processing      batch tags, sanitization, title case

A and the service calls of B to D are the only places that block. A failure
in A affects only that photo; a failure in B or C ends the group with a
Skipped outcome.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Sequence

import structlog

from recipe_scan.errors import RecipeScanError
from recipe_scan.grouping import Group
from recipe_scan.observability.metrics import get_metrics
from recipe_scan.pipeline.outcome import Outcome, Skipped, Success
from recipe_scan.pipeline.sanitize import fix_title_case, sanitize_record
from recipe_scan.preprocessing.encoder import ImageEncoder
from recipe_scan.schema import RecipeRecord

logger = structlog.get_logger(__name__)

NO_TEXT_REASON = "no text could be extracted"
STRUCTURING_FAILED_REASON = "failed to structure recipe data"
DEFAULT_SERVINGS = "4"


@dataclass(frozen=True)
class ClassificationVerdict:
    is_recipe: bool
    reason: str
    pass_number: int


class _StageFailed(Exception):
    """Ends a run early with a Skipped outcome."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ExtractionPipeline:
    """
    Runs one group through stages A to E.

    The pipeline keeps no state between runs, so a single instance can serve
    every worker thread. All intermediate data lives in run() locals.
    """

    def __init__(
        self,
        client,
        encoder: ImageEncoder = None,
        batch_tags: Sequence[str] = ()
    ):
        """
        Args:
            client: RecipeServiceClient (or anything with the same four methods)
            encoder: ImageEncoder for stage A (uses default if not provided)
            batch_tags: Tags appended to every record of the batch
        """
        self.client = client
        self.encoder = encoder or ImageEncoder()
        self.batch_tags = [t.strip() for t in batch_tags if t and t.strip()]

    @contextmanager
    def _stage(self, name: str, log):
        start_time = time.time()
        log.debug("stage_start", stage=name)
        try:
            yield
        finally:
            elapsed = time.time() - start_time
            get_metrics().record_stage(name, elapsed)
            log.debug("stage_complete", stage=name, elapsed_seconds=round(elapsed, 3))

    def run(self, group: Group) -> Outcome:
        """
        Process one group.

        Returns:
            Success with the final record, or Skipped with the reason of the
            first failing stage among A to C
        """
        log = logger.bind(group=group.label)
        metrics = get_metrics()

        try:
            with self._stage("text", log):
                text = self.acquire_text(group, log)
            with self._stage("classify", log):
                verdict = self.classify(text, log)
            if not verdict.is_recipe:
                raise _StageFailed(verdict.reason)
            with self._stage("structure", log):
                record = self.structure(text, log)
            with self._stage("enrich", log):
                self.enrich(record, log)
            with self._stage("finalize", log):
                self.finalize(record)
        except _StageFailed as e:
            log.info("group_skipped", reason=e.reason)
            metrics.record_outcome("skipped")
            return Skipped(group.label, e.reason)

        log.info("group_extracted", title=record.title)
        metrics.record_outcome("success")
        return Success(group.label, record)

    # Stage A

    def acquire_text(self, group: Group, log=None) -> str:
        """Transcribe each photo, skipping any that fail, and join the texts."""
        log = log or logger.bind(group=group.label)
        blocks: List[str] = []

        for item in group.items:
            try:
                image = self.encoder.encode_item(item)
                text = self.client.extract_text(image)
            except RecipeScanError as e:
                log.warning("item_text_failed", item=item.name, error=e.message)
                get_metrics().record_item_skipped()
                continue
            if text and text.strip():
                blocks.append(text.strip())
            else:
                log.info("item_text_empty", item=item.name)
                get_metrics().record_item_skipped()

        combined = "\n".join(blocks)
        if not combined:
            raise _StageFailed(NO_TEXT_REASON)
        log.info("text_acquired", items=len(group), blocks=len(blocks), chars=len(combined))
        return combined

    # Stage B

    def _classify_once(self, text: str, pass_number: int, log) -> ClassificationVerdict:
        try:
            is_recipe, reason = self.client.classify(text, strict=pass_number > 1)
        except RecipeScanError as e:
            log.warning("classification_failed", pass_number=pass_number, error=e.message)
            return ClassificationVerdict(
                False,
                f"classification failed on pass {pass_number}: {e.message}",
                pass_number
            )
        return ClassificationVerdict(is_recipe, reason or "no reason given", pass_number)

    def classify(self, text: str, log=None) -> ClassificationVerdict:
        """
        Two-pass classification.

        A positive first verdict is final. Otherwise a stricter second look
        decides, and its verdict is final whichever way it goes.
        """
        log = log or logger
        verdict = self._classify_once(text, 1, log)
        log.info("classified", pass_number=1, is_recipe=verdict.is_recipe, reason=verdict.reason)
        if verdict.is_recipe:
            return verdict

        verdict = self._classify_once(text, 2, log)
        log.info("classified", pass_number=2, is_recipe=verdict.is_recipe, reason=verdict.reason)
        return verdict

    # Stage C

    def structure(self, text: str, log=None) -> RecipeRecord:
        log = log or logger
        try:
            return self.client.structure(text)
        except RecipeScanError as e:
            log.warning("structuring_failed", error=e.message)
            raise _StageFailed(STRUCTURING_FAILED_REASON)

    # Stage D

    def enrich(self, record: RecipeRecord, log=None) -> bool:
        """
        Overwrite nutrition fields with estimates. Failure leaves the record as is.

        Returns:
            True if estimates were applied
        """
        log = log or logger
        ingredients = record.ingredients.strip()
        if not ingredients:
            log.debug("enrichment_skipped", reason="no ingredients")
            return False

        servings = record.servings.strip() or DEFAULT_SERVINGS
        try:
            values = self.client.estimate_nutrition(ingredients, servings)
        except RecipeScanError as e:
            log.warning("enrichment_failed", error=e.message)
            return False

        for name, value in values.items():
            setattr(record, name, value)
        log.debug("enrichment_applied", fields=sorted(values))
        return True

    # Stage E

    def append_batch_tags(self, record: RecipeRecord):
        if not self.batch_tags:
            return
        existing = record.tags.strip().rstrip(",").strip()
        record.tags = ", ".join([t for t in [existing, ", ".join(self.batch_tags)] if t])

    def finalize(self, record: RecipeRecord) -> RecipeRecord:
        """Append batch tags, sanitize every field, fix all-caps titles."""
        self.append_batch_tags(record)
        sanitize_record(record)
        record.title = fix_title_case(record.title)
        return record
