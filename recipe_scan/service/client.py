"""
Recipe service client: the four AI operations used by the pipeline.
"""

import time
from typing import Dict, Tuple
import structlog

from recipe_scan.config import get_settings
from recipe_scan.errors.retry import ResilientInvoker
from recipe_scan.preprocessing.encoder import EncodedImage
from recipe_scan.schema import RecipeRecord
from recipe_scan.service import prompts
from recipe_scan.service.response_parser import (
    parse_json_object,
    parse_nutrition,
    parse_record,
    parse_verdict,
    response_text,
)
from recipe_scan.service.transport import GeminiTransport
from recipe_scan.service.types import OperationKind, RequestPayload, ServiceRequest

logger = structlog.get_logger(__name__)


class RecipeServiceClient:
    """
    High-level client for the generative AI service.

    Every call goes through a ResilientInvoker. Failures surface as
    RecipeScanError subclasses: the invoker's ClientError or
    RetriesExhaustedError, ResponseParseError for unparseable output and
    SchemaError for output of the wrong shape.

    The client holds no per-call state and is safe to share between threads.
    """

    def __init__(self, invoker: ResilientInvoker, config=None):
        """
        Args:
            invoker: ResilientInvoker wrapping the transport
            config: Settings instance (uses default if not provided)
        """
        self.invoker = invoker
        self.settings = config or get_settings()

    @classmethod
    def from_settings(cls, settings=None) -> "RecipeServiceClient":
        """Build a client with the Gemini transport and configured retry policy."""
        settings = settings or get_settings()
        invoker = ResilientInvoker(GeminiTransport(settings), config=settings.retry)
        return cls(invoker, config=settings)

    def _call(self, operation: OperationKind, model: str, payload: RequestPayload) -> str:
        start_time = time.time()
        result = self.invoker.invoke(ServiceRequest(operation, model, payload))
        body = result.unwrap()
        text = response_text(body)
        logger.debug(
            "service_call_complete",
            operation=operation.value,
            attempts=result.attempts,
            elapsed_seconds=round(time.time() - start_time, 3),
            text_length=len(text)
        )
        return text

    def _call_json(self, operation: OperationKind, payload: RequestPayload) -> dict:
        return parse_json_object(self._call(operation, self.settings.reasoning_model, payload))

    def extract_text(self, image: EncodedImage) -> str:
        """Transcribe the text in one photo."""
        payload = RequestPayload(prompt=prompts.TEXT_EXTRACTION_PROMPT, image=image)
        return self._call(OperationKind.TEXT_EXTRACTION, self.settings.text_model, payload).strip()

    def classify(self, text: str, strict: bool = False) -> Tuple[bool, str]:
        """
        Ask whether text is a recipe.

        Args:
            text: Combined transcription of a group
            strict: Use the second-look variant of the question

        Returns:
            (is_recipe, reason)
        """
        payload = RequestPayload(
            prompt=prompts.classification_prompt(text, strict=strict),
            response_schema=prompts.VERDICT_SCHEMA
        )
        return parse_verdict(self._call_json(OperationKind.CLASSIFICATION, payload))

    def structure(self, text: str) -> RecipeRecord:
        """Turn a transcription into a RecipeRecord."""
        payload = RequestPayload(
            prompt=prompts.structuring_prompt(text),
            response_schema=prompts.RECORD_SCHEMA
        )
        return parse_record(self._call_json(OperationKind.STRUCTURING, payload))

    def estimate_nutrition(self, ingredients: str, servings: str) -> Dict[str, str]:
        """Estimate per-serving nutrition values, keyed by nutrition field name."""
        payload = RequestPayload(
            prompt=prompts.enrichment_prompt(ingredients, servings),
            response_schema=prompts.NUTRITION_SCHEMA
        )
        return parse_nutrition(self._call_json(OperationKind.ENRICHMENT, payload))
