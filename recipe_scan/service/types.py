"""
Request and response types at the AI service boundary.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from recipe_scan.preprocessing.encoder import EncodedImage


class OperationKind(str, Enum):
    TEXT_EXTRACTION = "text_extraction"
    CLASSIFICATION = "classification"
    STRUCTURING = "structuring"
    ENRICHMENT = "enrichment"


@dataclass(frozen=True)
class RequestPayload:
    """What the model is asked: a prompt, optionally an image and an output schema."""
    prompt: str
    image: Optional[EncodedImage] = None
    response_schema: Optional[dict] = None

    @property
    def wants_json(self) -> bool:
        return self.response_schema is not None


@dataclass(frozen=True)
class ServiceRequest:
    operation: OperationKind
    model_hint: str
    payload: RequestPayload


@dataclass
class ServiceResponse:
    status_code: int
    body: Any = field(default=None)
