"""AI service module."""

from recipe_scan.service.client import RecipeServiceClient
from recipe_scan.service.transport import GeminiTransport
from recipe_scan.service.types import OperationKind, RequestPayload, ServiceRequest, ServiceResponse

__all__ = [
    "RecipeServiceClient",
    "GeminiTransport",
    "OperationKind",
    "RequestPayload",
    "ServiceRequest",
    "ServiceResponse",
]
