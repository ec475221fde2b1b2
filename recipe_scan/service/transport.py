"""
HTTP transport for the Gemini generateContent REST endpoint.
"""

import base64
import structlog
import requests

from recipe_scan.config import get_settings
from recipe_scan.errors import ConfigurationError, TransportError
from recipe_scan.service.types import ServiceRequest, ServiceResponse

logger = structlog.get_logger(__name__)


class GeminiTransport:
    """
    Sends ServiceRequests to Gemini and returns the raw status and JSON body.

    No retrying happens here; status codes are passed through untouched and
    only failures that never produced a response raise TransportError.
    """

    TEMPERATURE = 0.1

    def __init__(self, config=None):
        """
        Args:
            config: Settings instance (uses default if not provided)
        """
        self.settings = config or get_settings()
        if not self.settings.gemini_api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY is not set. Add it to the environment or a .env file."
            )

    def _url(self, model: str) -> str:
        return f"{self.settings.service_base_url.rstrip('/')}/models/{model}:generateContent"

    @staticmethod
    def build_body(request: ServiceRequest) -> dict:
        """Translate a ServiceRequest into a generateContent request body."""
        payload = request.payload
        parts = [{"text": payload.prompt}]
        if payload.image is not None:
            parts.append({
                "inline_data": {
                    "mime_type": payload.image.mime_type,
                    "data": base64.b64encode(payload.image.data).decode("ascii"),
                }
            })

        generation_config = {"temperature": GeminiTransport.TEMPERATURE}
        if payload.wants_json:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = payload.response_schema

        return {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": generation_config,
        }

    def send(self, request: ServiceRequest) -> ServiceResponse:
        """
        Make one HTTP call.

        Raises:
            TransportError: On connection failures and timeouts
        """
        headers = {
            "x-goog-api-key": self.settings.gemini_api_key,
            "Content-Type": "application/json",
        }

        logger.debug(
            "service_request",
            operation=request.operation.value,
            model=request.model_hint,
            has_image=request.payload.image is not None
        )

        try:
            response = requests.post(
                self._url(request.model_hint),
                headers=headers,
                json=self.build_body(request),
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.warning(
                "service_transport_error",
                operation=request.operation.value,
                error=str(e),
                error_type=type(e).__name__
            )
            raise TransportError(f"{type(e).__name__}: {e}")

        try:
            body = response.json()
        except ValueError:
            body = None

        logger.debug(
            "service_response",
            operation=request.operation.value,
            status_code=response.status_code
        )
        return ServiceResponse(status_code=response.status_code, body=body)
