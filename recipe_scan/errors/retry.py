"""
Resilient service invocation with exponential backoff.
"""

import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional
import structlog

from recipe_scan.config import RetrySettings, get_settings
from recipe_scan.errors import (
    ClientError,
    RateLimitedError,
    RetriesExhaustedError,
    ServiceError,
    TransportError,
)
from recipe_scan.observability.metrics import get_metrics

logger = structlog.get_logger(__name__)

RATE_LIMITED_STATUS = 429


@dataclass
class InvokeResult:
    """Outcome of one invocation: a response body or a typed error."""
    body: Any = None
    error: Optional[ServiceError] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the body, raising the carried error if the call failed."""
        if self.error is not None:
            raise self.error
        return self.body


class ResilientInvoker:
    """
    Wraps a transport with retry and exponential backoff.

    Transport failures and 429 responses are retried, doubling the delay each
    time. Any other error status fails immediately. Call failures are never
    raised from invoke(); they come back inside the InvokeResult.
    """

    def __init__(
        self,
        transport,
        config: RetrySettings = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            transport: Object with send(request) -> response(status_code, body)
            config: RetrySettings instance (uses default if not provided)
            sleep: Sleep function, replaceable in tests
        """
        self.transport = transport
        self.settings = config or get_settings().retry
        self._sleep = sleep

    def _next_delay(self, delay: float) -> float:
        return min(delay * self.settings.exponential_base, self.settings.max_delay)

    def _jittered(self, delay: float) -> float:
        if self.settings.jitter:
            return delay * (0.5 + random.random())
        return delay

    def invoke(self, request) -> InvokeResult:
        """
        Send a request, retrying transient failures.

        Args:
            request: ServiceRequest to send

        Returns:
            InvokeResult with the response body, or with ClientError,
            RetriesExhaustedError or another ServiceError
        """
        metrics = get_metrics()
        operation = request.operation.value
        max_attempts = max(1, self.settings.max_attempts)
        delay = self.settings.initial_delay
        last_error: Optional[ServiceError] = None

        for attempt in range(1, max_attempts + 1):
            try:
                response = self.transport.send(request)
            except TransportError as e:
                last_error = e
                reason = "transport"
            except ServiceError as e:
                metrics.record_call(operation, "error")
                return InvokeResult(error=e, attempts=attempt)
            except Exception as e:
                logger.error(
                    "service_call_unexpected_error",
                    operation=operation,
                    error=str(e),
                    error_type=type(e).__name__
                )
                metrics.record_call(operation, "error")
                return InvokeResult(
                    error=ServiceError(f"Unexpected error: {type(e).__name__}: {e}"),
                    attempts=attempt
                )
            else:
                status = response.status_code
                metrics.record_call(operation, str(status))

                if 200 <= status < 300:
                    return InvokeResult(body=response.body, attempts=attempt)

                if status != RATE_LIMITED_STATUS:
                    logger.error(
                        "service_call_failed",
                        operation=operation,
                        status_code=status,
                        attempt=attempt
                    )
                    return InvokeResult(
                        error=ClientError(status, details={"body": response.body}),
                        attempts=attempt
                    )

                last_error = RateLimitedError()
                reason = "rate_limited"

            if attempt == max_attempts:
                break

            wait = self._jittered(delay)
            metrics.record_retry(operation, reason)
            logger.warning(
                "retry_attempt",
                operation=operation,
                attempt=attempt,
                max_attempts=max_attempts,
                delay=wait,
                reason=reason,
                error=str(last_error)
            )
            self._sleep(wait)
            delay = self._next_delay(delay)

        logger.error(
            "retry_exhausted",
            operation=operation,
            attempts=max_attempts,
            error=str(last_error)
        )
        return InvokeResult(
            error=RetriesExhaustedError(max_attempts, last_error),
            attempts=max_attempts
        )
