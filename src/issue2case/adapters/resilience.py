"""
Resilience - Bounded exponential backoff for rate-limited calls.

One policy serves every upstream API. What differs per API is only how a
rate-limit is recognized and where the provider's wait hint lives, so both
are injected as functions.

Default policy: up to 3 retries after the first attempt, waiting the
provider's hint when it gives one, else 1s, 2s, 4s. Worst case is ~7s of
waiting before the last error surfaces.
"""

import logging
import time
from typing import Callable, Optional, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
)

from ..core.exceptions import RateLimitError


T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0


def is_rate_limit_error(exc: BaseException) -> bool:
    """Default rate-limit predicate."""
    return isinstance(exc, RateLimitError)


def retry_after_hint(exc: BaseException) -> Optional[float]:
    """Default wait-hint extractor: the provider's Retry-After, if any."""
    return getattr(exc, "retry_after", None)


class RetryingRequestExecutor:
    """
    Executes operations, retrying them while they signal rate-limiting.

    Errors that are not rate-limits propagate immediately. When retries run
    out, the last rate-limit error is re-raised with ``attempts`` set.

    Usage:
        executor = RetryingRequestExecutor()
        data = executor.execute(lambda: client.post(url, json=payload))
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        is_rate_limited: Callable[[BaseException], bool] = is_rate_limit_error,
        wait_hint: Callable[[BaseException], Optional[float]] = retry_after_hint,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the executor.

        Args:
            max_retries: Retries allowed after the first attempt
            base_delay: First backoff delay in seconds, doubled per attempt
            is_rate_limited: Predicate deciding whether an error is retryable
            wait_hint: Extracts a provider-specified wait (seconds) from an error
            sleep: Sleep function (injectable for tests)
        """
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")

        self.max_retries = max_retries
        self.base_delay = base_delay
        self._is_rate_limited = is_rate_limited
        self._wait_hint = wait_hint
        self._sleep = sleep
        self.logger = logging.getLogger("RetryingRequestExecutor")

    def execute(
        self,
        operation: Callable[[], T],
        wait_hint: Optional[float] = None,
        description: str = "request",
    ) -> T:
        """
        Run ``operation`` under the retry policy.

        Args:
            operation: Zero-argument callable performing one attempt
            wait_hint: Wait (seconds) to use when the error carries none
            description: Label used in log messages

        Returns:
            The result of the first successful attempt
        """
        attempts = 0

        def attempt() -> T:
            nonlocal attempts
            attempts += 1
            return operation()

        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=lambda state: self._compute_wait(state, wait_hint),
            retry=retry_if_exception(self._is_rate_limited),
            before_sleep=lambda state: self._log_retry(state, description),
            sleep=self._sleep,
            reraise=True,
        )

        try:
            return retrying(attempt)
        except Exception as e:
            if self._is_rate_limited(e):
                if isinstance(e, RateLimitError):
                    e.attempts = attempts
                self.logger.error(
                    f"Giving up on {description} after {attempts} attempt(s): "
                    f"status={getattr(e, 'status_code', None)} "
                    f"type={getattr(e, 'error_type', None)}"
                )
            raise

    def backoff_delay(self, attempt_number: int) -> float:
        """Exponential delay after the given (1-based) failed attempt."""
        return self.base_delay * (2 ** (attempt_number - 1))

    def _compute_wait(self, state: RetryCallState, explicit_hint: Optional[float]) -> float:
        exc = state.outcome.exception() if state.outcome else None
        hint = self._wait_hint(exc) if exc is not None else None
        if hint is None:
            hint = explicit_hint
        if hint is not None:
            return max(float(hint), 0.0)
        return self.backoff_delay(state.attempt_number)

    def _log_retry(self, state: RetryCallState, description: str) -> None:
        exc = state.outcome.exception() if state.outcome else None
        delay = state.next_action.sleep if state.next_action else 0.0
        self.logger.warning(
            f"Rate limit hit for {description}. Retrying after {delay:.1f}s "
            f"(attempt {state.attempt_number}/{self.max_retries}): {exc}"
        )
