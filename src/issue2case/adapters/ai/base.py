"""
HTTP Text Generator - Shared request handling for AI provider adapters.
"""

import logging
from typing import Any, Optional

import requests

from ...core.exceptions import ConfigurationError, RateLimitError
from ...core.ports.text_generator import TextGeneratorPort, TextGenerationError
from ..resilience import RetryingRequestExecutor


class HttpTextGenerator(TextGeneratorPort):
    """
    Base class for providers reached over a JSON HTTP API.

    Subclasses define the endpoint, headers, payload and how to read the
    completion out of the response.
    """

    ENDPOINT = ""
    DEFAULT_MODEL = ""
    MAX_TOKENS = 2000

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        executor: Optional[RetryingRequestExecutor] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 120.0,
    ):
        if not api_key:
            raise ConfigurationError(f"Missing API key for {self.name}")

        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.executor = executor or RetryingRequestExecutor()
        self.timeout = timeout
        self._session = session or requests.Session()
        self.logger = logging.getLogger(self.__class__.__name__)

    def generate(self, prompt: str) -> str:
        payload = self._build_payload(prompt)

        def send() -> str:
            data = self._post(payload)
            return self._extract_text(data)

        return self.executor.execute(send, description=f"{self.name} completion")

    # -------------------------------------------------------------------------
    # Provider-specific hooks
    # -------------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        raise NotImplementedError

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        raise NotImplementedError

    def _extract_text(self, data: dict[str, Any]) -> str:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._session.post(
                self.ENDPOINT,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TextGenerationError(f"{self.name} request failed: {e}", provider=self.name, cause=e)

        if response.status_code == 429:
            error = self._error_details(self._json_or_none(response))
            raise RateLimitError(
                error.get("message") or f"{self.name} rate limit exceeded",
                retry_after=self._retry_after(response),
                status_code=429,
                error_type=error.get("type") or "rate_limit_error",
                provider=self.name,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TextGenerationError(
                f"{self.name} returned a non-JSON response ({response.status_code})",
                status_code=response.status_code,
                provider=self.name,
                cause=e,
            )

        error = self._error_details(data)
        if error or not response.ok:
            raise TextGenerationError(
                error.get("message") or f"{self.name} API error",
                status_code=response.status_code,
                error_type=error.get("type"),
                provider=self.name,
            )

        return data

    @staticmethod
    def _json_or_none(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_details(data: Any) -> dict[str, Any]:
        """Normalise the "error" member; proxies sometimes send a bare string."""
        if not isinstance(data, dict):
            return {}
        error = data.get("error")
        if not error:
            return {}
        if isinstance(error, dict):
            return error
        return {"message": str(error)}

    @staticmethod
    def _retry_after(response: requests.Response) -> Optional[float]:
        value = response.headers.get("retry-after")
        try:
            return float(value) if value else None
        except ValueError:
            return None
