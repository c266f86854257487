"""
Claude Generator - Anthropic Messages API.
"""

from typing import Any

from ...core.ports.text_generator import TextGenerationError
from .base import HttpTextGenerator


class ClaudeGenerator(HttpTextGenerator):
    """TextGeneratorPort backed by the Anthropic Messages API."""

    ENDPOINT = "https://api.anthropic.com/v1/messages"
    DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
    API_VERSION = "2023-06-01"

    @property
    def name(self) -> str:
        return "claude"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.API_VERSION,
        }

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }

    def _extract_text(self, data: dict[str, Any]) -> str:
        try:
            return data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise TextGenerationError("Unexpected Claude response shape", provider=self.name, cause=e)
