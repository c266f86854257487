"""
OpenAI Generator - Chat Completions API.
"""

from typing import Any

from ...core.ports.text_generator import TextGenerationError
from .base import HttpTextGenerator


class OpenAIGenerator(HttpTextGenerator):
    """TextGeneratorPort backed by OpenAI chat completions."""

    ENDPOINT = "https://api.openai.com/v1/chat/completions"
    DEFAULT_MODEL = "gpt-4"
    SYSTEM_PROMPT = "You are an expert at writing AWS Support inquiries."

    @property
    def name(self) -> str:
        return "openai"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": 0.7,
            "max_tokens": self.MAX_TOKENS,
        }

    def _extract_text(self, data: dict[str, Any]) -> str:
        try:
            return data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise TextGenerationError("Unexpected OpenAI response shape", provider=self.name, cause=e)
