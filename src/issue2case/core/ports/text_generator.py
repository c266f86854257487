"""
Text Generator Port - Abstract interface for AI text generation.
"""

from abc import ABC, abstractmethod

from ..exceptions import UpstreamError


class TextGenerationError(UpstreamError):
    """The AI provider returned an error."""


class TextGeneratorPort(ABC):
    """Generates text from a prompt."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'openai')."""
        ...

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """
        Generate a completion.

        Raises:
            RateLimitError: If throttled after all retries
            TextGenerationError: On any other provider error
        """
        ...
