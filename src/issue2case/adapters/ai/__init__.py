"""
AI Adapters - TextGeneratorPort implementations.
"""

from typing import Optional

from ...core.domain.enums import AIProvider
from ...core.exceptions import ConfigurationError
from ...core.ports.config_provider import AIConfig
from ...core.ports.text_generator import TextGeneratorPort
from ..resilience import RetryingRequestExecutor
from .anthropic import ClaudeGenerator
from .openai import OpenAIGenerator


GENERATORS = {
    AIProvider.OPENAI: OpenAIGenerator,
    AIProvider.CLAUDE: ClaudeGenerator,
}


def create_text_generator(
    config: AIConfig,
    executor: Optional[RetryingRequestExecutor] = None,
) -> TextGeneratorPort:
    """Build the generator for the configured provider."""
    try:
        generator_cls = GENERATORS[AIProvider(config.provider)]
    except ValueError:
        raise ConfigurationError(f"Unsupported provider: {config.provider}")
    return generator_cls(api_key=config.api_key, model=config.model, executor=executor)


__all__ = [
    "OpenAIGenerator",
    "ClaudeGenerator",
    "create_text_generator",
]
