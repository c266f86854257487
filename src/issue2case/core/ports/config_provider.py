"""
Config Provider Port - Abstract interface for configuration sources.

The resulting AppConfig is built once at the entry point and passed to
every component; nothing else reads the environment.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..domain.enums import AIProvider


DEFAULT_STATE_FILE = ".aws-case-state.json"
DEFAULT_CREDENTIALS_FILE = Path.home() / ".aws" / "credentials"


@dataclass
class TrackerConfig:
    """Issue tracker connection settings."""

    token: str = ""
    repository: str = ""  # owner/repo
    api_url: str = "https://api.github.com"

    @property
    def configured(self) -> bool:
        return bool(self.token and self.repository)


@dataclass
class SupportConfig:
    """Support service settings."""

    profile: str = "default"
    credentials_path: Path = field(default_factory=lambda: DEFAULT_CREDENTIALS_FILE)
    region: str = "us-east-1"  # the support API only exists here
    mock_mode: bool = False


@dataclass
class AIConfig:
    """AI provider settings for drafting support requests."""

    provider: AIProvider = AIProvider.OPENAI
    api_key: str = ""
    model: Optional[str] = None


@dataclass
class AppConfig:
    """Complete application configuration for one invocation."""

    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    support: SupportConfig = field(default_factory=SupportConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    state_file: Path = field(default_factory=lambda: Path(DEFAULT_STATE_FILE))

    # Per-invocation inputs
    issue_body: Optional[str] = None
    issue_number: Optional[int] = None
    comment_body: Optional[str] = None
    case_id: Optional[str] = None

    verbose: bool = False


class ConfigProviderPort(ABC):
    """Abstract interface for configuration providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        ...

    @abstractmethod
    def validate(self, command: str) -> list[str]:
        """
        Validate the configuration required by a command.

        Returns:
            List of human-readable error messages (empty if valid)
        """
        ...
