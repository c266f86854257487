"""
Environment Config Provider - Load configuration from environment variables.

Supports, in increasing precedence:
- .env files
- Environment variables (GITHUB_TOKEN, ISSUE_BODY, AWS_PROFILE, ...)
- Command line argument overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

from ...core.domain.enums import AIProvider
from ...core.exceptions import ConfigurationError
from ...core.ports.config_provider import (
    ConfigProviderPort,
    AppConfig,
    TrackerConfig,
    SupportConfig,
    AIConfig,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_STATE_FILE,
)


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables and .env files.
    """

    ENV_MAPPING = {
        "GITHUB_TOKEN": "github_token",
        "GITHUB_REPOSITORY": "repository",
        "GITHUB_API_URL": "github_api_url",
        "ISSUE_BODY": "issue_body",
        "ISSUE_NUMBER": "issue_number",
        "COMMENT_BODY": "comment_body",
        "CASE_ID": "case_id",
        "AI_PROVIDER": "ai_provider",
        "AI_MODEL": "ai_model",
        "AWS_PROFILE": "profile",
        "AWS_SHARED_CREDENTIALS_FILE": "credentials_file",
        "MOCK_MODE": "mock_mode",
        "CASE_STATE_FILE": "state_file",
        "ISSUE2CASE_VERBOSE": "verbose",
    }

    # Used when AI_API_KEY is unset; only the selected provider's key is read
    PROVIDER_KEY_VARIABLES = {
        AIProvider.OPENAI: "OPENAI_API_KEY",
        AIProvider.CLAUDE: "ANTHROPIC_API_KEY",
    }

    def __init__(
        self,
        env_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
        environ: Optional[dict[str, str]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            cli_overrides: Command line argument overrides
            environ: Environment mapping (defaults to os.environ)
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._cli_overrides = cli_overrides or {}
        self._environ = os.environ if environ is None else environ

        # Load configuration
        self._load_env_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        tracker = TrackerConfig(
            token=self.get("github_token", ""),
            repository=self.get("repository", ""),
            api_url=self.get("github_api_url", "https://api.github.com"),
        )

        support = SupportConfig(
            profile=self.get("profile", "default"),
            credentials_path=Path(self.get("credentials_file", DEFAULT_CREDENTIALS_FILE)).expanduser(),
            mock_mode=self._as_bool(self.get("mock_mode", False)),
        )

        ai = AIConfig(
            provider=self._ai_provider(),
            api_key=self._ai_api_key(),
            model=self.get("ai_model"),
        )

        return AppConfig(
            tracker=tracker,
            support=support,
            ai=ai,
            state_file=Path(self.get("state_file", DEFAULT_STATE_FILE)),
            issue_body=self.get("issue_body"),
            issue_number=self._issue_number(),
            comment_body=self.get("comment_body"),
            case_id=self.get("case_id"),
            verbose=self._as_bool(self.get("verbose", False)),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        # Normalize key; CLI overrides were already folded into _values
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self, command: str) -> list[str]:
        """Validate the configuration a command needs."""
        errors = []

        if command == "create":
            if not self.get("issue_body"):
                errors.append("Missing ISSUE_BODY - set in environment or pass --issue-body")
            if not self.get("issue_number"):
                errors.append("Missing ISSUE_NUMBER - set in environment or pass --issue-number")

        elif command == "reply":
            if not self.get("comment_body"):
                errors.append("Missing COMMENT_BODY - set in environment or pass --comment-body")
            if not self.get("case_id") and not self.get("issue_number"):
                errors.append("Missing CASE_ID - set CASE_ID, or ISSUE_NUMBER to look it up")

        elif command == "generate":
            for key, env_name in (
                ("issue_body", "ISSUE_BODY"),
                ("issue_number", "ISSUE_NUMBER"),
                ("repository", "GITHUB_REPOSITORY"),
                ("github_token", "GITHUB_TOKEN"),
            ):
                if not self.get(key):
                    errors.append(f"Missing {env_name} - set in environment or .env file")
            try:
                if not self._ai_api_key():
                    fallback = self.PROVIDER_KEY_VARIABLES[self._ai_provider()]
                    errors.append(f"Missing AI_API_KEY (or {fallback})")
            except ConfigurationError:
                pass  # reported by the provider check below

        issue_number = self.get("issue_number")
        if issue_number and not str(issue_number).isdigit():
            errors.append(f"ISSUE_NUMBER must be a number, got '{issue_number}'")

        try:
            self._ai_provider()
        except ConfigurationError as e:
            errors.append(str(e))

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        file_values: dict[str, str] = {}
        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            # Parse key=value
            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            file_values[key.strip().upper()] = value.strip().strip('"').strip("'")

        self._load_mapping(file_values)

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file:
            return self._env_file if self._env_file.exists() else None

        # Check current directory
        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        self._load_mapping(self._environ)

    def _load_mapping(self, source: Any) -> None:
        for env_key, config_key in self.ENV_MAPPING.items():
            raw_value = source.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value

        for env_key in ("AI_API_KEY", *self.PROVIDER_KEY_VARIABLES.values()):
            raw_value = source.get(env_key)
            if raw_value:
                self._values[env_key.lower()] = raw_value

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        # Map CLI args to config keys
        cli_mapping = {
            "issue_body": "issue_body",
            "issue_number": "issue_number",
            "comment_body": "comment_body",
            "case_id": "case_id",
            "repository": "repository",
            "profile": "profile",
            "credentials_file": "credentials_file",
            "state_file": "state_file",
            "provider": "ai_provider",
            "mock": "mock_mode",
            "verbose": "verbose",
        }

        for cli_key, config_key in cli_mapping.items():
            value = self._cli_overrides.get(cli_key)
            # store_true flags left unset must not clobber the environment
            if value is None or value is False:
                continue
            self._values[config_key] = value

    def _ai_provider(self) -> AIProvider:
        raw = str(self.get("ai_provider", AIProvider.OPENAI.value)).lower()
        try:
            return AIProvider(raw)
        except ValueError:
            choices = ", ".join(p.value for p in AIProvider)
            raise ConfigurationError(f"Unsupported provider: {raw} (expected one of {choices})")

    def _ai_api_key(self) -> str:
        explicit = self.get("ai_api_key")
        if explicit:
            return explicit
        env_key = self.PROVIDER_KEY_VARIABLES[self._ai_provider()]
        return self.get(env_key, "")

    def _issue_number(self) -> Optional[int]:
        value = self.get("issue_number")
        if value in (None, ""):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"ISSUE_NUMBER must be a number, got '{value}'")

    @staticmethod
    def _as_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "1", "yes")
