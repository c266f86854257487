"""
Credential Resolver - Load support-service credentials from a local file.

Reads the AWS shared-credentials format:

    [default]
    aws_access_key_id = AKIA...
    aws_secret_access_key = ...
    aws_session_token = ...      (optional)

Keys may be written with or without the ``aws_`` prefix.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...core.exceptions import ConfigurationError


ACCESS_KEY_ID = "access_key_id"
SECRET_ACCESS_KEY = "secret_access_key"
SESSION_TOKEN = "session_token"


@dataclass(frozen=True)
class Credentials:
    """Access credentials for one profile. Held in memory only."""

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: Optional[str] = field(default=None, repr=False)


def _normalize_key(key: str) -> str:
    key = key.strip().lower()
    if key.startswith("aws_"):
        key = key[len("aws_"):]
    return key


def parse_profiles(content: str) -> dict[str, dict[str, str]]:
    """
    Parse credentials text into ``{profile: {key: value}}``.

    Profiles keep file order. Lines before the first profile header are
    ignored.
    """
    profiles: dict[str, dict[str, str]] = {}
    current: Optional[str] = None

    for line in content.splitlines():
        line = line.strip()

        # Skip empty lines and comments
        if not line or line.startswith(("#", ";")):
            continue

        if line.startswith("[") and line.endswith("]"):
            current = line[1:-1].strip()
            profiles.setdefault(current, {})
            continue

        if current is None or "=" not in line:
            continue

        key, value = line.split("=", 1)
        profiles[current][_normalize_key(key)] = value.strip()

    return profiles


def parse_credentials(content: str, profile: str) -> Optional[Credentials]:
    """Extract one profile's credentials, or None if it is incomplete."""
    values = parse_profiles(content).get(profile, {})

    if not values.get(ACCESS_KEY_ID) or not values.get(SECRET_ACCESS_KEY):
        return None

    return Credentials(
        access_key_id=values[ACCESS_KEY_ID],
        secret_access_key=values[SECRET_ACCESS_KEY],
        session_token=values.get(SESSION_TOKEN) or None,
    )


class CredentialResolver:
    """
    Resolves credentials for a named profile from a credentials file.
    """

    def __init__(self, path: Path, profile: str = "default"):
        self.path = Path(path).expanduser()
        self.profile = profile
        self.logger = logging.getLogger("CredentialResolver")

    def resolve(self) -> Credentials:
        """
        Load and parse the credentials for the configured profile.

        Raises:
            ConfigurationError: If the file is missing, or the profile lacks
                an access key id or secret (the message lists every profile
                found in the file)
        """
        if not self.path.exists():
            raise ConfigurationError(
                f"Credentials file not found: {self.path}\n"
                "Configure it with: aws configure"
            )

        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read credentials file {self.path}: {e}", cause=e)

        credentials = parse_credentials(content, self.profile)
        if credentials is None:
            available = list(parse_profiles(content))
            raise ConfigurationError(
                f"Profile '{self.profile}' not found or incomplete in {self.path}\n"
                f"Available profiles: {', '.join(available) if available else '(none)'}"
            )

        self.logger.debug(f"Loaded credentials for profile '{self.profile}'")
        return credentials
