"""
Configuration Adapters - Load configuration and credentials from local sources.
"""

from .environment import EnvironmentConfigProvider
from .credentials import CredentialResolver, Credentials, parse_credentials, parse_profiles

__all__ = [
    "EnvironmentConfigProvider",
    "CredentialResolver",
    "Credentials",
    "parse_credentials",
    "parse_profiles",
]
