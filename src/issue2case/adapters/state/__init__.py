"""
State Adapters - StateStorePort implementations.
"""

from .json_file import JsonFileStateStore

__all__ = ["JsonFileStateStore"]
