"""
State Store Port - Persistence of the last-observed case snapshots.

The interface is deliberately narrow (load everything, save everything) so
the backing store can change without touching the change detector.
"""

from abc import ABC, abstractmethod

from ..domain.entities import Snapshot


class StateStorePort(ABC):
    """Load-all / save-all store of case snapshots, keyed by case id."""

    @abstractmethod
    def load_all(self) -> dict[str, Snapshot]:
        """
        Load every known snapshot.

        A missing or unreadable store yields an empty mapping; it never
        raises.
        """
        ...

    @abstractmethod
    def save_all(self, snapshots: dict[str, Snapshot]) -> None:
        """
        Replace the stored snapshots.

        Must be atomic: a failed save leaves the previous contents intact.
        """
        ...
