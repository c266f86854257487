"""
JSON File State Store - Persist case snapshots in a flat JSON file.

The file holds the full array of known case records (a snapshot, not a
delta). Each record is the case as the support API describes it, plus the
``issueNumber`` it was created from.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from ...core.domain.entities import Snapshot
from ...core.exceptions import ParseError
from ...core.ports.state_store import StateStorePort


class JsonFileStateStore(StateStorePort):
    """StateStorePort backed by a single JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.logger = logging.getLogger("JsonFileStateStore")

    def load_all(self) -> dict[str, Snapshot]:
        if not self.path.exists():
            self.logger.debug(f"No state file at {self.path}; starting empty")
            return {}

        try:
            return self._read()
        except ParseError as e:
            # A bad state file costs one run of notifications, not the run
            self.logger.warning(f"Failed to load state: {e}")
            return {}

    def save_all(self, snapshots: dict[str, Snapshot]) -> None:
        records = [snapshot.to_dict() for snapshot in snapshots.values()]
        payload = json.dumps(records, indent=2, ensure_ascii=False)

        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        # Write next to the target, then rename over it
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=directory,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        self.logger.info(f"Saved {len(records)} case snapshot(s) to {self.path}")

    def _read(self) -> dict[str, Snapshot]:
        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseError(f"{self.path}: {e}", path=str(self.path), cause=e)

        if not isinstance(records, list):
            raise ParseError(
                f"{self.path}: expected a JSON array of cases",
                path=str(self.path),
            )

        snapshots: dict[str, Snapshot] = {}
        for record in records:
            try:
                snapshot = Snapshot.from_dict(record)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise ParseError(f"{self.path}: invalid case record: {e}", path=str(self.path), cause=e)
            snapshots[snapshot.case_id] = snapshot

        return snapshots
