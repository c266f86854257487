"""Tests for the JSON file state store."""

import json

import pytest
from unittest.mock import patch

from issue2case.adapters.state import JsonFileStateStore
from issue2case.core.domain.entities import Case, Communication, Snapshot


@pytest.fixture
def snapshot():
    case = Case(
        case_id="case-1",
        display_id="CASE-1",
        subject="Broken",
        status="opened",
        time_created="2025-01-01T00:00:00.000Z",
        recent_communications=[
            Communication("hi", "2025-01-01T00:05:00.000Z", "AWS Support"),
        ],
    )
    return Snapshot(case=case, issue_number=42)


class TestJsonFileStateStore:
    """Tests for JsonFileStateStore."""

    @pytest.fixture
    def path(self, tmp_path):
        return tmp_path / "state" / ".aws-case-state.json"

    @pytest.fixture
    def store(self, path):
        return JsonFileStateStore(path)

    def test_missing_file_is_empty(self, store):
        assert store.load_all() == {}

    def test_round_trip_keeps_issue_number(self, store, snapshot):
        store.save_all({snapshot.case_id: snapshot})

        loaded = store.load_all()

        assert loaded == {"case-1": snapshot}
        assert loaded["case-1"].issue_number == 42

    def test_file_format(self, store, path, snapshot):
        store.save_all({snapshot.case_id: snapshot})

        records = json.loads(path.read_text(encoding="utf-8"))

        assert isinstance(records, list)
        assert records[0]["caseId"] == "case-1"
        assert records[0]["issueNumber"] == 42
        assert records[0]["recentCommunications"]["communications"][0]["timeCreated"] == (
            "2025-01-01T00:05:00.000Z"
        )

    def test_reads_flat_communications(self, store, path):
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps([{
            "caseId": "case-9",
            "status": "resolved",
            "recentCommunications": [{"body": "b", "timeCreated": "t1"}],
        }]), encoding="utf-8")

        loaded = store.load_all()

        assert loaded["case-9"].case.communication_times() == {"t1"}
        assert loaded["case-9"].issue_number is None

    @pytest.mark.parametrize("content", [
        "{not json",
        '{"caseId": "x"}',
        '[{"status": "opened"}]',
    ])
    def test_corrupt_file_is_empty(self, store, path, content, caplog):
        path.parent.mkdir(parents=True)
        path.write_text(content, encoding="utf-8")

        assert store.load_all() == {}
        assert "Failed to load state" in caplog.text

    def test_save_replaces_contents(self, store, snapshot):
        store.save_all({snapshot.case_id: snapshot})
        store.save_all({})

        assert store.load_all() == {}

    def test_failed_save_keeps_previous_contents(self, store, path, snapshot):
        store.save_all({snapshot.case_id: snapshot})
        before = path.read_text(encoding="utf-8")

        with patch("issue2case.adapters.state.json_file.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                store.save_all({})

        assert path.read_text(encoding="utf-8") == before
        assert list(path.parent.iterdir()) == [path]
