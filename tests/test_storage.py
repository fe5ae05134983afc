"""
Unit tests for ipupdater/storage

Tests the observed state file and the bounded history log, including
corruption handling and atomic replacement.
"""

import json

import pytest
from unittest.mock import patch


def _entry(i, sent=True, reason=None):
    from ipupdater.models import HistoryEntry, Reason

    return HistoryEntry(
        timestamp=f"2026-10-19T08:{i // 60:02d}:{i % 60:02d}Z",
        address=f"10.0.0.{i % 250 + 1}",
        notification_sent=sent,
        reason=reason or Reason.ADDRESS_CHANGE,
    )


@pytest.mark.unit
class TestStateStore:
    """Tests for StateStore."""

    def test_absent_file_reads_as_none(self, data_dir):
        from ipupdater.storage import StateStore

        assert StateStore(data_dir / "state.json").read() is None

    def test_write_then_read(self, data_dir):
        from ipupdater.models import ObservedState
        from ipupdater.storage import StateStore

        store = StateStore(data_dir / "state.json")
        store.write(ObservedState(address="192.168.1.100", observed_at="2026-10-19T08:30:00Z"))

        assert store.read() == ObservedState(
            address="192.168.1.100", observed_at="2026-10-19T08:30:00Z"
        )

    def test_file_format(self, data_dir):
        from ipupdater.models import ObservedState
        from ipupdater.storage import StateStore

        path = data_dir / "state.json"
        StateStore(path).write(ObservedState(address="10.1.2.3", observed_at="2026-10-19T08:30:00Z"))

        assert json.loads(path.read_text()) == {
            "address": "10.1.2.3",
            "observedAt": "2026-10-19T08:30:00Z",
        }

    def test_write_creates_directory(self, tmp_path):
        from ipupdater.models import ObservedState
        from ipupdater.storage import StateStore

        path = tmp_path / "missing" / "nested" / "state.json"
        StateStore(path).write(ObservedState(address="10.1.2.3", observed_at="t"))

        assert path.exists()

    @pytest.mark.parametrize(
        "content",
        [
            "not json at all",
            "",
            "[]",
            '{"observedAt": "2026-10-19T08:30:00Z"}',
            '{"address": 42, "observedAt": "2026-10-19T08:30:00Z"}',
        ],
    )
    def test_corrupt_file_reads_as_none(self, data_dir, content):
        from ipupdater.storage import StateStore

        path = data_dir / "state.json"
        path.write_text(content)

        assert StateStore(path).read() is None

    def test_failed_write_keeps_previous_file(self, data_dir):
        from ipupdater.errors import StorageError
        from ipupdater.models import ObservedState
        from ipupdater.storage import StateStore

        path = data_dir / "state.json"
        store = StateStore(path)
        store.write(ObservedState(address="10.0.0.1", observed_at="t1"))
        before = path.read_bytes()

        with patch("ipupdater.utils.files.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError):
                store.write(ObservedState(address="10.0.0.2", observed_at="t2"))

        assert path.read_bytes() == before
        assert [p.name for p in data_dir.iterdir()] == ["state.json"]


@pytest.mark.unit
class TestHistoryLog:
    """Tests for HistoryLog."""

    def test_absent_file_reads_as_empty(self, data_dir):
        from ipupdater.storage import HistoryLog

        assert HistoryLog(data_dir / "history.json").read() == []

    def test_append_creates_log(self, data_dir):
        from ipupdater.storage import HistoryLog

        path = data_dir / "history.json"
        HistoryLog(path).append(_entry(1))

        data = json.loads(path.read_text())
        assert data == {
            "entries": [
                {
                    "timestamp": "2026-10-19T08:00:01Z",
                    "address": "10.0.0.2",
                    "notificationSent": True,
                    "reason": "address_change",
                }
            ]
        }

    def test_entries_are_oldest_first(self, data_dir):
        from ipupdater.storage import HistoryLog

        log = HistoryLog(data_dir / "history.json")
        for i in range(3):
            log.append(_entry(i))

        assert [e.timestamp for e in log.read()] == [_entry(i).timestamp for i in range(3)]

    def test_101st_entry_evicts_oldest(self, data_dir):
        from ipupdater.storage import HistoryLog

        log = HistoryLog(data_dir / "history.json")
        for i in range(100):
            log.append(_entry(i))
        assert len(log.read()) == 100

        log.append(_entry(100))

        entries = log.read()
        assert len(entries) == 100
        assert entries[0] == _entry(1)
        assert entries[-1] == _entry(100)
        assert entries == [_entry(i) for i in range(1, 101)]

    def test_custom_limit(self, data_dir):
        from ipupdater.storage import HistoryLog

        log = HistoryLog(data_dir / "history.json", limit=2)
        for i in range(5):
            log.append(_entry(i))

        assert log.read() == [_entry(3), _entry(4)]

    @pytest.mark.parametrize(
        "content",
        [
            "{{{",
            '{"entries": "nope"}',
            '{"entries": [{"timestamp": 1}]}',
            "[]",
        ],
    )
    def test_corrupt_log_is_replaced(self, data_dir, content):
        from ipupdater.storage import HistoryLog

        path = data_dir / "history.json"
        path.write_text(content)
        log = HistoryLog(path)

        assert log.read() == []
        log.append(_entry(7))
        assert log.read() == [_entry(7)]

    def test_unknown_reason_reads_as_unknown(self, data_dir):
        from ipupdater.models import Reason
        from ipupdater.storage import HistoryLog

        path = data_dir / "history.json"
        path.write_text(
            json.dumps(
                {
                    "entries": [
                        {
                            "timestamp": "2025-01-01T00:00:00Z",
                            "address": "10.0.0.1",
                            "notificationSent": False,
                            "reason": "ssid_change",
                        }
                    ]
                }
            )
        )

        (entry,) = HistoryLog(path).read()
        assert entry.reason is Reason.UNKNOWN
        assert entry.notification_sent is False

    def test_write_failure_raises_storage_error(self, data_dir):
        from ipupdater.errors import StorageError
        from ipupdater.storage import HistoryLog

        log = HistoryLog(data_dir / "history.json")

        with patch("ipupdater.utils.files.os.replace", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError):
                log.append(_entry(1))
