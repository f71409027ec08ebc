from __future__ import annotations

import json
import os
from datetime import datetime, timedelta, timezone

import pytest

from adapters.json_storage import JSONCounterStore
from core.errors import StorageWriteError
from core.models import MentionRecord


def test_missing_file_loads_absent_record(tmp_path) -> None:
    store = JSONCounterStore(str(tmp_path / "data.json"))
    assert store.load() == MentionRecord()


def test_save_then_load_preserves_instant(tmp_path) -> None:
    store = JSONCounterStore(str(tmp_path / "data.json"))
    instant = datetime(2024, 3, 1, 12, 30, 15, tzinfo=timezone(timedelta(hours=3)))

    store.save(MentionRecord(last_mention=instant))

    loaded = store.load().last_mention
    assert loaded == instant
    assert loaded.utcoffset() == timedelta(0)


def test_saved_file_is_utc_rfc3339(tmp_path) -> None:
    path = tmp_path / "data.json"
    store = JSONCounterStore(str(path))
    store.save(MentionRecord(last_mention=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)))

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == {"last_mention": "2024-03-01T12:00:00+00:00"}


def test_save_overwrites_and_leaves_no_temp_files(tmp_path) -> None:
    path = tmp_path / "data.json"
    store = JSONCounterStore(str(path))
    first = datetime(2024, 1, 1, tzinfo=timezone.utc)
    second = first + timedelta(days=2)

    store.save(MentionRecord(last_mention=first))
    store.save(MentionRecord(last_mention=second))

    assert store.load().last_mention == second
    assert os.listdir(tmp_path) == ["data.json"]


def test_absent_record_round_trips_as_null(tmp_path) -> None:
    path = tmp_path / "data.json"
    store = JSONCounterStore(str(path))
    store.save(MentionRecord())
    assert json.loads(path.read_text(encoding="utf-8")) == {"last_mention": None}
    assert store.load().is_absent


@pytest.mark.parametrize(
    "content",
    [
        "",
        "{not json",
        "[]",
        '{"last_mention": 12345}',
        '{"last_mention": "yesterday"}',
        '{"last_mention": "2024-03-01T12:00:00"}',
        '{"last_mention": "9999-12-31T23:59:59-01:00"}',
    ],
)
def test_corrupt_file_loads_absent_record(tmp_path, caplog, content: str) -> None:
    path = tmp_path / "data.json"
    path.write_text(content, encoding="utf-8")

    with caplog.at_level("WARNING"):
        record = JSONCounterStore(str(path)).load()

    assert record.is_absent
    assert "starting fresh" in caplog.text


def test_zulu_suffix_and_zero_time_are_understood(tmp_path) -> None:
    path = tmp_path / "data.json"
    store = JSONCounterStore(str(path))

    path.write_text('{"last_mention": "2024-03-01T12:00:00Z"}', encoding="utf-8")
    assert store.load().last_mention == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    path.write_text('{"last_mention": "0001-01-01T00:00:00Z"}', encoding="utf-8")
    assert store.load().is_absent


def test_save_failure_raises_and_keeps_previous_value(tmp_path, monkeypatch) -> None:
    path = tmp_path / "data.json"
    store = JSONCounterStore(str(path))
    original = datetime(2024, 1, 1, tzinfo=timezone.utc)
    store.save(MentionRecord(last_mention=original))

    def _fail(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", _fail)
    with pytest.raises(StorageWriteError):
        store.save(MentionRecord(last_mention=original + timedelta(days=1)))
    monkeypatch.undo()

    assert store.load().last_mention == original
    assert os.listdir(tmp_path) == ["data.json"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("2025-01-02T15:04:05.123456789+03:00", datetime(2025, 1, 2, 12, 4, 5, 123456, tzinfo=timezone.utc)),
        ("2025-01-02T15:04:05.5Z", datetime(2025, 1, 2, 15, 4, 5, 500000, tzinfo=timezone.utc)),
    ],
)
def test_go_fractional_seconds_are_understood(tmp_path, raw: str, expected: datetime) -> None:
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"last_mention": raw}), encoding="utf-8")

    assert JSONCounterStore(str(path)).load().last_mention == expected
