"""JSON file storage adapter.

Implements the core CounterStorePort with a single small JSON document:

    {"last_mention": "2024-05-01T12:00:00+00:00"}

Writes go through a temporary file that is fsynced and then renamed over the
target, so a crash leaves either the old document or the new one.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from typing import Optional

from core.errors import StorageReadError, StorageWriteError
from core.models import MentionRecord

LOGGER = logging.getLogger(__name__)

FIELD = "last_mention"

# Older data files stored "never" as the zero time instead of null.
_ZERO_YEAR = 1

_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d\d:\d\d$)")


def _normalize_fraction(value: str) -> str:
    # Go writes 1-9 fractional digits; fromisoformat before 3.11 wants 3 or 6.
    return _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)


def _parse_instant(raw: object) -> Optional[datetime]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise StorageReadError(f"{FIELD} must be a string, got {type(raw).__name__}")
    # fromisoformat only accepts a trailing "Z" from Python 3.11 on.
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(_normalize_fraction(value))
        if parsed.tzinfo is None or parsed.utcoffset() is None:
            raise StorageReadError(f"{FIELD} has no timezone: {raw!r}")
        if parsed.year == _ZERO_YEAR:
            return None
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as exc:
        raise StorageReadError(f"invalid {FIELD} value {raw!r}") from exc


def _fsync_directory(directory: str) -> None:
    # Directory fds are not available everywhere (Windows).
    try:
        fd = os.open(directory, os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError as exc:
        LOGGER.debug("Directory fsync skipped for %s: %s", directory, exc)
    finally:
        os.close(fd)


class JSONCounterStore:
    """File-backed store that satisfies the CounterStorePort contract."""

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def _read(self) -> MentionRecord:
        try:
            with open(self._path, "r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError as exc:
            raise StorageReadError(f"No data file found at {self._path}") from exc
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageReadError(f"Failed to read {self._path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise StorageReadError(f"{self._path} does not hold a JSON object")
        return MentionRecord(last_mention=_parse_instant(payload.get(FIELD)))

    def load(self) -> MentionRecord:
        """Return the stored record, or an absent one if it cannot be read."""

        LOGGER.debug("Loading storage from %s", self._path)
        try:
            record = self._read()
        except StorageReadError as exc:
            LOGGER.warning("%s, starting fresh", exc)
            return MentionRecord()

        if record.last_mention is None:
            LOGGER.debug("Storage loaded: no last mention recorded")
        else:
            LOGGER.debug("Storage loaded: last_mention=%s", record.last_mention.isoformat())
        return record

    def save(self, record: MentionRecord) -> None:
        """Atomically replace the data file with the given record."""

        value = None
        if record.last_mention is not None:
            value = record.last_mention.astimezone(timezone.utc).isoformat()
        LOGGER.debug("Saving storage: last_mention=%s", value)
        data = json.dumps({FIELD: value}, indent=2)

        directory = os.path.dirname(os.path.abspath(self._path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=os.path.basename(self._path) + ".", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
            tmp_path = None
            _fsync_directory(directory)
        except OSError as exc:
            raise StorageWriteError(f"Failed to write {self._path}: {exc}") from exc
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
