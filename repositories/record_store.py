"""
Record Store (persistence primitive).

A generic collection of JSON-like records, each carrying a unique ``id``,
persisted as one JSON array per file. Every mutation reads the whole
collection, changes it in memory and rewrites the whole file. There is no
locking and no concurrency token: concurrent writers lose updates
(last writer wins for the entire collection).

Serialization contract:
- Records are written as a JSON array with 2-space indentation.
- datetime values are written as UTC with millisecond precision:
  ``YYYY-MM-DDTHH:MM:SS.mmmZ``.
- On read, any string matching exactly that form and naming a real instant
  is revived to a UTC datetime. Strings of that shape that are not real dates
  (e.g. Feb 30) stay strings.
- Revival cannot tell a timestamp from free text of the same shape, so
  repositories pass text fields through `stored_text`, which turns a revived
  value back into the exact string that was written.

A missing file is a first-time initialization and yields an empty collection.
Every other failure to read or write raises StorageIOError.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Predicate = Callable[[Record], bool]

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


class StorageIOError(RuntimeError):
    """Raised when a backing file cannot be read, parsed or written."""


def format_timestamp(value: datetime) -> str:
    """Serialize a timezone-aware datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (UTC)."""

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("timestamps must be timezone-aware (UTC)")
    utc = value.astimezone(timezone.utc)
    return f"{utc.strftime(_DATE_FORMAT)}.{utc.microsecond // 1000:03d}Z"


def parse_timestamp(text: str) -> datetime:
    """Parse the fixed millisecond ISO-8601 form back into a UTC datetime."""

    return datetime.strptime(text, f"{_DATE_FORMAT}.%fZ").replace(tzinfo=timezone.utc)


def parse_stored_datetime(value: Any) -> datetime:
    """
    Coerce a stored timestamp into a timezone-aware UTC datetime.

    The store revives its own timestamp format; plain ISO-8601 strings
    (e.g. from hand-edited files) are accepted too.
    """

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def stored_text(value: Any) -> Any:
    """Read back a free-text field: a value revived as a datetime becomes its original string again."""

    if isinstance(value, datetime):
        return format_timestamp(value)
    return value


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _revive(value: Any) -> Any:
    if isinstance(value, str):
        if not _DATE_PATTERN.match(value):
            return value
        try:
            return parse_timestamp(value)
        except ValueError:
            return value
    if isinstance(value, list):
        return [_revive(item) for item in value]
    if isinstance(value, dict):
        return {key: _revive(item) for key, item in value.items()}
    return value


class RecordStore:
    """
    Durable collection of records of a single kind.

    The store does not enforce identifier uniqueness; callers guarantee it.
    """

    def __init__(self, file_path: Path) -> None:
        self.file_path = Path(file_path)

    @property
    def name(self) -> str:
        return self.file_path.name

    def read_all(self) -> List[Record]:
        """
        Return every record in insertion order.

        Raises:
            StorageIOError: if the file is unreadable or not a JSON array.
        """

        if not self.file_path.exists():
            self._write([])
            return []

        try:
            text = self.file_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Error reading from %s: %s", self.file_path, e)
            raise StorageIOError(f"Failed to read {self.file_path}: {e}") from e

        try:
            data = json.loads(text)
        except ValueError as e:
            logger.error("Malformed JSON in %s: %s", self.file_path, e)
            raise StorageIOError(f"Malformed data in {self.file_path}: {e}") from e

        if not isinstance(data, list):
            logger.error("Expected a JSON array in %s, found %s", self.file_path, type(data).__name__)
            raise StorageIOError(f"Malformed data in {self.file_path}: expected a list of records")

        return _revive(data)

    def find_one(self, predicate: Predicate) -> Optional[Record]:
        return next((record for record in self.read_all() if predicate(record)), None)

    def find_many(self, predicate: Predicate) -> List[Record]:
        return [record for record in self.read_all() if predicate(record)]

    def create(self, record: Record) -> Record:
        data = self.read_all()
        data.append(record)
        self._write(data)
        logger.info("Created new record in %s: %s", self.name, record.get("id"))
        return record

    def update(self, predicate: Predicate, new_record: Record) -> Optional[Record]:
        """Replace the first matching record wholesale; None if nothing matches."""

        data = self.read_all()
        index = next((i for i, record in enumerate(data) if predicate(record)), None)
        if index is None:
            return None

        data[index] = new_record
        self._write(data)
        logger.info("Updated record in %s: %s", self.name, new_record.get("id"))
        return new_record

    def delete(self, predicate: Predicate) -> bool:
        """Remove the first matching record; True if one was removed."""

        data = self.read_all()
        index = next((i for i, record in enumerate(data) if predicate(record)), None)
        if index is None:
            return False

        deleted = data.pop(index)
        self._write(data)
        logger.info("Deleted record from %s: %s", self.name, deleted.get("id"))
        return True

    def _write(self, data: List[Record]) -> None:
        """Overwrite the backing file with the full collection."""

        try:
            payload = json.dumps(data, indent=2, default=_encode)
        except (TypeError, ValueError) as e:
            raise StorageIOError(f"Failed to serialize records for {self.file_path}: {e}") from e

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            # Temp file + rename: readers see the old or the new collection, never a partial one.
            fd, tmp_name = tempfile.mkstemp(dir=self.file_path.parent, prefix=f".{self.name}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self.file_path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error("Error writing to %s: %s", self.file_path, e)
            raise StorageIOError(f"Failed to write {self.file_path}: {e}") from e


__all__ = [
    "Record",
    "Predicate",
    "StorageIOError",
    "RecordStore",
    "format_timestamp",
    "parse_timestamp",
    "parse_stored_datetime",
    "stored_text",
]
