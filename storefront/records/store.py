# SPDX-License-Identifier: AGPL-3.0-or-later
# Storefront
# Copyright (C) 2025 Storefront Authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as
# published by the Free Software Foundation, either version 3 of the
# License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Generic record store over one JSON file per entity type.

Every mutation reads the whole file, changes the list in memory and writes the
whole file back. Writes land in a temporary sibling first and replace the
target, and a per-path lock serialises read-modify-write cycles within the
process. Separate processes sharing a data directory are not coordinated:
they can still lose each other's updates or hand out the same id.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol

from storefront.records.schema import FieldRule, Schema, matches_type, type_name

logger = logging.getLogger(__name__)

_LOCKS: Dict[str, threading.RLock] = {}
_LOCKS_GUARD = threading.Lock()


class FlashSink(Protocol):
    def add_flash(self, message: str) -> None: ...


class IOErrorSink(Protocol):
    def record(self, exc: BaseException, path: Path) -> None: ...


class MissingColumnError(ValueError):
    """A new record lacks a declared column. Fatal for the request."""

    def __init__(self, message: str, column: str):
        super().__init__(message)
        self.column = column


def _lock_for(path: Path) -> threading.RLock:
    key = str(path.resolve())
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = _LOCKS[key] = threading.RLock()
        return lock


def _is_int(value: Any) -> bool:
    return type_name(value) == "integer"


def _same_id(candidate: Any, record_id: Any) -> bool:
    return _is_int(candidate) and _is_int(record_id) and candidate == record_id


def next_id(records: Iterable[Mapping[str, Any]]) -> int:
    """Return ``max(existing ids) + 1``, or 1 for an empty store.

    Two callers computing this from the same snapshot get the same answer;
    only the store lock keeps in-process inserts apart.
    """

    ids = [r.get("id") for r in records if _is_int(r.get("id"))]
    return (max(ids) if ids else 0) + 1


def check_rule(key: str, value: Any, rule: FieldRule) -> Optional[str]:
    if rule.type is not None and not matches_type(value, rule.type):
        return f"Validation failed for {key}: expected type {rule.type}, got {type_name(value)}"
    if type_name(value) not in ("integer", "double"):
        return None
    if rule.min is not None and value < rule.min:
        return f"Validation failed for {key}: value less than minimum {rule.min:g}"
    if rule.max is not None and value > rule.max:
        return f"Validation failed for {key}: value greater than maximum {rule.max:g}"
    return None


class RecordStore:
    def __init__(self, schema: Schema, path: Path, error_log: Optional[IOErrorSink] = None):
        self.schema = schema
        self.path = Path(path)
        self.error_log = error_log
        self._lock = _lock_for(self.path)

    def __repr__(self) -> str:
        return f"RecordStore({self.schema.name!r}, {str(self.path)!r})"

    # --- reads ---------------------------------------------------------------

    def get_all(self) -> List[Dict[str, Any]]:
        """Return every record, or ``[]`` when the file is missing or unreadable."""

        if not self.path.exists():
            return []
        try:
            raw = self.path.read_text(encoding="utf-8")
            data = json.loads(raw) if raw.strip() else []
        except (OSError, ValueError) as exc:
            self._report(exc, "read")
            return []
        if not isinstance(data, list):
            self._report(ValueError(f"expected a JSON array, got {type(data).__name__}"), "read")
            return []
        return [dict(record) for record in data if isinstance(record, dict)]

    def get_by_id(self, record_id: int) -> Optional[Dict[str, Any]]:
        for record in self.get_all():
            if _same_id(record.get("id"), record_id):
                return record
        return None

    # --- writes --------------------------------------------------------------

    def add(self, record: Mapping[str, Any]) -> bool:
        with self._lock:
            records = self.get_all()
            new = dict(record)
            new["id"] = next_id(records)
            self._require_columns(new, "Missing required column: {column}")
            records.append(new)
            return self._write(records)

    def update(
        self, record_id: int, partial: Mapping[str, Any], notices: Optional[FlashSink] = None
    ) -> bool:
        with self._lock:
            records = self.get_all()
            for index, record in enumerate(records):
                if _same_id(record.get("id"), record_id):
                    records[index] = {**record, **partial}
                    return self._write(records)
        logger.warning("Record with ID %s not found in %s", record_id, self.schema.name)
        if notices is not None:
            notices.add_flash(f"Record with ID {record_id} not found in {self.schema.name}")
        return False

    def save(self, record: Mapping[str, Any], notices: Optional[FlashSink] = None) -> bool:
        """Update the record with the same id, or append it as a new one."""

        if not record:
            raise ValueError("No attributes to save.")
        if not self.validate(record, notices):
            return False

        with self._lock:
            records = self.get_all()
            record_id = record.get("id")
            if record_id is not None:
                for index, existing in enumerate(records):
                    if _same_id(existing.get("id"), record_id):
                        records[index] = {**existing, **record}
                        return self._write(records)

            new = dict(record)
            if new.get("id") is None:
                new["id"] = next_id(records)
            self._require_columns(new, "For adding new record missing required column: {column}")
            records.append(new)
            return self._write(records)

    def write_all(self, records: Iterable[Mapping[str, Any]]) -> bool:
        with self._lock:
            return self._write([dict(r) for r in records])

    # --- validation ----------------------------------------------------------

    def validate(self, record: Mapping[str, Any], notices: Optional[FlashSink] = None) -> bool:
        for key, value in record.items():
            rule = self.schema.rules.get(key)
            if rule is None:
                continue
            message = check_rule(key, value, rule)
            if message:
                logger.info("%s: %s", self.schema.name, message)
                if notices is not None:
                    notices.add_flash(message)
                return False
        return True

    # --- internals -----------------------------------------------------------

    def _require_columns(self, record: Mapping[str, Any], template: str) -> None:
        for column in self.schema.columns:
            if column not in record:
                raise MissingColumnError(template.format(column=column), column)

    def _write(self, records: List[Dict[str, Any]]) -> bool:
        payload = json.dumps(records, indent=4, ensure_ascii=False)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            self._report(exc, "write")
            return False
        return True

    def _report(self, exc: BaseException, action: str) -> None:
        logger.error("Failed to %s %s: %s", action, self.path, exc)
        if self.error_log is not None:
            self.error_log.record(exc, self.path)


__all__ = ["FlashSink", "MissingColumnError", "RecordStore", "check_rule", "next_id"]
