# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

import logging
import time
import traceback
from pathlib import Path
from typing import Callable

from storefront.records.store import RecordStore

logger = logging.getLogger(__name__)


class ErrorLog:
    """Append a LogEntry record for every store I/O failure (best-effort)."""

    def __init__(self, store: RecordStore, clock: Callable[[], float] = time.time):
        self.store = store
        self.clock = clock

    def record(self, exc: BaseException, path: Path) -> bool:
        frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
        origin = frames[-1] if frames else None
        entry = {
            "timestamp": int(self.clock()),
            "type": int(getattr(exc, "errno", None) or 0),
            "message": f"{type(exc).__name__}: {exc} ({path})",
            "file": origin.filename if origin else "unknown",
            "line": int(origin.lineno or 0) if origin else 0,
        }
        if not self.store.validate(entry):
            return False
        try:
            return self.store.add(entry)
        except Exception:  # pragma: no cover - best-effort logging
            logger.exception("Failed to append log entry at %s", self.store.path)
            return False


__all__ = ["ErrorLog"]
