# SPDX-License-Identifier: AGPL-3.0-or-later
"""Change notification for live product updates.

Writers call :meth:`ChangeChannel.mark_changed`, which sets a persisted dirty
flag (record ``0`` of the change store) and wakes every stream waiting on the
channel. The persisted flags let a stream notice writes made by another
process sharing the data directory; in-process writers wake streams
immediately.

Threads block in :meth:`ChangeChannel.wait`. Streams running on an event loop
await :meth:`ChangeChannel.wait_async` instead, which holds no worker thread
while idle; writers on other threads reach them through
``loop.call_soon_threadsafe``.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Dict, Iterable, Optional, Set, Tuple

from storefront.records.store import RecordStore

logger = logging.getLogger(__name__)

FLAG_RECORD_ID = 0
WATCHED = ("products", "messages")

_Waiter = Tuple[asyncio.AbstractEventLoop, asyncio.Event]


class ChangeChannel:
    def __init__(self, store: RecordStore):
        self.store = store
        self._cond = threading.Condition()
        self._version = 0
        self._waiters: Set[_Waiter] = set()

    @property
    def version(self) -> int:
        with self._cond:
            return self._version

    def mark_changed(self, name: str) -> bool:
        ok = self._set_flags({name: True})
        self.touch()
        return ok

    def touch(self) -> None:
        """Wake waiting streams without touching the persisted flags."""

        with self._cond:
            self._version += 1
            self._cond.notify_all()
            waiters = list(self._waiters)
        for loop, event in waiters:
            try:
                loop.call_soon_threadsafe(event.set)
            except RuntimeError:
                # loop already closed; its stream is gone
                with self._cond:
                    self._waiters.discard((loop, event))

    def pending(self) -> Dict[str, bool]:
        record = self.store.get_by_id(FLAG_RECORD_ID) or {}
        return {k: v for k, v in record.items() if k != "id" and v is True}

    def reset(self, names: Optional[Iterable[str]] = None) -> bool:
        targets = list(names) if names is not None else list(self.pending())
        if not targets:
            return True
        return self._set_flags({name: False for name in targets})

    def wait(self, since: int, timeout: float) -> int:
        """Block until the version moves past ``since`` or ``timeout`` elapses."""

        deadline = time.monotonic() + timeout
        with self._cond:
            while self._version <= since:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._cond.wait(remaining)
            return self._version

    async def wait_async(self, since: int, timeout: float) -> int:
        """Event-loop counterpart of :meth:`wait`."""

        waiter = (asyncio.get_running_loop(), asyncio.Event())
        with self._cond:
            if self._version > since:
                return self._version
            self._waiters.add(waiter)
        try:
            await asyncio.wait_for(waiter[1].wait(), timeout)
        except asyncio.TimeoutError:
            pass
        finally:
            with self._cond:
                self._waiters.discard(waiter)
        return self.version

    def _set_flags(self, flags: Dict[str, bool]) -> bool:
        if self.store.get_by_id(FLAG_RECORD_ID) is None:
            record = {name: False for name in WATCHED}
            record.update(flags)
            record["id"] = FLAG_RECORD_ID
            logger.info("Creating change flag record in %s", self.store.path)
            return self.store.write_all([record])
        return self.store.update(FLAG_RECORD_ID, flags)


__all__ = ["ChangeChannel", "FLAG_RECORD_ID", "WATCHED"]
