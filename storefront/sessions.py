# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

import secrets
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from storefront.notifications import NotificationService

DEFAULT_SESSION_TTL = 24 * 60


@dataclass
class RequestContext:
    """Per-request handle on the caller's session state."""

    session_id: str
    session: Dict[str, Any]
    notices: NotificationService
    created: bool = False


class SessionStore:
    """
    In-memory session registry.
    - Issues random tokens for new visitors
    - Registers a new session only once it holds a notification or flash
    - Forgets sessions idle for longer than ``ttl`` seconds
    """

    def __init__(self, ttl: float = DEFAULT_SESSION_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._sessions: Dict[str, Dict[str, Any]] = {}
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def _new_token(self) -> str:
        return secrets.token_urlsafe(32)

    def open(self, session_id: Optional[str]) -> RequestContext:
        now = self.clock()
        with self._lock:
            self._prune(now)
            session = self._sessions.get(session_id) if session_id else None
            if session is not None:
                self._last_seen[session_id] = now
        if session is None:
            # unregistered until keep() sees content in it
            session = {}
            return RequestContext(
                session_id=self._new_token(), session=session, notices=NotificationService(session), created=True
            )
        return RequestContext(session_id=session_id, session=session, notices=NotificationService(session))

    def keep(self, ctx: RequestContext) -> bool:
        """Register a new session that has something to carry to the next request."""

        if not ctx.created or not ctx.notices.has_content():
            return False
        with self._lock:
            self._sessions[ctx.session_id] = ctx.session
            self._last_seen[ctx.session_id] = self.clock()
        return True

    def _prune(self, now: float) -> None:
        expired = [sid for sid, seen in self._last_seen.items() if now - seen > self.ttl]
        for sid in expired:
            del self._sessions[sid]
            del self._last_seen[sid]

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["DEFAULT_SESSION_TTL", "RequestContext", "SessionStore"]
