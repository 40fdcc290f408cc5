# SPDX-License-Identifier: AGPL-3.0-or-later
"""Server-sent event framing for live product and notification snapshots."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Callable, Dict, Optional

from storefront.changes import ChangeChannel
from storefront.notifications import NotificationService
from storefront.records.store import RecordStore

logger = logging.getLogger(__name__)

KEEP_ALIVE = ": keep-alive\n\n"

SSE_HEADERS = {
    "Connection": "keep-alive",
    "Cache-Control": "no-store, no-cache, must-revalidate, max-age=0",
    "Expires": "0",
    "Pragma": "no-cache",
}


def format_event(payload: Dict[str, Any]) -> str:
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"


def build_snapshot(products: RecordStore, notices: NotificationService) -> Dict[str, Any]:
    messages = {str(product_id): text for product_id, text in notices.get_all().items()}
    return {"products": products.get_all(), "messages": messages}


async def iter_events(
    channel: ChangeChannel,
    snapshot: Callable[[], Dict[str, Any]],
    interval: float,
    always_emit: bool = False,
    limit: Optional[int] = None,
) -> AsyncIterator[str]:
    """Yield a snapshot on connect, then one per change.

    Idle ticks yield an SSE comment so proxies keep the connection open. With
    ``always_emit`` every tick carries a full snapshot instead. When a limit
    is given the stream stops after ``limit`` frames, keep-alive comments
    included. File reads run on worker threads; waiting holds none.
    """

    seen = channel.version
    frames = 0
    while limit is None or frames < limit:
        if frames:
            current = await channel.wait_async(seen, interval)
            changed = current != seen
            seen = current
            flags = await asyncio.to_thread(channel.pending)
            if flags:
                # set by a writer in another process, or not yet consumed
                await asyncio.to_thread(channel.reset, flags)
                changed = True
            if not (changed or always_emit):
                yield KEEP_ALIVE
                frames += 1
                continue
        payload = await asyncio.to_thread(snapshot)
        yield format_event(payload)
        frames += 1
    logger.debug("SSE stream finished after %s frames", frames)


__all__ = ["KEEP_ALIVE", "SSE_HEADERS", "build_snapshot", "format_event", "iter_events"]
