# SPDX-License-Identifier: AGPL-3.0-or-later
# storefront/api/routes/events.py
from functools import partial
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from storefront.api.context import get_context
from storefront.api.sse import SSE_HEADERS, build_snapshot, iter_events
from storefront.sessions import RequestContext
from storefront.state import AppState, get_state

router = APIRouter(tags=["events"])


@router.get("/sse")
def event_stream(
    limit: Optional[int] = Query(None, ge=1),
    ctx: RequestContext = Depends(get_context),
    state: AppState = Depends(get_state),
):
    settings = state.settings
    events = iter_events(
        state.channel,
        partial(build_snapshot, state.stores.products, ctx.notices),
        interval=settings.sse_interval,
        always_emit=settings.sse_always_emit,
        limit=limit,
    )
    return StreamingResponse(events, media_type="text/event-stream", headers=SSE_HEADERS)
