# SPDX-License-Identifier: AGPL-3.0-or-later
"""Session cookie handling and per-request context dependencies."""

from __future__ import annotations

from fastapi import Depends, Request

from storefront.sessions import RequestContext
from storefront.state import AppState, get_state


async def session_middleware(request: Request, call_next):
    state = get_state(request)
    cookie_name = state.settings.session_cookie_name
    ctx = state.sessions.open(request.cookies.get(cookie_name))
    request.state.ctx = ctx
    resp = await call_next(request)
    if state.sessions.keep(ctx):
        resp.set_cookie(
            key=cookie_name,
            value=ctx.session_id,
            httponly=True,
            samesite=state.settings.same_site,
            secure=state.settings.secure_cookie,
        )
    return resp


def get_context(request: Request) -> RequestContext:
    ctx = getattr(request.state, "ctx", None)
    if ctx is None:
        raise RuntimeError("session middleware not installed")
    return ctx


def refreshed_context(
    ctx: RequestContext = Depends(get_context), state: AppState = Depends(get_state)
) -> RequestContext:
    """Context whose low-stock notifications match current stock."""

    state.inventory.refresh_notifications(ctx)
    return ctx
