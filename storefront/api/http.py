# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from storefront import get_version
from storefront.api.context import session_middleware
from storefront.api.errors import normalize_http_exc, normalize_validation_err
from storefront.api.routes import events_router, orders_router, products_router
from storefront.settings import Settings
from storefront.state import init_app_state

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "Error 404. Page not found"
JSON_PREFIX = "/app/"


async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and not request.url.path.startswith(JSON_PREFIX):
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)
    return JSONResponse(status_code=exc.status_code, content=normalize_http_exc(exc.detail, exc.status_code))


async def _validation_exc_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=normalize_validation_err(exc))


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title="Storefront", version=get_version())
    state = init_app_state(app, settings)

    app.add_middleware(BaseHTTPMiddleware, dispatch=session_middleware)
    app.add_exception_handler(StarletteHTTPException, _http_exc_handler)
    app.add_exception_handler(RequestValidationError, _validation_exc_handler)

    app.include_router(products_router)
    app.include_router(orders_router)
    app.include_router(events_router)

    logger.info("Storefront %s ready (data=%s)", get_version(), state.settings.resolve_data_dir())
    return app


__all__ = ["NOT_FOUND_TEXT", "create_app"]
