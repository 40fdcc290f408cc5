# SPDX-License-Identifier: AGPL-3.0-or-later
"""Error envelopes for the JSON endpoints under ``/app/``.

Every JSON error has the shape ``{"detail": {"error": code, ...}}``. Field
problems go in ``fields``; the flash messages an order workflow produced go
in ``messages`` so API clients see what a page render would have shown.
"""

from typing import Iterable

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

ORDER_REJECTED = "order_rejected"
HTTP_CODES = {404: "not_found", 405: "method_not_allowed", 409: ORDER_REJECTED}


class ErrorBody(BaseModel):
    error: str
    message: str | None = None
    fields: dict[str, str] | None = None
    messages: list[str] | None = None


def error_envelope(
    code: str,
    message: str | None = None,
    fields: dict[str, str] | None = None,
    messages: list[str] | None = None,
) -> dict:
    body = ErrorBody(error=code, message=message, fields=fields, messages=messages)
    return {"detail": body.model_dump(exclude_none=True)}


def order_rejected(messages: Iterable[str]) -> dict:
    """Envelope for an order the inventory workflow turned down; the last flash is the reason."""

    messages = list(messages)
    return error_envelope(ORDER_REJECTED, message=messages[-1] if messages else None, messages=messages)


def normalize_http_exc(detail, status_code: int = 400) -> dict:
    code = HTTP_CODES.get(status_code, "bad_request")
    if isinstance(detail, dict):
        merged = dict(detail)
        merged.setdefault("error", code)
        return {"detail": merged}
    return error_envelope(code, message=detail if isinstance(detail, str) else None)


def normalize_validation_err(err: RequestValidationError) -> dict:
    return error_envelope("validation_error", fields=field_errors(err))


def field_errors(err: RequestValidationError | ValidationError) -> dict[str, str]:
    """Map ``loc`` paths (without the ``body`` prefix) to their first message."""

    field_map: dict[str, str] = {}
    for entry in err.errors():
        loc = ".".join(str(part) for part in entry.get("loc", []) if part != "body")
        field_map.setdefault(loc, entry.get("msg", "invalid"))
    return field_map


__all__ = [
    "ErrorBody",
    "ORDER_REJECTED",
    "error_envelope",
    "field_errors",
    "normalize_http_exc",
    "normalize_validation_err",
    "order_rejected",
]
