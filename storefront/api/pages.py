# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from storefront.sessions import RequestContext

_TEMPLATE_ROOT = Path(__file__).resolve().parent.parent / "templates"

_tmpl_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATE_ROOT)),
    autoescape=select_autoescape(["html", "xml"]),
)


def _format_ts(value: Any) -> str:
    try:
        return datetime.fromtimestamp(int(value)).strftime("%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError, OverflowError, OSError):
        return str(value)


_tmpl_env.filters["datetime"] = _format_ts


def render_page(view: str, ctx: RequestContext, **data: Any) -> HTMLResponse:
    """Render ``view`` inside the layout; drains the session's flash messages."""

    template = _tmpl_env.get_template(f"{view}.html")
    html = template.render(
        notifications=ctx.notices.get_all(),
        flash_messages=ctx.notices.pop_flashes(),
        **data,
    )
    return HTMLResponse(html)
