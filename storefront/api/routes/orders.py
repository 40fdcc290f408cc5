# SPDX-License-Identifier: AGPL-3.0-or-later
# storefront/api/routes/orders.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Form, Query
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError

from storefront.api.context import refreshed_context
from storefront.api.errors import field_errors, order_rejected
from storefront.api.pages import render_page
from storefront.api.schemas import NotificationsOut, OrderOut, OrderRequest, OrderResult
from storefront.sessions import RequestContext
from storefront.state import AppState, get_state

router = APIRouter(tags=["orders"])
logger = logging.getLogger(__name__)


@router.get("/order/create", include_in_schema=False)
def order_create(ctx: RequestContext = Depends(refreshed_context), state: AppState = Depends(get_state)):
    return render_page("order/create", ctx, products=state.stores.products.get_all())


@router.get("/order", include_in_schema=False)
def order_index(ctx: RequestContext = Depends(refreshed_context), state: AppState = Depends(get_state)):
    return render_page("order/index", ctx, orders=state.stores.orders.get_all())


@router.post("/order", include_in_schema=False)
def order_store(
    product_id: str = Form("0"),
    quantity: str = Form("0"),
    ctx: RequestContext = Depends(refreshed_context),
    state: AppState = Depends(get_state),
):
    try:
        body = OrderRequest.model_validate({"product_id": product_id, "quantity": quantity})
    except ValidationError as exc:
        for field, msg in field_errors(exc).items():
            ctx.notices.add_flash(f"Invalid {field}: {msg}")
    else:
        state.inventory.place_order(ctx, body.product_id, body.quantity)
    # 303 so the browser follows with a GET
    return RedirectResponse(url="/order", status_code=303)


@router.get("/app/orders", response_model=List[OrderOut])
def list_orders(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    _ctx: RequestContext = Depends(refreshed_context),
    state: AppState = Depends(get_state),
) -> List[dict]:
    orders = state.stores.orders.get_all()
    return orders[-limit:] if limit else orders


@router.post("/app/orders", response_model=OrderResult)
def create_order(
    body: OrderRequest = Body(...),
    ctx: RequestContext = Depends(refreshed_context),
    state: AppState = Depends(get_state),
):
    ok = state.inventory.place_order(ctx, body.product_id, body.quantity)
    messages = ctx.notices.pop_flashes()
    if not ok:
        logger.info("Order rejected: product=%s qty=%s (%s)", body.product_id, body.quantity, messages)
        return JSONResponse(status_code=409, content=order_rejected(messages))
    return OrderResult(ok=True, messages=messages)


@router.get("/app/notifications", response_model=NotificationsOut)
def list_notifications(ctx: RequestContext = Depends(refreshed_context)) -> NotificationsOut:
    return NotificationsOut(notifications=ctx.notices.get_all())
