# SPDX-License-Identifier: AGPL-3.0-or-later
# storefront/api/routes/products.py
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from storefront.api.context import refreshed_context
from storefront.api.pages import render_page
from storefront.api.schemas import ProductOut
from storefront.sessions import RequestContext
from storefront.state import AppState, get_state

router = APIRouter(tags=["products"])


@router.get("/", include_in_schema=False)
def _root():
    return RedirectResponse(url="/product")


@router.get("/product", include_in_schema=False)
def product_index(ctx: RequestContext = Depends(refreshed_context), state: AppState = Depends(get_state)):
    return render_page("product/index", ctx, products=state.stores.products.get_all())


@router.get("/app/products", response_model=List[ProductOut])
def list_products(
    _ctx: RequestContext = Depends(refreshed_context), state: AppState = Depends(get_state)
) -> List[dict]:
    return state.stores.products.get_all()
