# SPDX-License-Identifier: AGPL-3.0-or-later

"""Route package exports."""

from .events import router as events_router
from .orders import router as orders_router
from .products import router as products_router

__all__ = ["events_router", "orders_router", "products_router"]
