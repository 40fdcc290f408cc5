# SPDX-License-Identifier: AGPL-3.0-or-later
"""Order placement and low-stock bookkeeping."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict

from storefront.changes import ChangeChannel
from storefront.records.store import RecordStore
from storefront.sessions import RequestContext

logger = logging.getLogger(__name__)

LOW_STOCK_THRESHOLD = 5

MSG_NOT_FOUND = "Product not found"
MSG_NOT_AVAILABLE = "Not available"
MSG_RESERVATION = "Problems with product reservation"
MSG_PLACING = "Problems with placing an order"
MSG_SUCCESS = "Order added successfully"


def is_low_stock(stock: Any, threshold: int = LOW_STOCK_THRESHOLD) -> bool:
    return isinstance(stock, (int, float)) and not isinstance(stock, bool) and 0 < stock < threshold


class InventoryCoordinator:
    """Runs the order workflow across the product and order stores.

    Each step short-circuits with a flash message on failure. The two stores
    are written one after the other, so a failed order write leaves the stock
    already decremented.
    """

    def __init__(
        self,
        products: RecordStore,
        orders: RecordStore,
        channel: ChangeChannel,
        low_stock_threshold: int = LOW_STOCK_THRESHOLD,
        clock: Callable[[], float] = time.time,
    ):
        self.products = products
        self.orders = orders
        self.channel = channel
        self.low_stock_threshold = low_stock_threshold
        self.clock = clock

    def place_order(self, ctx: RequestContext, product_id: int, quantity: int) -> bool:
        notices = ctx.notices

        product = self.products.get_by_id(product_id)
        if product is None:
            notices.add_flash(MSG_NOT_FOUND)
            return False

        if not self._has_stock(product, quantity):
            notices.add_flash(MSG_NOT_AVAILABLE)
            return False

        # checked before the stock write so a bad quantity never moves stock
        order = {"product_id": product_id, "quantity": quantity, "timestamp": int(self.clock())}
        if not self.orders.validate(order, notices):
            notices.add_flash(MSG_PLACING)
            return False

        product["stock"] = product["stock"] - quantity
        if not self.products.save(product, notices):
            notices.add_flash(MSG_RESERVATION)
            return False

        if not self.orders.add(order):
            notices.add_flash(MSG_PLACING)
            return False

        logger.info("Order placed: product=%s qty=%s stock_left=%s", product_id, quantity, product["stock"])
        self.channel.mark_changed("products")
        notices.add_flash(MSG_SUCCESS)
        if self.check_low_stock(ctx, product):
            self.channel.mark_changed("messages")
        return True

    def refresh_notifications(self, ctx: RequestContext) -> Dict[int, str]:
        """Rebuild the session's low-stock notifications from current stock.

        Streams are woken when the set of alerted products changed, so an open
        page picks up alerts raised or dropped by another writer.
        """

        before = set(ctx.notices.get_all())
        ctx.notices.clear()
        for product in self.products.get_all():
            self.check_low_stock(ctx, product)
        current = ctx.notices.get_all()
        if set(current) != before:
            self.channel.touch()
        return current

    def check_low_stock(self, ctx: RequestContext, product: Dict[str, Any]) -> bool:
        if not is_low_stock(product.get("stock"), self.low_stock_threshold):
            return False
        ctx.notices.send_low_stock_alert(
            product["id"], str(product.get("name", "")), datetime.fromtimestamp(self.clock())
        )
        return True

    def _has_stock(self, product: Dict[str, Any], quantity: int) -> bool:
        stock = product.get("stock")
        if isinstance(stock, bool) or not isinstance(stock, int):
            logger.warning("Product %s has a non-integer stock value: %r", product.get("id"), stock)
            return False
        return stock >= quantity


__all__ = [
    "InventoryCoordinator",
    "LOW_STOCK_THRESHOLD",
    "MSG_NOT_AVAILABLE",
    "MSG_NOT_FOUND",
    "MSG_PLACING",
    "MSG_RESERVATION",
    "MSG_SUCCESS",
    "is_low_stock",
]
