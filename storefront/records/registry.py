# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from storefront.records.errorlog import ErrorLog
from storefront.records.schema import CHANGES, LOGS, ORDERS, PRODUCTS
from storefront.records.store import RecordStore

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {"id": 1, "name": "Widget", "price": 9.99, "stock": 3},
    {"id": 2, "name": "Gadget", "price": 24.5, "stock": 12},
    {"id": 3, "name": "Gizmo", "price": 4.25, "stock": 7},
    {"id": 4, "name": "Doohickey", "price": 15.0, "stock": 0},
]


@dataclass
class Stores:
    products: RecordStore
    orders: RecordStore
    logs: RecordStore
    changes: RecordStore
    error_log: ErrorLog


def open_stores(data_dir: Path) -> Stores:
    data_dir.mkdir(parents=True, exist_ok=True)
    logs = RecordStore(LOGS, data_dir / LOGS.filename)
    error_log = ErrorLog(logs)
    return Stores(
        products=RecordStore(PRODUCTS, data_dir / PRODUCTS.filename, error_log),
        orders=RecordStore(ORDERS, data_dir / ORDERS.filename, error_log),
        logs=logs,
        changes=RecordStore(CHANGES, data_dir / CHANGES.filename, error_log),
        error_log=error_log,
    )


def seed_demo_products(stores: Stores) -> bool:
    """Write the demo catalogue when no products file exists yet."""

    if stores.products.path.exists():
        return False
    logger.info("Seeding demo products into %s", stores.products.path)
    return stores.products.write_all(DEMO_PRODUCTS)
