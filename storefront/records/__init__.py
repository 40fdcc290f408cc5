# SPDX-License-Identifier: AGPL-3.0-or-later
"""JSON file backed record stores, one per entity type."""

from .errorlog import ErrorLog
from .registry import Stores, open_stores, seed_demo_products
from .schema import CHANGES, LOGS, ORDERS, PRODUCTS, FieldRule, Schema
from .store import MissingColumnError, RecordStore, next_id

__all__ = [
    "CHANGES",
    "ErrorLog",
    "FieldRule",
    "LOGS",
    "MissingColumnError",
    "ORDERS",
    "PRODUCTS",
    "RecordStore",
    "Schema",
    "Stores",
    "next_id",
    "open_stores",
    "seed_demo_products",
]
