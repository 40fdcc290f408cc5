# SPDX-License-Identifier: AGPL-3.0-or-later
"""Entity schemas for the JSON record stores.

A schema is plain data: the file it lives in, the columns every new record
must carry, and an optional rule per field. Stores are generic and take one
of these values; nothing here knows how records are persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FieldRule:
    type: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None


@dataclass(frozen=True)
class Schema:
    name: str
    filename: str
    columns: Tuple[str, ...]
    rules: Mapping[str, FieldRule] = field(default_factory=dict)


def type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "double"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "NULL"
    return type(value).__name__


def matches_type(value: Any, expected: str) -> bool:
    actual = type_name(value)
    if expected == "double":
        # whole prices come back from JSON as ints
        return actual in ("double", "integer")
    return actual == expected


PRODUCTS = Schema(
    name="products",
    filename="products.json",
    columns=("id", "name", "price", "stock"),
    rules={
        "id": FieldRule(type="integer"),
        "name": FieldRule(type="string"),
        "stock": FieldRule(type="integer", min=0),
        "price": FieldRule(type="double", min=0),
    },
)

ORDERS = Schema(
    name="orders",
    filename="orders.json",
    columns=("id", "product_id", "quantity", "timestamp"),
    rules={
        "id": FieldRule(type="integer"),
        "product_id": FieldRule(type="integer"),
        "quantity": FieldRule(type="integer", min=1),
        "timestamp": FieldRule(type="integer"),
    },
)

LOGS = Schema(
    name="logs",
    filename="logs.json",
    columns=("timestamp", "type", "message", "file", "line"),
    rules={
        "timestamp": FieldRule(type="integer"),
        "type": FieldRule(type="integer"),
        "message": FieldRule(type="string"),
        "file": FieldRule(type="string"),
        "line": FieldRule(type="integer"),
    },
)

CHANGES = Schema(
    name="sse",
    filename="sse.json",
    columns=("products", "messages"),
    rules={
        "products": FieldRule(type="boolean"),
        "messages": FieldRule(type="boolean"),
    },
)


__all__ = [
    "CHANGES",
    "FieldRule",
    "LOGS",
    "ORDERS",
    "PRODUCTS",
    "Schema",
    "matches_type",
    "type_name",
]
