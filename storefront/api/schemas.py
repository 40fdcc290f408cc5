# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


class ProductOut(BaseModel):
    id: int
    name: str
    price: float
    stock: int


class OrderOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    timestamp: int


class OrderRequest(BaseModel):
    product_id: int = Field(..., ge=1)
    quantity: int = Field(..., ge=1)


class OrderResult(BaseModel):
    ok: bool
    messages: List[str] = []


class NotificationsOut(BaseModel):
    notifications: Dict[int, str]
