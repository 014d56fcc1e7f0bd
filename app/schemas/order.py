"""
Food Ordering API — Order schemas
"""
import math
from datetime import datetime
from decimal import Decimal
from typing import Any
from pydantic import Field, field_validator

from app.models.order import OrderStatus
from app.schemas.common import CamelModel

INVALID_TOTAL = "Invalid order: valid total amount is required"
TOTAL_DECIMAL_PLACES = 2
MAX_TOTAL = 9_999_999_999.99


class PlaceOrderRequest(CamelModel):
    items: list[Any] = Field(..., examples=[[{"id": "1", "name": "Burger", "quantity": 2}]])
    total: float = Field(..., examples=[25.98])
    encrypted_address: str | None = None
    encrypted_phone: str | None = None

    @field_validator("items", mode="before")
    @classmethod
    def items_must_be_non_empty_list(cls, v: Any) -> Any:
        if not isinstance(v, list) or not v:
            raise ValueError("Invalid order: items array is required")
        return v

    @field_validator("total", mode="before")
    @classmethod
    def total_must_be_positive_amount(cls, v: Any) -> Any:
        # JSON numbers only: "12.5" and true are rejected, not coerced
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(INVALID_TOTAL)
        # Must fit orders.total, Numeric(12, 2), exactly
        if not 0 < v <= MAX_TOTAL or not math.isfinite(v):
            raise ValueError(INVALID_TOTAL)
        if Decimal(str(v)).as_tuple().exponent < -TOTAL_DECIMAL_PLACES:
            raise ValueError(INVALID_TOTAL)
        return v


class OrderReceipt(CamelModel):
    order_id: str
    queue_number: int
    status: OrderStatus


class OrderOut(CamelModel):
    id: str
    user_id: str
    user_email: str
    items: list[Any]
    total: float
    encrypted_address: str | None = None
    encrypted_phone: str | None = None
    status: OrderStatus
    queue_number: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
