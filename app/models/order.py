"""
Food Ordering API — Order model

[TRANSACTIONAL DATA] — orders are created once and never mutated or deleted here.
"""
import uuid
from datetime import datetime
from enum import Enum as PyEnum
from typing import Any
from sqlalchemy import String, Integer, Numeric, DateTime, Text, Enum, JSON
from sqlalchemy.orm import Mapped, mapped_column
from app.db.database import Base, utcnow


class OrderStatus(str, PyEnum):
    PENDING = "pending"


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False, default="anonymous")
    items: Mapped[list[Any]] = mapped_column(JSON, nullable=False)
    total: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    encrypted_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    encrypted_phone: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status", values_callable=lambda e: [m.value for m in e]),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    # Assigned by app.db.sequencer before the row is written.
    queue_number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    def __repr__(self) -> str:
        return f"<Order id={self.id} queue_number={self.queue_number} user_id={self.user_id}>"
