"""
Food Ordering API — Order placement and history

Placement is two commits:
  1. the queue counter is advanced (app.db.sequencer)
  2. the order row is written carrying that queue number
A failure in (1) writes nothing. A failure in (2) leaves the counter
advanced: that number is skipped, never reused, and the failure is
reported as OrderPersistenceError.
"""
import logging
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.errors import InternalError, OrderPersistenceError, SequencerError
from app.core.metrics import ORDER_FAILURES, ORDERS_PLACED
from app.core.security import Subject
from app.db.database import utcnow
from app.db.sequencer import next_queue_number
from app.models.order import Order, OrderStatus
from app.schemas.order import OrderOut, OrderReceipt, PlaceOrderRequest

logger = logging.getLogger(__name__)

ANONYMOUS_EMAIL = "anonymous"


async def place_order(db: AsyncSession, subject: Subject, payload: PlaceOrderRequest) -> OrderReceipt:
    try:
        queue_number = await next_queue_number(db)
    except SequencerError:
        ORDER_FAILURES.labels(stage="sequencer").inc()
        raise

    now = utcnow()
    order = Order(
        user_id=subject.uid,
        user_email=subject.email or ANONYMOUS_EMAIL,
        items=payload.items,
        total=payload.total,
        encrypted_address=payload.encrypted_address or None,
        encrypted_phone=payload.encrypted_phone or None,
        status=OrderStatus.PENDING,
        queue_number=queue_number,
        created_at=now,
        updated_at=now,
    )
    db.add(order)
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception(
            "Order write failed after queue #%d was assigned to user %s; the number is skipped",
            queue_number, subject.uid,
        )
        ORDER_FAILURES.labels(stage="persist").inc()
        raise OrderPersistenceError(queue_number) from exc

    ORDERS_PLACED.inc()
    logger.info("Order created: %s (queue #%d) for user: %s", order.id, queue_number, subject.uid)
    return OrderReceipt(order_id=order.id, queue_number=queue_number, status=OrderStatus.PENDING)


async def list_orders_for_user(db: AsyncSession, user_id: str, limit: int | None = None) -> list[OrderOut]:
    """Most recent orders owned by user_id, newest first."""
    limit = limit or get_settings().ORDER_HISTORY_LIMIT
    try:
        result = await db.execute(
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc(), Order.queue_number.desc())
            .limit(limit)
        )
        orders = result.scalars().all()
    except SQLAlchemyError as exc:
        logger.exception("Error fetching orders for user %s", user_id)
        raise InternalError("Failed to fetch orders") from exc

    return [OrderOut.model_validate(order) for order in orders]
