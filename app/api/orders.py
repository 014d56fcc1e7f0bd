"""
Food Ordering API — Orders routes

Flow for POST /orders:
  1. Bearer token verified (get_current_subject)
  2. Payload validated (PlaceOrderRequest); nothing written on failure
  3. Queue number assigned (app.db.sequencer)
  4. Order row written with status "pending"
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_subject
from app.core.security import Subject
from app.db.database import get_db
from app.db.order_ops import list_orders_for_user, place_order
from app.schemas.common import ApiResponse
from app.schemas.order import OrderOut, OrderReceipt, PlaceOrderRequest

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=ApiResponse[OrderReceipt], status_code=status.HTTP_201_CREATED)
async def create_order(
    payload: PlaceOrderRequest,
    subject: Subject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    receipt = await place_order(db, subject, payload)
    return ApiResponse[OrderReceipt](data=receipt, message="Order placed successfully")


@router.get("", response_model=ApiResponse[list[OrderOut]])
async def get_my_orders(
    subject: Subject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    """The caller's most recent orders, newest first."""
    return ApiResponse[list[OrderOut]](data=await list_orders_for_user(db, subject.uid))
