from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import Principal, get_current_user

from .schemas import OrderPlaced, OrderResponse
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=OrderPlaced)
async def place_order(
    principal: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    order = await OrderService.place_order(db, principal.user_id)
    return OrderPlaced(msg="Order placed", order_id=order.id)


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    principal: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await OrderService.list_orders(db, principal.user_id)
