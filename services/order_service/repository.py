from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Order


class OrderRepository:

    @staticmethod
    async def add_order(db: AsyncSession, order: Order) -> Order:
        """Stages the order and assigns its id. The caller owns the commit."""
        db.add(order)
        await db.flush()
        return order

    @staticmethod
    async def list_orders_for_user(db: AsyncSession, user_id: int) -> Sequence[Order]:
        result = await db.execute(
            select(Order).where(Order.user_id == user_id).order_by(Order.id)
        )
        return result.scalars().all()
