from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from .checkout import CheckoutOrchestrator
from .models import Order
from .repository import OrderRepository


class OrderService:

    @staticmethod
    async def place_order(db: AsyncSession, user_id: int) -> Order:
        return await CheckoutOrchestrator(db).execute(user_id)

    @staticmethod
    async def list_orders(db: AsyncSession, user_id: int) -> Sequence[Order]:
        return await OrderRepository.list_orders_for_user(db, user_id)
