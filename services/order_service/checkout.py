"""
Checkout: turns a user's cart into an immutable order.

The flow moves through Validating -> Pricing -> Persisting -> Cleared and ends
in Completed or Rejected. Persisting the order and clearing the cart share one
database transaction, and the cart row is locked while it runs, so an order is
never created without its cart being emptied (and vice versa).
"""
import time
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.cart_service.models import Cart
from services.cart_service.repository import CartRepository
from services.cart_service.service import CartService
from shared.errors import AppError, BadRequest, Conflict, EmptyCart, Internal
from shared.observability import ecomm_checkout_duration_seconds, ecomm_checkout_total

from .models import Order, OrderItem
from .repository import OrderRepository

logger = structlog.get_logger(__name__)

CENT = Decimal("0.01")
# Largest amount orders.total_price (NUMERIC(12, 2)) can hold.
MAX_TOTAL = Decimal("9999999999.99")


class CheckoutState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PRICING = "pricing"
    PERSISTING = "persisting"
    CLEARED = "cleared"
    COMPLETED = "completed"
    REJECTED = "rejected"


def compute_total(lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
    """Sum of price * quantity, exact to the cent."""
    total = sum((Decimal(price) * quantity for price, quantity in lines), Decimal("0"))
    return total.quantize(CENT)


class CheckoutContext:
    def __init__(self, user_id: int):
        self.user_id = user_id
        self.state = CheckoutState.IDLE
        self.cart: Optional[Cart] = None
        self.total = Decimal("0.00")
        self.order: Optional[Order] = None


class CheckoutOrchestrator:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.steps = [
            (CheckoutState.VALIDATING, self._validate),
            (CheckoutState.PRICING, self._price),
            (CheckoutState.PERSISTING, self._persist),
            (CheckoutState.CLEARED, self._clear),
        ]

    async def execute(self, user_id: int) -> Order:
        """Executes steps sequentially and commits once. Rolls back on any failure."""
        ctx = CheckoutContext(user_id)
        log = logger.bind(user_id=user_id)
        started = time.perf_counter()

        try:
            for state, step in self.steps:
                self._transition(ctx, state, log)
                await step(ctx)
            await self.db.commit()
        except AppError as e:
            await self.db.rollback()
            self._transition(ctx, CheckoutState.REJECTED, log, reason=e.kind)
            ecomm_checkout_total.labels(status="rejected").inc()
            raise
        except SQLAlchemyError as e:
            failed_at = ctx.state.value
            await self.db.rollback()
            log.error("checkout_failed", state=failed_at, error_type=type(e).__name__)
            ecomm_checkout_total.labels(status="failed").inc()
            raise Internal() from e
        finally:
            ecomm_checkout_duration_seconds.observe(time.perf_counter() - started)

        self._transition(ctx, CheckoutState.COMPLETED, log, order_id=ctx.order.id, total=str(ctx.total))
        ecomm_checkout_total.labels(status="success").inc()
        return ctx.order

    @staticmethod
    def _transition(ctx: CheckoutContext, state: CheckoutState, log, **fields):
        log.info("checkout_state", previous=ctx.state.value, state=state.value, **fields)
        ctx.state = state

    async def _validate(self, ctx: CheckoutContext):
        cart = await CartRepository.get_cart(self.db, ctx.user_id, for_update=True)
        if not cart or not cart.items:
            raise EmptyCart("Cart is empty")
        ctx.cart = cart

    async def _price(self, ctx: CheckoutContext):
        missing = [item.product_id for item in ctx.cart.items if item.product is None]
        if missing:
            raise Conflict(f"Products no longer available: {', '.join(map(str, missing))}")
        total = compute_total((item.product.price, item.quantity) for item in ctx.cart.items)
        if total > MAX_TOTAL:
            raise BadRequest("Order total exceeds the maximum allowed amount")
        ctx.total = total

    async def _persist(self, ctx: CheckoutContext):
        order = Order(
            user_id=ctx.user_id,
            total_price=ctx.total,
            created_at=datetime.now(timezone.utc),
            items=[OrderItem(product_id=item.product_id, quantity=item.quantity) for item in ctx.cart.items],
        )
        ctx.order = await OrderRepository.add_order(self.db, order)

    async def _clear(self, ctx: CheckoutContext):
        await CartService.clear(self.db, ctx.cart)
