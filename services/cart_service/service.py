import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.repository import ProductRepository
from shared.errors import BadRequest, NotFound
from shared.observability import ecomm_cart_mutations_total

from .models import Cart
from .repository import CartRepository

logger = structlog.get_logger(__name__)


class CartService:

    @staticmethod
    async def get_cart(db: AsyncSession, user_id: int) -> Cart:
        """Returns the user's cart, creating an empty one on first access."""
        cart = await CartRepository.get_cart(db, user_id)
        if cart:
            return cart

        try:
            await CartRepository.create_cart(db, Cart(user_id=user_id))
            logger.info("cart_created", user_id=user_id)
        except IntegrityError:
            # a concurrent request created it first
            await db.rollback()
        return await CartRepository.get_cart(db, user_id)

    @staticmethod
    async def set_item(db: AsyncSession, user_id: int, product_id: int, quantity: int) -> None:
        if quantity < 1:
            raise BadRequest("Invalid data")

        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise NotFound("Product not found")

        cart_id = (await CartService.get_cart(db, user_id)).id
        try:
            await CartRepository.set_item(db, cart_id, product_id, quantity)
        except IntegrityError:
            # the line was inserted concurrently; apply ours as a replace
            await db.rollback()
            await CartRepository.set_item(db, cart_id, product_id, quantity)

        ecomm_cart_mutations_total.labels(operation="set_item").inc()
        logger.info("cart_item_set", user_id=user_id, product_id=product_id, quantity=quantity)

    @staticmethod
    async def remove_item(db: AsyncSession, user_id: int, product_id: int) -> None:
        cart = await CartRepository.get_cart(db, user_id)
        if not cart:
            raise NotFound("Cart not found")

        removed = await CartRepository.remove_item(db, cart.id, product_id)
        ecomm_cart_mutations_total.labels(operation="remove_item").inc()
        logger.info("cart_item_removed", user_id=user_id, product_id=product_id, removed=removed)

    @staticmethod
    async def clear(db: AsyncSession, cart: Cart) -> int:
        """Empties the cart inside the caller's transaction; does not commit."""
        return await CartRepository.clear_cart(db, cart.id)
