from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Cart, CartItem


class CartRepository:

    @staticmethod
    async def create_cart(db: AsyncSession, cart: Cart) -> Cart:
        db.add(cart)
        await db.commit()
        await db.refresh(cart)
        return cart

    @staticmethod
    async def get_cart(db: AsyncSession, user_id: int, for_update: bool = False) -> Optional[Cart]:
        stmt = select(Cart).where(Cart.user_id == user_id).execution_options(populate_existing=True)
        if for_update:
            # Ignored by dialects without row locks (SQLite).
            stmt = stmt.with_for_update()
        result = await db.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def set_item(db: AsyncSession, cart_id: int, product_id: int, quantity: int) -> None:
        """Replaces the quantity of an existing line or appends a new one."""
        result = await db.execute(
            select(CartItem)
            .where(CartItem.cart_id == cart_id)
            .where(CartItem.product_id == product_id)
        )
        existing_item = result.scalars().first()

        if existing_item:
            existing_item.quantity = quantity
        else:
            db.add(CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity))

        await db.commit()

    @staticmethod
    async def remove_item(db: AsyncSession, cart_id: int, product_id: int) -> int:
        stmt = delete(CartItem).where(
            CartItem.cart_id == cart_id,
            CartItem.product_id == product_id
        )
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount

    @staticmethod
    async def clear_cart(db: AsyncSession, cart_id: int) -> int:
        """Deletes every line of the cart. The caller owns the commit."""
        stmt = delete(CartItem).where(CartItem.cart_id == cart_id)
        result = await db.execute(stmt)
        return result.rowcount

    @staticmethod
    async def purge_product(db: AsyncSession, product_id: int) -> int:
        """Removes a product from every cart. The caller owns the commit."""
        stmt = delete(CartItem).where(CartItem.product_id == product_id)
        result = await db.execute(stmt)
        return result.rowcount
