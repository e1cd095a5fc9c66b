from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import MAX_ID, Message
from shared.security import Principal, get_current_user

from .schemas import CartItemSet, CartResponse
from .service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartResponse)
async def get_cart(
    principal: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await CartService.get_cart(db, principal.user_id)


@router.post("", response_model=Message)
async def set_item(
    item: CartItemSet,
    principal: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await CartService.set_item(db, principal.user_id, item.product_id, item.quantity)
    return Message(msg="Cart updated")


@router.delete("/{product_id}", response_model=Message)
async def remove_item(
    product_id: int = Path(gt=0, le=MAX_ID),
    principal: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await CartService.remove_item(db, principal.user_id, product_id)
    return Message(msg="Item removed from cart")
