from typing import List, Optional

from pydantic import Field

from services.product_service.schemas import ProductResponse
from shared.schemas import ApiModel, Id

MAX_QUANTITY = 10_000


class CartItemSet(ApiModel):
    product_id: Id
    quantity: int = Field(default=1, ge=1, le=MAX_QUANTITY)


class CartItemResponse(ApiModel):
    product_id: int
    product: Optional[ProductResponse] = None
    quantity: int


class CartResponse(ApiModel):
    id: int
    user_id: int
    items: List[CartItemResponse] = []
