from datetime import datetime
from typing import List, Optional

from services.product_service.schemas import ProductResponse
from shared.schemas import ApiModel, Money


class OrderItemResponse(ApiModel):
    product_id: int
    product: Optional[ProductResponse] = None
    quantity: int


class OrderResponse(ApiModel):
    id: int
    user_id: int
    items: List[OrderItemResponse]
    total_price: Money
    created_at: datetime


class OrderPlaced(ApiModel):
    msg: str
    order_id: int
