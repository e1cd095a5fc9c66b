from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from shared.schemas import ApiModel, Money

ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Price = Annotated[Decimal, Field(ge=0, max_digits=12, decimal_places=2)]


class ProductCreate(BaseModel):
    name: ProductName
    description: Optional[str] = None
    price: Price
    category: Optional[str] = Field(default=None, max_length=100)


class ProductUpdate(BaseModel):
    """Partial update: only the fields present in the request body are applied."""

    name: Optional[ProductName] = None
    description: Optional[str] = None
    price: Optional[Price] = None
    category: Optional[str] = Field(default=None, max_length=100)


class ProductResponse(ApiModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Money
    category: Optional[str] = None


class ProductCreated(BaseModel):
    msg: str
    id: int
