from typing import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.cart_service.repository import CartRepository
from shared.errors import BadRequest, NotFound

from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductUpdate

logger = structlog.get_logger(__name__)

# Columns that may be absent from an update but never set to null.
_REQUIRED_FIELDS = ("name", "price")


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            category=data.category,
        )
        product = await ProductRepository.create_product(db, product)
        logger.info("product_created", product_id=product.id)
        return product

    @staticmethod
    async def list_products(db: AsyncSession, search: str = "", page: int = 1, limit: int = 10) -> Sequence[Product]:
        offset = (page - 1) * limit
        return await ProductRepository.list_products(db, search=search, offset=offset, limit=limit)

    @staticmethod
    async def get_product(db: AsyncSession, product_id: int) -> Product:
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate) -> Product:
        changes = data.model_dump(exclude_unset=True)
        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise BadRequest(f"{field} cannot be null")

        product = await ProductService.get_product(db, product_id)
        for field, value in changes.items():
            setattr(product, field, value)

        product = await ProductRepository.update_product(db, product)
        logger.info("product_updated", product_id=product.id, fields=sorted(changes))
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int) -> None:
        product = await ProductService.get_product(db, product_id)
        # Drop the product from every cart in the same transaction as the delete.
        removed = await CartRepository.purge_product(db, product_id)
        await ProductRepository.delete_product(db, product)
        logger.info("product_deleted", product_id=product_id, cart_lines_removed=removed)
