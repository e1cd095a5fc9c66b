from typing import List

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import MAX_ID, Message
from shared.security import Role, require_role

from .schemas import ProductCreate, ProductCreated, ProductResponse, ProductUpdate
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])
admin_only = [Depends(require_role(Role.ADMIN))]
MAX_PAGE = 100_000


@router.get("", response_model=List[ProductResponse])
async def list_products(
    search: str = Query(default=""),
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    return await ProductService.list_products(db, search=search, page=page, limit=limit)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int = Path(gt=0, le=MAX_ID), db: AsyncSession = Depends(get_db)):
    return await ProductService.get_product(db, product_id)


@router.post("", response_model=ProductCreated, dependencies=admin_only)
async def create_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    created = await ProductService.create_product(db, product)
    return ProductCreated(msg="Product created", id=created.id)


@router.put("/{product_id}", response_model=Message, dependencies=admin_only)
async def update_product(
    changes: ProductUpdate,
    product_id: int = Path(gt=0, le=MAX_ID),
    db: AsyncSession = Depends(get_db),
):
    await ProductService.update_product(db, product_id, changes)
    return Message(msg="Product updated")


@router.delete("/{product_id}", response_model=Message, dependencies=admin_only)
async def delete_product(product_id: int = Path(gt=0, le=MAX_ID), db: AsyncSession = Depends(get_db)):
    await ProductService.delete_product(db, product_id)
    return Message(msg="Product deleted")
