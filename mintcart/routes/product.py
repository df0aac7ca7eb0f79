# routes/product.py
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from mintcart.database.dependencies import get_db
from mintcart.services.product import ProductService
from mintcart.models.schemas.product import Product, ProductRecord
from mintcart.utils.types import ChainId

router = APIRouter(prefix="/api/{chain_id}/{owner_address}/products", tags=["products"])


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def create_product(
    chain_id: ChainId,
    owner_address: str,
    data: ProductRecord,
    db: Session = Depends(get_db)
):
    """Store the record of a product created on chain."""
    service = ProductService(db)
    product = await service.create(chain_id, owner_address, data)

    return Product.from_orm(product)


@router.get("", response_model=List[Product])
async def list_products(
    chain_id: ChainId,
    owner_address: str,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db)
):
    """List the products of an owner on a chain."""
    service = ProductService(db)
    products = await service.list_by_owner(chain_id, owner_address, skip=skip, limit=limit)

    return [Product.from_orm(product) for product in products]


@router.get("/{slug}", response_model=Product)
async def get_product(
    chain_id: ChainId,
    owner_address: str,
    slug: str,
    db: Session = Depends(get_db)
):
    """Get a product by its slug."""
    service = ProductService(db)
    product = await service.get_by_slug(chain_id, owner_address, slug)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return Product.from_orm(product)
