# services/product.py
from typing import Optional, List
import logging

from mintcart.models.database_models import Product
from mintcart.models.schemas.product import ProductRecord
from mintcart.services.base import BaseService

logger = logging.getLogger(__name__)


class ProductService(BaseService[Product]):
    conflict_detail = "A product with this slug already exists for this owner"

    async def create(self, chain_id: int, owner_address: str, data: ProductRecord) -> Product:
        product = Product(
            chain_id=int(chain_id),
            owner_address=owner_address.lower(),
            contract_address=data.contract,
            name=data.name,
            description=data.description,
            slug=data.slug,
            token_uri=data.token_uri,
            price=data.price,
            supply=data.supply,
            sold=data.sold,
        )

        def _add():
            self.db.add(product)
            self.db.flush()
            return product

        product = await self._handle_db_operation(_add, f"product {data.slug} for {owner_address}")
        self.db.refresh(product)
        logger.info("Stored product %s for %s on chain %s", product.slug, owner_address, chain_id)
        return product

    async def get_by_slug(self, chain_id: int, owner_address: str, slug: str) -> Optional[Product]:
        return self.db.query(Product).filter(
            Product.chain_id == int(chain_id),
            Product.owner_address == owner_address.lower(),
            Product.slug == slug,
        ).first()

    async def list_by_owner(
        self,
        chain_id: int,
        owner_address: str,
        skip: int = 0,
        limit: int = 100
    ) -> List[Product]:
        return self.db.query(Product)\
            .filter(
                Product.chain_id == int(chain_id),
                Product.owner_address == owner_address.lower(),
            )\
            .order_by(Product.created_at.desc())\
            .offset(skip)\
            .limit(limit)\
            .all()
