# models/schemas/product.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from mintcart.utils.types import ChainId
from .base import TimestampModel

# RFC 3986 unreserved characters, the slug ends up in a public path
SLUG_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9._~-]*$"


class ProductMetadata(BaseModel):
    """Document published to IPFS for a product"""
    name: str
    slug: str
    description: str = ""


class ProductDraft(BaseModel):
    """Form input for a new product.

    The price is kept as the decimal string the user typed; it is converted
    to the chain's smallest unit by the workflow.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, examples=["Mug"])
    description: str = Field(default="", examples=["A mug"])
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN, examples=["mug"])
    price: str = Field(..., min_length=1, examples=["0.05"])
    supply: int = Field(..., ge=0, examples=[10])

    @field_validator("description", mode="before")
    @classmethod
    def none_description(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    def metadata(self) -> ProductMetadata:
        return ProductMetadata(name=self.name, slug=self.slug, description=self.description)


class ProductRecord(BaseModel):
    """Denormalized copy of an on-chain product kept by the backend."""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    contract: str = Field(..., min_length=1, examples=["0x5FbDB2315678afecb367f032d93F642f64180aa3"])
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    token_uri: str = Field(..., alias="tokenUri", examples=["ipfs://Qm123"])
    price: str = Field(..., examples=["0.05"])
    supply: int = Field(..., ge=0)
    sold: int = Field(default=0, ge=0)


class Product(ProductRecord, TimestampModel):
    id: str
    chain_id: ChainId
    owner_address: str

    @classmethod
    def from_orm(cls, obj) -> "Product":
        return cls(
            id=obj.id,
            chain_id=obj.chain_id,
            owner_address=obj.owner_address,
            contract=obj.contract_address,
            name=obj.name,
            description=obj.description,
            slug=obj.slug,
            token_uri=obj.token_uri,
            price=obj.price,
            supply=obj.supply,
            sold=obj.sold,
            created_at=obj.created_at,
            updated_at=obj.updated_at,
        )


class CreateProductResponse(BaseModel):
    redirect: str = Field(examples=["/dashboard"])
    url: str = Field(examples=["https://mintcart.xyz/0x5FbD...0aa3/mug"])
    metadata_url: str = Field(examples=["https://ipfs.io/ipfs/QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG"])
    tx_hash: str
    product: ProductRecord


class WorkflowErrorResponse(BaseModel):
    kind: str
    message: str
