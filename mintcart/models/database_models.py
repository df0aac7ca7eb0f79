from sqlalchemy import (
    BigInteger,
    Column,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base
import cuid2


Base = declarative_base()


class TimestampMixin:
    """Mixin for adding timestamp fields to models"""

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Product(TimestampMixin, Base):
    """Off-chain copy of a product created through the factory contract"""

    __tablename__ = "Product"
    __table_args__ = (
        UniqueConstraint("chain_id", "owner_address", "slug", name="uq_product_owner_slug"),
    )

    id = Column(String, primary_key=True, default=cuid2.cuid_wrapper())
    chain_id = Column(BigInteger, nullable=False, index=True)
    owner_address = Column(String(42), nullable=False, index=True)

    contract_address = Column(String(42), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    slug = Column(String(255), nullable=False)
    token_uri = Column(String, nullable=False)

    # decimal string as entered, e.g. "0.05"
    price = Column(String(80), nullable=False)
    supply = Column(Integer, nullable=False)
    sold = Column(Integer, nullable=False, default=0)
