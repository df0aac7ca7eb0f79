from typing import Optional, Dict
from pydantic import BaseModel

from mintcart.utils.types import ChainType, ServiceType, ChainId


class AliasModel(BaseModel):
    aliases: Optional[Dict[ServiceType, str]] = None

    def get_alias(self, service: ServiceType) -> Optional[str]:
        if self.aliases:
            return self.aliases.get(service)


class NativeCurrency(BaseModel):
    name: str
    ticker: str
    decimals: int


class Chain(AliasModel):
    id: ChainId
    name: str
    chain_type: ChainType
    nativeCurrency: NativeCurrency
    rpc_url: Optional[str] = None
    product_factory: Optional[str] = None
