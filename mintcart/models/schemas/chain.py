from typing import Optional
from pydantic import BaseModel

from mintcart.utils.chains.types import NativeCurrency
from mintcart.utils.types import ChainId


class SupportedChain(BaseModel):
    id: ChainId
    name: str
    nativeCurrency: NativeCurrency
    product_factory: Optional[str] = None
