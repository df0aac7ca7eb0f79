# routes/chains.py
from typing import List
from fastapi import APIRouter

from mintcart.models.schemas.chain import SupportedChain
from mintcart.utils.chains.queries import get_all_chains, get_factory_address

router = APIRouter(prefix="/api/chains", tags=["chains"])


@router.get("", response_model=List[SupportedChain])
async def list_chains():
    """
    List the chains this storefront knows about. Products can only be
    created where product_factory is set.
    """
    chains = []
    for chain in get_all_chains():
        try:
            factory = get_factory_address(chain.id)
        except ValueError:
            factory = None
        chains.append(
            SupportedChain(
                id=chain.id,
                name=chain.name,
                nativeCurrency=chain.nativeCurrency,
                product_factory=factory,
            )
        )
    return chains
