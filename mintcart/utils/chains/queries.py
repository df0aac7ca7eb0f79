import os
from .types import Chain
from mintcart.utils.types import ChainId, ServiceType
from .data import CHAIN_DATA_MAP


def get_chain_by_id(chain_id: ChainId) -> Chain:
    """Get chain data by its ID."""
    chain = CHAIN_DATA_MAP.get(chain_id)
    if chain is None:
        raise ValueError(f"Chain {chain_id} not found")
    return chain


def get_all_chains() -> list[Chain]:
    """Get all chains."""
    return list(CHAIN_DATA_MAP.values())


def get_rpc_by_chain_id(chain_id: ChainId) -> str:
    """Get RPC URL by chain ID.

    RPC_URL_<chain id> wins over everything, then the chain's own RPC,
    then an Alchemy endpoint built from ALCHEMY_API_KEY.
    """
    chain = get_chain_by_id(chain_id)

    override = os.getenv(f"RPC_URL_{chain.id.value}")
    if override:
        return override
    if chain.rpc_url:
        return chain.rpc_url

    alias = chain.get_alias(ServiceType.ALCHEMY)
    ALCHEMY_API_KEY = os.getenv("ALCHEMY_API_KEY")
    if alias is None or ALCHEMY_API_KEY is None:
        raise ValueError(f"No RPC configured for chain {chain.name}")
    return f"https://{alias}.g.alchemy.com/v2/{ALCHEMY_API_KEY}"


def get_factory_address(chain_id: ChainId) -> str:
    """Get the product factory contract address deployed on a chain."""
    chain = get_chain_by_id(chain_id)

    address = os.getenv(f"PRODUCT_FACTORY_ADDRESS_{chain.id.value}") or chain.product_factory
    if address is None:
        raise ValueError(f"No product factory deployed on {chain.name}")
    return address


def get_native_decimals(chain_id: ChainId) -> int:
    return get_chain_by_id(chain_id).nativeCurrency.decimals
