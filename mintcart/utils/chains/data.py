# mintcart/utils/chains/data.py
from .types import Chain, ServiceType, NativeCurrency
from mintcart.utils.types import ChainId, ChainType

ETHER = NativeCurrency(name="Ether", ticker="ETH", decimals=18)

CHAIN_DATA_MAP = {
    ChainId.ETH: Chain(
        id=ChainId.ETH,
        name="Ethereum",
        chain_type=ChainType.EVM,
        nativeCurrency=ETHER,
        aliases={ServiceType.ALCHEMY: "eth-mainnet"},
    ),
    ChainId.OPTIMISM: Chain(
        id=ChainId.OPTIMISM,
        name="Optimism",
        chain_type=ChainType.EVM,
        nativeCurrency=ETHER,
        aliases={ServiceType.ALCHEMY: "opt-mainnet"},
    ),
    ChainId.POLYGON: Chain(
        id=ChainId.POLYGON,
        name="Polygon",
        chain_type=ChainType.EVM,
        nativeCurrency=NativeCurrency(name="POL", ticker="POL", decimals=18),
        aliases={ServiceType.ALCHEMY: "polygon-mainnet"},
    ),
    ChainId.BASE: Chain(
        id=ChainId.BASE,
        name="Base",
        chain_type=ChainType.EVM,
        nativeCurrency=ETHER,
        aliases={ServiceType.ALCHEMY: "base-mainnet"},
    ),
    ChainId.ARBITRUM: Chain(
        id=ChainId.ARBITRUM,
        name="Arbitrum",
        chain_type=ChainType.EVM,
        nativeCurrency=ETHER,
        aliases={ServiceType.ALCHEMY: "arb-mainnet"},
    ),
    ChainId.SEPOLIA: Chain(
        id=ChainId.SEPOLIA,
        name="Sepolia",
        chain_type=ChainType.EVM,
        nativeCurrency=ETHER,
        aliases={ServiceType.ALCHEMY: "eth-sepolia"},
    ),
    ChainId.SEPBASE: Chain(
        id=ChainId.SEPBASE,
        name="Base Sepolia",
        chain_type=ChainType.EVM,
        nativeCurrency=ETHER,
        aliases={ServiceType.ALCHEMY: "base-sepolia"},
    ),
    ChainId.HARDHAT: Chain(
        id=ChainId.HARDHAT,
        name="Hardhat",
        chain_type=ChainType.EVM,
        nativeCurrency=ETHER,
        rpc_url="http://127.0.0.1:8545",
        # first contract deployed by the default hardhat account
        product_factory="0x5FbDB2315678afecb367f032d93F642f64180aa3",
    ),
}
