from enum import Enum


class ChainId(int, Enum):
    ETH = 1
    OPTIMISM = 10
    POLYGON = 137
    BASE = 8453
    ARBITRUM = 42161

    SEPOLIA = 11155111
    SEPBASE = 84532

    HARDHAT = 31337


class ChainType(str, Enum):
    EVM = "EVM"


class ServiceType(str, Enum):
    ALCHEMY = "ALCHEMY"
