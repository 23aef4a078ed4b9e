"""EVM mechanism constants - network configs and typed-data definitions."""

from typing import TypedDict

# Scheme identifier
SCHEME_EXACT = "exact"

# CAIP-2 namespace for EVM chains
EVM_NAMESPACE = "eip155"

# Default token decimals for USDC
DEFAULT_DECIMALS = 6

# Default validity buffer (10 minutes before now for clock skew)
DEFAULT_VALIDITY_BUFFER = 600


class _AssetInfoRequired(TypedDict):
    """Required fields for a token asset."""

    address: str
    name: str
    version: str
    decimals: int


class AssetInfo(_AssetInfoRequired, total=False):
    """Information about a token asset."""

    symbol: str


class _NetworkConfigRequired(TypedDict):
    """Required fields for an EVM network configuration."""

    chain_id: int


class NetworkConfig(_NetworkConfigRequired, total=False):
    """Configuration for an EVM network."""

    name: str
    v1_name: str
    testnet: bool
    default_asset: AssetInfo


def _usdc(address: str, name: str = "USD Coin") -> AssetInfo:
    return {"address": address, "name": name, "version": "2", "decimals": 6, "symbol": "USDC"}


# Network configurations keyed by CAIP-2 identifier
NETWORK_CONFIGS: dict[str, NetworkConfig] = {
    "eip155:8453": {
        "chain_id": 8453,
        "name": "Base",
        "v1_name": "base",
        "default_asset": _usdc("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"),
    },
    "eip155:84532": {
        "chain_id": 84532,
        "name": "Base Sepolia",
        "v1_name": "base-sepolia",
        "testnet": True,
        "default_asset": _usdc("0x036CbD53842c5426634e7929541eC2318f3dCF7e", name="USDC"),
    },
    "eip155:1": {
        "chain_id": 1,
        "name": "Ethereum",
        "v1_name": "ethereum",
        "default_asset": _usdc("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"),
    },
    "eip155:11155111": {
        "chain_id": 11155111,
        "name": "Sepolia",
        "v1_name": "ethereum-sepolia",
        "testnet": True,
        "default_asset": _usdc("0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238", name="USDC"),
    },
    "eip155:10": {
        "chain_id": 10,
        "name": "OP Mainnet",
        "v1_name": "optimism",
        "default_asset": _usdc("0x0b2C639c533813f4Aa9D7837CAf62653d097Ff85"),
    },
    "eip155:42161": {
        "chain_id": 42161,
        "name": "Arbitrum One",
        "v1_name": "arbitrum",
        "default_asset": _usdc("0xaf88d065e77c8cC2239327C5EDb3A432268e5831"),
    },
    "eip155:137": {
        "chain_id": 137,
        "name": "Polygon",
        "v1_name": "polygon",
        "default_asset": _usdc("0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359"),
    },
}

# V1 legacy network names -> CAIP-2
NETWORK_ALIASES: dict[str, str] = {
    config["v1_name"]: caip2 for caip2, config in NETWORK_CONFIGS.items()
}

# EIP-3009 TransferWithAuthorization typed-data definition
TRANSFER_WITH_AUTHORIZATION_TYPES: dict[str, list[dict[str, str]]] = {
    "TransferWithAuthorization": [
        {"name": "from", "type": "address"},
        {"name": "to", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "validAfter", "type": "uint256"},
        {"name": "validBefore", "type": "uint256"},
        {"name": "nonce", "type": "bytes32"},
    ]
}
