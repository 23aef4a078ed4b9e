"""EVM utility functions for network lookup, addresses and nonces."""

from __future__ import annotations

import os
from dataclasses import dataclass

from eth_utils import is_hex_address, to_checksum_address

from ...schemas import UnsupportedNetworkError
from .constants import EVM_NAMESPACE, NETWORK_ALIASES, NETWORK_CONFIGS, AssetInfo


@dataclass(frozen=True)
class NetworkInfo:
    """Resolved metadata for an EVM network.

    Attributes:
        caip2: Canonical CAIP-2 identifier (e.g., "eip155:8453").
        chain_id: Numeric chain ID.
        name: Human-readable chain name (falls back to the identifier).
        default_asset: Default payment asset, when known.
    """

    caip2: str
    chain_id: int
    name: str
    default_asset: AssetInfo | None = None


def to_caip2(network: str) -> str:
    """Convert any network identifier to CAIP-2 format.

    CAIP-2 identifiers pass through unchanged, known v1 names are mapped,
    and anything else is returned as-is.

    Args:
        network: CAIP-2 identifier or v1 network name.

    Returns:
        CAIP-2 identifier when one is known.
    """
    if ":" in network:
        return network
    return NETWORK_ALIASES.get(network.lower(), network)


def get_evm_chain_id(network: str) -> int:
    """Extract the numeric chain ID from a CAIP-2 or v1 network identifier.

    Args:
        network: Network identifier (e.g., "eip155:8453" or "base").

    Returns:
        Numeric chain ID.

    Raises:
        UnsupportedNetworkError: If the network is not an eip155 network.
    """
    caip2 = to_caip2(network)
    namespace, _, reference = caip2.partition(":")
    if namespace != EVM_NAMESPACE:
        raise UnsupportedNetworkError(
            f"Unsupported network format: {network} (expected eip155:CHAIN_ID)"
        )
    try:
        return int(reference)
    except ValueError as e:
        raise UnsupportedNetworkError(f"Invalid CAIP-2 network format: {network}") from e


def resolve_network(network: str) -> NetworkInfo:
    """Resolve a network identifier to its chain metadata.

    Returns full metadata for known networks, and a minimal record
    (chain ID only) for any valid but unknown eip155 network.

    Args:
        network: CAIP-2 identifier or v1 network name.

    Returns:
        Resolved network metadata.

    Raises:
        UnsupportedNetworkError: If the identifier is not an EVM network.
    """
    caip2 = to_caip2(network)
    config = NETWORK_CONFIGS.get(caip2)
    if config is not None:
        return NetworkInfo(
            caip2=caip2,
            chain_id=config["chain_id"],
            name=config.get("name", caip2),
            default_asset=config.get("default_asset"),
        )
    chain_id = get_evm_chain_id(caip2)
    return NetworkInfo(caip2=caip2, chain_id=chain_id, name=caip2)


def is_evm_network(network: str) -> bool:
    """Check if a network identifier resolves to an eip155 chain."""
    try:
        get_evm_chain_id(network)
    except UnsupportedNetworkError:
        return False
    return True


def create_nonce() -> str:
    """Generate random 32-byte nonce as hex string (0x...).

    Returns:
        Hex string with 0x prefix.
    """
    return "0x" + os.urandom(32).hex()


def normalize_address(address: str) -> str:
    """Normalize Ethereum address to EIP-55 checksummed format.

    Raises:
        ValueError: If address is invalid.
    """
    value = address.strip()
    if not value.startswith("0x"):
        value = "0x" + value
    if not is_hex_address(value):
        raise ValueError(f"Invalid EVM address: {address}")
    return to_checksum_address(value)


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string to bytes (handles 0x prefix)."""
    return bytes.fromhex(hex_str.removeprefix("0x"))


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()
