"""EVM mechanism for x402 payments and sign-in."""

from .constants import NETWORK_ALIASES, NETWORK_CONFIGS, SCHEME_EXACT, AssetInfo, NetworkConfig
from .exact import ExactEvmScheme
from .signers import EthAccountSigner
from .types import ClientEvmSigner, TypedDataDomain
from .utils import (
    NetworkInfo,
    create_nonce,
    get_evm_chain_id,
    is_evm_network,
    normalize_address,
    resolve_network,
    to_caip2,
)

__all__ = [
    # Constants
    "SCHEME_EXACT",
    "NETWORK_CONFIGS",
    "NETWORK_ALIASES",
    "AssetInfo",
    "NetworkConfig",
    # Signing
    "ClientEvmSigner",
    "EthAccountSigner",
    "TypedDataDomain",
    # Schemes
    "ExactEvmScheme",
    # Utilities
    "NetworkInfo",
    "to_caip2",
    "resolve_network",
    "get_evm_chain_id",
    "is_evm_network",
    "create_nonce",
    "normalize_address",
]
