"""Builders for payment-capable and read-only HTTP clients."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .client import prefer_network, x402Client
from .http.constants import DEFAULT_HTTP_TIMEOUT
from .http.x402_http_client import x402HTTPClient
from .mechanisms.evm.exact import ExactEvmScheme
from .mechanisms.evm.signers import EthAccountSigner
from .mechanisms.evm.types import ClientEvmSigner

if TYPE_CHECKING:
    from .config import ClientConfig

# Fixed, publicly known key; the parse client never produces a usable payment
PARSE_CLIENT_KEY = "0x0000000000000000000000000000000000000000000000000000000000000001"

# Every EVM chain, v1 names included
EVM_WILDCARD = "eip155:*"

_parse_client: x402HTTPClient | None = None


def get_parse_client() -> x402HTTPClient:
    """Get the cached read-only client used to read 402 responses.

    Built on first use and shared for the life of the process. It holds no
    per-call state, so concurrent probes may share it.
    """
    global _parse_client
    if _parse_client is None:
        core = x402Client().register(
            EVM_WILDCARD, ExactEvmScheme(EthAccountSigner.from_key(PARSE_CLIENT_KEY))
        )
        _parse_client = x402HTTPClient(core)
    return _parse_client


def create_client(
    signer: ClientEvmSigner,
    preferred_network: str | None = None,
    *,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> x402HTTPClient:
    """Build a payment-capable client for one signer.

    Args:
        signer: Signer that pays.
        preferred_network: Network to pick when the server accepts several
            (CAIP-2 or v1 name). Without it, the first acceptable requirement
            in server order is used.
        timeout: Transport timeout in seconds used by ``make_x402_request``
            when it opens its own connection.

    Returns:
        Client for ``make_x402_request``.
    """
    core = x402Client().register(EVM_WILDCARD, ExactEvmScheme(signer))
    if preferred_network:
        core.register_policy(prefer_network(preferred_network))
    return x402HTTPClient(core, timeout=timeout)


def create_client_from_config(config: "ClientConfig") -> x402HTTPClient:
    """Build a payment-capable client from loaded configuration."""
    return create_client(
        EthAccountSigner.from_key(config.private_key),
        preferred_network=config.preferred_network,
        timeout=config.http_timeout,
    )
