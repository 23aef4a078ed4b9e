"""x402call - pay-per-call and sign-in HTTP calls over the x402 protocol.

Quick Start:
    ```python
    from x402call import create_client, make_x402_request, authed_call
    from x402call.mechanisms.evm import EthAccountSigner

    signer = EthAccountSigner.from_key(private_key)

    # Paid call: request, read the 402, pay, retry once
    client = create_client(signer, preferred_network="eip155:8453")
    result = await make_x402_request(client, "https://api.example.com/data")

    # Probe without paying
    probe = await query_endpoint("https://api.example.com/data")

    # Sign-in call: request, read the challenge, sign, retry once
    auth = await authed_call(signer, "https://api.example.com/me")
    ```
"""

# Core components
from .client import default_payment_selector, max_amount, prefer_network, x402Client
from .config import ClientConfig, ConfigError
from .factory import create_client, create_client_from_config, get_parse_client
from .http.authentication import authed_call
from .http.negotiation import make_x402_request, query_endpoint
from .http.x402_http_client import x402HTTPClient
from .protocol import is_v1_response, normalize_payment_required

# Types (re-export commonly used types)
from .schemas import (
    X402_VERSION,
    X402_VERSION_V1,
    AuthenticationInfo,
    AuthError,
    AuthErrorKind,
    AuthResult,
    InvalidRequestError,
    NegotiationResult,
    NoMatchingRequirementsError,
    NormalizedPaymentRequired,
    NormalizedRequirement,
    PaymentRequiredNormalizationError,
    PaymentRequiredParseError,
    Phase,
    PhaseError,
    QueryResult,
    SchemeNotFoundError,
    SettlementInfo,
    SettlementStatus,
    SIWxError,
    UnsupportedNetworkError,
    X402Error,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Engines
    "make_x402_request",
    "query_endpoint",
    "authed_call",
    # Factory
    "create_client",
    "create_client_from_config",
    "get_parse_client",
    # Clients
    "x402Client",
    "x402HTTPClient",
    "default_payment_selector",
    "prefer_network",
    "max_amount",
    # Normalization
    "is_v1_response",
    "normalize_payment_required",
    # Config
    "ClientConfig",
    "ConfigError",
    # Versions
    "X402_VERSION",
    "X402_VERSION_V1",
    # Models
    "NormalizedRequirement",
    "NormalizedPaymentRequired",
    "Phase",
    "PhaseError",
    "SettlementStatus",
    "SettlementInfo",
    "NegotiationResult",
    "QueryResult",
    "AuthErrorKind",
    "AuthError",
    "AuthenticationInfo",
    "AuthResult",
    # Errors
    "X402Error",
    "PaymentRequiredParseError",
    "InvalidRequestError",
    "PaymentRequiredNormalizationError",
    "NoMatchingRequirementsError",
    "SchemeNotFoundError",
    "UnsupportedNetworkError",
    "SIWxError",
]
