"""Wire models, normalized models and result types."""

from .base import X402_VERSION, X402_VERSION_V1, BaseX402Model, Network
from .errors import (
    InvalidRequestError,
    NoMatchingRequirementsError,
    PaymentRequiredNormalizationError,
    PaymentRequiredParseError,
    SchemeNotFoundError,
    SIWxError,
    UnsupportedNetworkError,
    X402Error,
)
from .normalized import NormalizedPaymentRequired, NormalizedRequirement
from .payments import (
    PaymentPayload,
    PaymentRequired,
    PaymentRequirements,
    ResourceInfo,
    SettleResponse,
)
from .results import (
    AuthenticationInfo,
    AuthError,
    AuthErrorKind,
    AuthResult,
    NegotiationResult,
    Phase,
    PhaseError,
    QueryResult,
    SettlementInfo,
    SettlementStatus,
)
from .v1 import PaymentPayloadV1, PaymentRequiredV1, PaymentRequirementsV1

__all__ = [
    # Base
    "X402_VERSION",
    "X402_VERSION_V1",
    "BaseX402Model",
    "Network",
    # Errors
    "X402Error",
    "PaymentRequiredParseError",
    "InvalidRequestError",
    "PaymentRequiredNormalizationError",
    "NoMatchingRequirementsError",
    "SchemeNotFoundError",
    "UnsupportedNetworkError",
    "SIWxError",
    # V2 wire
    "ResourceInfo",
    "PaymentRequirements",
    "PaymentRequired",
    "PaymentPayload",
    "SettleResponse",
    # V1 wire
    "PaymentRequirementsV1",
    "PaymentRequiredV1",
    "PaymentPayloadV1",
    # Normalized
    "NormalizedRequirement",
    "NormalizedPaymentRequired",
    # Results
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
]
