"""Call-scoped result types returned by the negotiation and authentication engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from .normalized import NormalizedPaymentRequired

T = TypeVar("T")


class Phase(str, Enum):
    """Negotiation phase in which a call stopped."""

    INITIAL_REQUEST = "initial_request"
    PARSE_REQUIREMENTS = "parse_requirements"
    CREATE_SIGNATURE = "create_signature"
    PAID_REQUEST = "paid_request"
    SETTLEMENT = "settlement"


class SettlementStatus(str, Enum):
    """Outcome of reading the settlement confirmation from a paid response."""

    SETTLED = "settled"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class PhaseError:
    """Failure descriptor tagged with the phase that produced it."""

    phase: Phase
    message: str
    details: dict[str, Any] | None = None


@dataclass(frozen=True)
class SettlementInfo:
    """Which transaction satisfied the paid retry."""

    transaction: str
    network: str
    payer: str


@dataclass(frozen=True)
class NegotiationResult(Generic[T]):
    """Outcome of one paid call.

    ``payment_required`` is populated as soon as requirements were parsed, so
    callers can show what was asked for even when the call failed.
    """

    success: bool
    status_code: int
    data: T | None = None
    settlement: SettlementInfo | None = None
    settlement_status: SettlementStatus | None = None
    settlement_error: str | None = None
    payment_required: NormalizedPaymentRequired | None = None
    error: PhaseError | None = None


@dataclass(frozen=True)
class QueryResult:
    """Outcome of probing an endpoint without paying."""

    success: bool
    status_code: int
    x402_version: int | None = None
    payment_required: NormalizedPaymentRequired | None = None
    discovery: dict[str, Any] | None = None
    error: str | None = None
    parse_errors: list[str] = field(default_factory=list)
    raw_headers: dict[str, str] = field(default_factory=dict)
    raw_body: Any = None


class AuthErrorKind(str, Enum):
    """Why an authenticated call stopped."""

    INITIAL_REQUEST = "initial_request"
    PARSE_REQUIREMENTS = "parse_requirements"
    MISSING_EXTENSION = "missing_extension"
    INVALID_CHALLENGE = "invalid_challenge"
    UNSUPPORTED_CHAIN = "unsupported_chain"
    CREATE_SIGNATURE = "create_signature"
    AUTHED_REQUEST = "authed_request"


@dataclass(frozen=True)
class AuthError:
    kind: AuthErrorKind
    message: str
    details: dict[str, Any] | None = None

    @property
    def requires_payment(self) -> bool:
        """True when the resource wants payment rather than authentication."""
        return self.kind is AuthErrorKind.MISSING_EXTENSION


@dataclass(frozen=True)
class AuthenticationInfo:
    address: str
    domain: str
    chain_id: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of one Sign-In-With-X authenticated call."""

    success: bool
    status_code: int
    data: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    payment_required: NormalizedPaymentRequired | None = None
    authentication: AuthenticationInfo | None = None
    error: AuthError | None = None
