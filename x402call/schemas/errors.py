"""Exception hierarchy for the x402call package."""

from __future__ import annotations


class X402Error(Exception):
    """Base class for all x402call errors."""


class PaymentRequiredParseError(X402Error, ValueError):
    """Raised when a 402 response carries no recognizable payment requirements."""


class PaymentRequiredNormalizationError(X402Error, ValueError):
    """Raised when a 402 body cannot be classified or mapped to the normalized shape."""


class NoMatchingRequirementsError(X402Error):
    """Raised when no server requirement matches a registered scheme."""


class SchemeNotFoundError(X402Error):
    """Raised when no scheme client is registered for a requirement."""

    def __init__(self, scheme: str, network: str) -> None:
        self.scheme = scheme
        self.network = network
        super().__init__(f"No scheme '{scheme}' registered for network '{network}'")


class UnsupportedNetworkError(X402Error, ValueError):
    """Raised when a network identifier cannot be resolved to an EVM chain."""


class SIWxError(X402Error):
    """Raised when a Sign-In-With-X payload cannot be built, encoded or parsed."""


class InvalidRequestError(X402Error, ValueError):
    """Raised when a request cannot be built from the caller's URL or body."""
