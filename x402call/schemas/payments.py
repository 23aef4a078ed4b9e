"""V2 payment types as they appear on the wire."""

from typing import Any

from pydantic import Field, field_validator

from .base import X402_VERSION, BaseX402Model, Network


class ResourceInfo(BaseX402Model):
    """Describes the resource being accessed.

    Attributes:
        url: The URL of the resource.
        description: Optional human-readable description.
        mime_type: Optional MIME type of the resource.
    """

    url: str
    description: str | None = None
    mime_type: str | None = None


class PaymentRequirements(BaseX402Model):
    """V2 payment requirements structure.

    Attributes:
        scheme: Payment scheme identifier (e.g., "exact").
        network: CAIP-2 network identifier (e.g., "eip155:8453").
        asset: Asset address/identifier.
        amount: Amount in smallest unit.
        pay_to: Recipient address.
        max_timeout_seconds: Maximum time for payment validity.
        extra: Additional scheme-specific data.
    """

    scheme: str
    network: Network
    asset: str
    amount: str
    pay_to: str
    max_timeout_seconds: int
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: str) -> str:
        try:
            int(v)
        except ValueError:
            raise ValueError("amount must be an integer encoded as a string")
        return v

    def get_amount(self) -> str:
        """Get the payment amount (V2 uses 'amount' field)."""
        return self.amount


class PaymentRequired(BaseX402Model):
    """V2 402 response structure.

    Attributes:
        x402_version: Protocol version (always 2 for V2).
        error: Optional error message.
        resource: Optional resource information.
        accepts: List of accepted payment requirements.
        extensions: Optional extension data.
    """

    x402_version: int = X402_VERSION
    error: str | None = None
    resource: ResourceInfo | None = None
    accepts: list[PaymentRequirements]
    extensions: dict[str, Any] | None = None


class PaymentPayload(BaseX402Model):
    """V2 payment payload structure.

    Attributes:
        x402_version: Protocol version (always 2 for V2).
        payload: Scheme-specific payload data.
        accepted: The payment requirements being fulfilled.
        resource: Optional resource information.
        extensions: Optional extension data.
    """

    x402_version: int = X402_VERSION
    payload: dict[str, Any]
    accepted: PaymentRequirements
    resource: ResourceInfo | None = None
    extensions: dict[str, Any] | None = None

    def get_pay_to(self) -> str:
        return self.accepted.pay_to


class SettleResponse(BaseX402Model):
    """Settlement confirmation returned by the server after a paid request."""

    success: bool
    error_reason: str | None = None
    transaction: str | None = None
    network: str | None = None
    payer: str | None = None
