"""V1 (legacy) payment types as they appear on the wire."""

from typing import Any

from pydantic import field_validator

from .base import X402_VERSION_V1, BaseX402Model, Network


class PaymentRequirementsV1(BaseX402Model):
    """V1 payment requirements.

    V1 embeds the resource description in every requirement and names the
    price ``maxAmountRequired``.
    """

    scheme: str
    network: Network
    max_amount_required: str
    resource: str = ""
    description: str = ""
    mime_type: str = ""
    output_schema: dict[str, Any] | None = None
    pay_to: str
    max_timeout_seconds: int
    asset: str
    extra: dict[str, Any] | None = None

    @field_validator("max_amount_required")
    @classmethod
    def validate_max_amount_required(cls, v: str) -> str:
        try:
            int(v)
        except ValueError:
            raise ValueError("maxAmountRequired must be an integer encoded as a string")
        return v

    def get_amount(self) -> str:
        """Get the payment amount (V1 uses 'maxAmountRequired' field)."""
        return self.max_amount_required


class PaymentRequiredV1(BaseX402Model):
    """V1 402 response body."""

    x402_version: int = X402_VERSION_V1
    error: str | None = None
    accepts: list[PaymentRequirementsV1]


class PaymentPayloadV1(BaseX402Model):
    """V1 payment payload sent in the X-PAYMENT header."""

    x402_version: int = X402_VERSION_V1
    scheme: str
    network: Network
    payload: dict[str, Any]

    def get_pay_to(self) -> str | None:
        """Get the recipient (V1 only carries it inside the authorization)."""
        authorization = self.payload.get("authorization") or {}
        return authorization.get("to")
