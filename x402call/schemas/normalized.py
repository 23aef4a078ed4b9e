"""Version-independent view of a 402 response.

Everything downstream of parsing works on these types, never on the raw
v1/v2 wire models.
"""

from typing import Any

from pydantic import Field, field_validator

from .base import BaseX402Model, Network
from .payments import ResourceInfo


class NormalizedRequirement(BaseX402Model):
    """One acceptable way to pay, with the amount always under ``amount``.

    The legacy-only fields (``resource``, ``description``, ``mime_type``) are
    kept for display when the source was a v1 response.
    """

    scheme: str
    network: Network
    amount: str
    asset: str
    pay_to: str
    max_timeout_seconds: int
    extra: dict[str, Any] | None = None
    resource: str | None = None
    description: str | None = None
    mime_type: str | None = None

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: str) -> str:
        try:
            int(v)
        except (TypeError, ValueError):
            raise ValueError("amount must be an integer encoded as a string")
        return v


class NormalizedPaymentRequired(BaseX402Model):
    """Normalized 402 response.

    Attributes:
        x402_version: Protocol version the server spoke.
        error: Optional server-provided error string.
        accepts: Requirements in server preference order.
        resource: Resource descriptor (v2 only).
        extensions: Extension map (v2 only), values are opaque.
    """

    x402_version: int
    error: str | None = None
    accepts: list[NormalizedRequirement] = Field(default_factory=list)
    resource: ResourceInfo | None = None
    extensions: dict[str, Any] | None = None

    def extension_keys(self) -> list[str]:
        """Names of the extensions the server declared, sorted."""
        return sorted((self.extensions or {}).keys())
