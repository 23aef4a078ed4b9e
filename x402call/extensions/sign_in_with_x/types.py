"""Type definitions for the Sign-In-With-X extension.

A resource server that wants proof of address ownership (rather than
payment) answers 402 with a ``sign-in-with-x`` extension holding a
server-issued challenge. The client signs a CAIP-122 / EIP-4361 message
built from that challenge and retries with the signed bundle in the
``SIGN-IN-WITH-X`` header.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from ...schemas import BaseX402Model

# Extension identifier constant for the sign-in-with-x extension
SIGN_IN_WITH_X = "sign-in-with-x"

# Request header carrying the signed bundle
SIGN_IN_WITH_X_HEADER = "SIGN-IN-WITH-X"

# Challenge fields a server must issue
REQUIRED_CHALLENGE_FIELDS: tuple[str, ...] = (
    "domain",
    "uri",
    "version",
    "chainId",
    "nonce",
    "issuedAt",
)

# CAIP-2 identifiers of the Solana clusters a server may ask for
SOLANA_MAINNET = "solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp"
SOLANA_DEVNET = "solana:EtWTRABZaYq6iMfeYKouRu166VU2xqa1"

# The only chain namespace this package can sign for
SUPPORTED_CHAIN_NAMESPACE = "eip155"

# Default challenge lifetime
DEFAULT_EXPIRATION_SECONDS = 300


class SIWxExtensionInfo(BaseX402Model):
    """Server-issued challenge.

    Attributes:
        domain: Host requesting the sign-in.
        uri: Resource URI the proof is scoped to.
        version: Message format version (``"1"``).
        chain_id: CAIP-2 chain identifier (e.g., ``"eip155:8453"``).
        nonce: Single-use server nonce.
        issued_at: ISO-8601 issue time.
        expiration_time: Optional ISO-8601 expiry.
        not_before: Optional ISO-8601 start of validity.
        request_id: Optional server correlation ID.
        statement: Optional human-readable statement.
        resources: Optional list of resource URIs.
    """

    domain: str
    uri: str
    version: str
    chain_id: str
    nonce: str
    issued_at: str
    expiration_time: str | None = None
    not_before: str | None = None
    request_id: str | None = None
    statement: str | None = None
    resources: list[str] | None = None


class SIWxPayload(SIWxExtensionInfo):
    """Signed bundle: the challenge plus signer address and signature."""

    address: str
    signature: str


class SIWxExtension(BaseX402Model):
    """The ``sign-in-with-x`` entry of a 402 extension map."""

    info: SIWxExtensionInfo
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")
