"""Signer protocol and typed-data helpers for EVM mechanisms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class TypedDataDomain:
    """EIP-712 domain separator."""

    name: str
    version: str
    chain_id: int
    verifying_contract: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }


@runtime_checkable
class ClientEvmSigner(Protocol):
    """Signing capability bound to one address.

    Key storage lives outside this package; anything exposing these three
    members can pay and authenticate.
    """

    @property
    def address(self) -> str: ...

    def sign_typed_data(
        self,
        domain: TypedDataDomain,
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
        message: dict[str, Any],
    ) -> bytes: ...

    def sign_message(self, message: str) -> bytes: ...
