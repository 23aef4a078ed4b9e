"""EVM signer implementation backed by eth_account.

Provides a ready-to-use signer for keys held as eth_account LocalAccount.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from eth_account import Account
from eth_account.messages import encode_defunct

from .types import TypedDataDomain

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount


class EthAccountSigner:
    """Client-side EVM signer using eth_account library.

    Implements the ClientEvmSigner protocol for use with eth_account's
    LocalAccount (from private key or mnemonic).

    Example:
        ```python
        from eth_account import Account
        from x402call.mechanisms.evm.signers import EthAccountSigner

        signer = EthAccountSigner(Account.from_key("0x..."))

        from x402call import create_client

        http_client = create_client(signer, preferred_network="eip155:8453")
        ```

    Args:
        account: eth_account LocalAccount instance.
    """

    def __init__(self, account: "LocalAccount") -> None:
        self._account = account

    @classmethod
    def from_key(cls, private_key: str) -> "EthAccountSigner":
        """Build a signer from a hex private key."""
        return cls(Account.from_key(private_key))

    @property
    def address(self) -> str:
        """The signer's Ethereum address (checksummed)."""
        return self._account.address

    def sign_typed_data(
        self,
        domain: TypedDataDomain,
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
        message: dict[str, Any],
    ) -> bytes:
        """Sign EIP-712 typed data.

        Args:
            domain: EIP-712 domain separator.
            types: Type definitions (dict of type name to field list).
            primary_type: Primary type name (unused, inferred by eth_account).
            message: Message data.

        Returns:
            65-byte ECDSA signature (r, s, v).
        """
        domain_dict = domain.to_dict() if isinstance(domain, TypedDataDomain) else domain

        signed = self._account.sign_typed_data(
            domain_data=domain_dict,
            message_types=types,
            message_data=message,
        )
        return bytes(signed.signature)

    def sign_message(self, message: str) -> bytes:
        """Sign a text message with EIP-191 personal_sign.

        Returns:
            65-byte ECDSA signature (r, s, v).
        """
        signed = self._account.sign_message(encode_defunct(text=message))
        return bytes(signed.signature)
