"""EIP-4361 message construction for Sign-In-With-X."""

from __future__ import annotations

from ...mechanisms.evm.constants import EVM_NAMESPACE
from ...schemas import SIWxError
from .types import SIWxExtensionInfo


def _numeric_chain_id(chain_id: str) -> str:
    namespace, _, reference = chain_id.partition(":")
    if namespace != EVM_NAMESPACE or not reference.isdigit():
        raise SIWxError(f"Cannot build an Ethereum sign-in message for chain {chain_id}")
    return reference


def create_siwx_message(info: SIWxExtensionInfo, address: str) -> str:
    """Render the challenge as the text the wallet signs.

    Args:
        info: Server-issued challenge.
        address: Signer address, embedded in the message.

    Returns:
        EIP-4361 formatted message.

    Raises:
        SIWxError: If the chain is not an eip155 chain.
    """
    lines = [
        f"{info.domain} wants you to sign in with your Ethereum account:",
        address,
        "",
    ]
    if info.statement:
        lines.extend([info.statement, ""])

    lines.extend(
        [
            f"URI: {info.uri}",
            f"Version: {info.version}",
            f"Chain ID: {_numeric_chain_id(info.chain_id)}",
            f"Nonce: {info.nonce}",
            f"Issued At: {info.issued_at}",
        ]
    )
    if info.expiration_time:
        lines.append(f"Expiration Time: {info.expiration_time}")
    if info.not_before:
        lines.append(f"Not Before: {info.not_before}")
    if info.request_id:
        lines.append(f"Request ID: {info.request_id}")
    if info.resources:
        lines.append("Resources:")
        lines.extend(f"- {resource}" for resource in info.resources)

    return "\n".join(lines)
