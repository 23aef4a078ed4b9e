"""Client-side signing for the Sign-In-With-X extension."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from ...mechanisms.evm.types import ClientEvmSigner
from ...mechanisms.evm.utils import bytes_to_hex
from ...schemas import SIWxError
from .message import create_siwx_message
from .types import SIWxExtensionInfo, SIWxPayload
from .utils import is_unsupported_chain


def create_siwx_payload(
    info: SIWxExtensionInfo | Mapping[str, Any],
    signer: ClientEvmSigner,
) -> SIWxPayload:
    """Sign a server-issued challenge.

    Args:
        info: The challenge from the 402 ``sign-in-with-x`` extension.
        signer: Signer exposing ``address`` and ``sign_message``.

    Returns:
        The challenge fields plus signer address and signature.

    Raises:
        SIWxError: If the challenge is malformed or the chain is not supported.

    Example:
        ```python
        payload = create_siwx_payload(challenge, EthAccountSigner.from_key(key))
        header = encode_siwx_header(payload)
        ```
    """
    if not isinstance(info, SIWxExtensionInfo):
        try:
            info = SIWxExtensionInfo.model_validate(info)
        except ValidationError as e:
            raise SIWxError(f"Invalid sign-in-with-x challenge: {e}") from e

    if is_unsupported_chain(info.chain_id):
        raise SIWxError(f"Chain {info.chain_id} is not supported for sign-in")

    address = signer.address
    message = create_siwx_message(info, address)
    signature = signer.sign_message(message)

    return SIWxPayload(
        **info.model_dump(),
        address=address,
        signature=bytes_to_hex(signature),
    )
