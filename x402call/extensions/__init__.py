"""x402 extensions understood by this package."""

from .bazaar import (
    BAZAAR,
    extract_discovery_info,
    extract_discovery_info_v1,
    is_discoverable_v1,
)
from .sign_in_with_x import (
    SIGN_IN_WITH_X,
    SIGN_IN_WITH_X_HEADER,
    SIWxExtensionInfo,
    SIWxPayload,
    create_siwx_payload,
    declare_siwx_extension,
    encode_siwx_header,
    parse_siwx_header,
    validate_siwx_message,
    verify_siwx_signature,
)

__all__ = [
    # Bazaar
    "BAZAAR",
    "extract_discovery_info",
    "extract_discovery_info_v1",
    "is_discoverable_v1",
    # Sign-In-With-X
    "SIGN_IN_WITH_X",
    "SIGN_IN_WITH_X_HEADER",
    "SIWxExtensionInfo",
    "SIWxPayload",
    "create_siwx_payload",
    "declare_siwx_extension",
    "encode_siwx_header",
    "parse_siwx_header",
    "validate_siwx_message",
    "verify_siwx_signature",
]
