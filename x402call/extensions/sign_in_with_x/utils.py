"""Challenge inspection helpers for the Sign-In-With-X extension."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .types import REQUIRED_CHALLENGE_FIELDS, SIGN_IN_WITH_X, SUPPORTED_CHAIN_NAMESPACE


def extract_siwx_challenge(extensions: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    """Get the raw challenge from a 402 extension map.

    Returns:
        The extension's ``info`` mapping, or None if the server did not
        declare the extension.
    """
    if not extensions:
        return None
    extension = extensions.get(SIGN_IN_WITH_X)
    if not isinstance(extension, Mapping):
        return None
    info = extension.get("info")
    return info if isinstance(info, Mapping) else None


def find_missing_challenge_fields(info: Mapping[str, Any]) -> list[str]:
    """List the required challenge fields that are absent or empty, in canonical order."""
    return [name for name in REQUIRED_CHALLENGE_FIELDS if not info.get(name)]


def is_unsupported_chain(chain_id: str) -> bool:
    """Check if the chain lies outside the one namespace this package can sign for.

    Example:
        ```python
        is_unsupported_chain("eip155:8453")  # False
        is_unsupported_chain("solana:5eykt4UsFv8P8NJdTREpY1vzqKqZKvdp")  # True
        is_unsupported_chain("cosmos:cosmoshub-4")  # True
        ```
    """
    namespace, _, reference = chain_id.partition(":")
    return namespace != SUPPORTED_CHAIN_NAMESPACE or not reference
