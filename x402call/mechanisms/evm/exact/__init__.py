"""Exact EVM payment scheme for x402."""

from .client import ExactEvmScheme

__all__ = ["ExactEvmScheme"]
