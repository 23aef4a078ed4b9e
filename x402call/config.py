"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .http.constants import DEFAULT_HTTP_TIMEOUT
from .mechanisms.evm.utils import is_evm_network, to_caip2
from .schemas import X402Error

PRIVATE_KEY_ENV = "X402_PRIVATE_KEY"
PREFERRED_NETWORK_ENV = "X402_PREFERRED_NETWORK"
HTTP_TIMEOUT_ENV = "X402_HTTP_TIMEOUT"


class ConfigError(X402Error, ValueError):
    """Raised when configuration is missing or invalid."""


@dataclass(frozen=True)
class ClientConfig:
    """Settings for a payment-capable client.

    Attributes:
        private_key: Hex private key of the paying account.
        preferred_network: CAIP-2 network to prefer, if any.
        http_timeout: Transport timeout in seconds.
    """

    private_key: str
    preferred_network: str | None = None
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "ClientConfig":
        """Load settings from the environment (and ``.env`` when present).

        Raises:
            ConfigError: If the key is missing or a value is invalid.
        """
        if dotenv:
            load_dotenv()

        private_key = os.getenv(PRIVATE_KEY_ENV)
        if not private_key:
            raise ConfigError(f"{PRIVATE_KEY_ENV} is not set")

        preferred_network = os.getenv(PREFERRED_NETWORK_ENV) or None
        if preferred_network is not None:
            if not is_evm_network(preferred_network):
                raise ConfigError(
                    f"{PREFERRED_NETWORK_ENV}={preferred_network!r} is not an EVM network"
                )
            preferred_network = to_caip2(preferred_network)

        raw_timeout = os.getenv(HTTP_TIMEOUT_ENV)
        http_timeout = DEFAULT_HTTP_TIMEOUT
        if raw_timeout:
            try:
                http_timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(f"{HTTP_TIMEOUT_ENV}={raw_timeout!r} is not a number") from e
            if http_timeout <= 0:
                raise ConfigError(f"{HTTP_TIMEOUT_ENV} must be positive")

        return cls(
            private_key=private_key,
            preferred_network=preferred_network,
            http_timeout=http_timeout,
        )
