"""Foundation types shared by the x402 wire models."""

from typing import TypeAlias

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Legacy protocol version (requirements carry maxAmountRequired)
X402_VERSION_V1: int = 1

# Current protocol version
X402_VERSION: int = 2

Network: TypeAlias = str
"""Network identifier, either CAIP-2 ("eip155:8453") or a v1 name ("base")."""


class BaseX402Model(BaseModel):
    """Base class for all x402 models with camelCase JSON serialization.

    All Pydantic models in the package inherit from this class.
    Do NOT repeat model_config in individual models.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
