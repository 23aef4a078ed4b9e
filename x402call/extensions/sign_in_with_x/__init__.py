"""Sign-In-With-X Extension for x402 v2.

Lets a resource server demand proof of address ownership instead of
payment. The server issues a challenge in its 402 response; the client
signs it and retries with the ``SIGN-IN-WITH-X`` header.

## Usage

### For Resource Servers

```python
from x402call.extensions.sign_in_with_x import (
    declare_siwx_extension,
    parse_siwx_header,
    validate_siwx_message,
    verify_siwx_signature,
)

payment_required = {
    "x402Version": 2,
    "accepts": [],
    "extensions": declare_siwx_extension(resource_url, "eip155:8453"),
}

# On the retried request
payload = parse_siwx_header(request.headers["SIGN-IN-WITH-X"])
assert validate_siwx_message(payload, resource_url).valid
assert verify_siwx_signature(payload).valid
```

### For Clients

Use ``x402call.authed_call``, which drives the whole exchange.
"""

from .client import create_siwx_payload
from .encoding import encode_siwx_header, parse_siwx_header
from .message import create_siwx_message
from .server import SIWX_INFO_SCHEMA, declare_siwx_extension
from .types import (
    DEFAULT_EXPIRATION_SECONDS,
    REQUIRED_CHALLENGE_FIELDS,
    SIGN_IN_WITH_X,
    SIGN_IN_WITH_X_HEADER,
    SOLANA_DEVNET,
    SOLANA_MAINNET,
    SIWxExtension,
    SIWxExtensionInfo,
    SIWxPayload,
)
from .utils import extract_siwx_challenge, find_missing_challenge_fields, is_unsupported_chain
from .verify import (
    SIWxValidationResult,
    SIWxVerifyResult,
    validate_siwx_message,
    verify_siwx_signature,
)

__all__ = [
    # Constants
    "SIGN_IN_WITH_X",
    "SIGN_IN_WITH_X_HEADER",
    "REQUIRED_CHALLENGE_FIELDS",
    "SOLANA_MAINNET",
    "SOLANA_DEVNET",
    "DEFAULT_EXPIRATION_SECONDS",
    "SIWX_INFO_SCHEMA",
    # Types
    "SIWxExtensionInfo",
    "SIWxPayload",
    "SIWxExtension",
    # Client functions
    "create_siwx_message",
    "create_siwx_payload",
    "encode_siwx_header",
    "parse_siwx_header",
    # Server functions
    "declare_siwx_extension",
    "validate_siwx_message",
    "verify_siwx_signature",
    "SIWxValidationResult",
    "SIWxVerifyResult",
    # Challenge helpers
    "extract_siwx_challenge",
    "find_missing_challenge_fields",
    "is_unsupported_chain",
]
