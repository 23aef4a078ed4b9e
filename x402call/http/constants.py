"""HTTP header names and defaults for the x402 protocol."""

# V2 headers
PAYMENT_REQUIRED_HEADER = "PAYMENT-REQUIRED"
PAYMENT_SIGNATURE_HEADER = "PAYMENT-SIGNATURE"
PAYMENT_RESPONSE_HEADER = "PAYMENT-RESPONSE"

# V1 headers
X_PAYMENT_HEADER = "X-PAYMENT"
X_PAYMENT_RESPONSE_HEADER = "X-PAYMENT-RESPONSE"

# Status code that starts a negotiation
PAYMENT_REQUIRED_STATUS = 402

# Default transport timeout in seconds for engine-owned HTTP clients
DEFAULT_HTTP_TIMEOUT = 30.0
