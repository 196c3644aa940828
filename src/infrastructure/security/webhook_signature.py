"""HMAC-SHA256 signatures for inbound webhooks.

Senders sign the raw request body with the shared ``WEBHOOK_SECRET`` and
send ``X-Webhook-Signature: sha256=<hex digest>``. Verification uses a
constant-time comparison.
"""

import hashlib
import hmac

from src.core.constants import WEBHOOK_SIGNATURE_PREFIX


def sign_payload(body: bytes, secret: str) -> str:
    """Return the header value for body signed with secret.

    Example:
        >>> sign_payload(b"{}", "s3cret")[:7]
        'sha256='
    """
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{WEBHOOK_SIGNATURE_PREFIX}{digest}"


def verify_signature(body: bytes, signature: str | None, secret: str) -> bool:
    """Check a received signature header against body.

    Args:
        body: Raw request body, exactly as received.
        signature: Header value (None when the header is missing).
        secret: Shared webhook secret.

    Returns:
        True only for a well-formed, matching signature.
    """
    if not signature or not signature.startswith(WEBHOOK_SIGNATURE_PREFIX):
        return False
    expected = sign_payload(body, secret)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))
