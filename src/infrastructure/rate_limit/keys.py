"""Client identity helpers for rate limiting.

The identity of a request is ``<prefix>:<client ip>`` where the client ip
is the first X-Forwarded-For entry when a proxy supplied one, else the
connection peer, else "unknown".
"""

from collections.abc import Callable

from src.domain.protocols.rate_limit_protocol import RateLimitedRequest

UNKNOWN_CLIENT = "unknown"

type KeyGenerator = Callable[[RateLimitedRequest], str]


def get_client_ip(request: RateLimitedRequest) -> str:
    """Resolve the client address of request.

    Args:
        request: Inbound request (Starlette Request or compatible).

    Returns:
        Client IP string, or "unknown" when nothing identifies the peer.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client is not None and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def prefixed_ip_key(prefix: str) -> KeyGenerator:
    """Return a key generator producing ``<prefix>:<client ip>``."""

    def generate(request: RateLimitedRequest) -> str:
        return f"{prefix}:{get_client_ip(request)}"

    return generate
