"""Secure opaque token generator.

Tokens for verification and reset links are 32 random bytes rendered as 64
hex characters. They are stored in plain text: with 2^256 possibilities
they are unguessable, and they are single use.
"""

import secrets

from src.core.constants import TOKEN_BYTES


class SecureTokenGenerator:
    """TokenGeneratorProtocol implementation backed by ``secrets``.

    Example:
        >>> token = SecureTokenGenerator().generate_token()
        >>> len(token)
        64
    """

    def __init__(self, num_bytes: int = TOKEN_BYTES) -> None:
        self._num_bytes = num_bytes

    def generate_token(self) -> str:
        return secrets.token_hex(self._num_bytes)
