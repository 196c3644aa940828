"""Opaque token generator protocol.

Verification and password reset links carry unguessable random tokens.
They hold no claims; all state lives in the verification token store.
"""

from typing import Protocol


class TokenGeneratorProtocol(Protocol):
    """Source of opaque single-use tokens.

    Implementations:
        - SecureTokenGenerator: src/infrastructure/security/token_generator.py
    """

    def generate_token(self) -> str:
        """Return a new token (64 hex characters, 32 bytes of entropy)."""
        ...
