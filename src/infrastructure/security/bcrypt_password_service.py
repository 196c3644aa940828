"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol using bcrypt. The cost factor comes from
``BCRYPT_ROUNDS`` (default 12, ~250ms per hash).

Passwords longer than 72 bytes are truncated to the 72 bytes bcrypt reads,
identically when hashing and verifying.
"""

import bcrypt

from src.core.constants import BCRYPT_MAX_PASSWORD_BYTES


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from src.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("Sn3aky!23")
        password_service.verify_password("Sn3aky!23", password_hash)  # True
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (10-20). Each +1 doubles the work.

        Raises:
            ValueError: If cost_factor is outside 10-20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password with a fresh salt.

        Returns:
            60-character bcrypt hash ($2b$<cost>$<salt><hash>).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns False for malformed hashes instead of raising.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False
