"""Password hashing protocol for domain layer.

Infrastructure provides the concrete adapter (BcryptPasswordService).
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = password_service.hash_password("Sn3aky!23")
        password_service.verify_password("Sn3aky!23", password_hash)  # True
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Salted one-way hash (bcrypt format: $2b$12$...).
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a plaintext password against a stored hash.

        Returns:
            True if the password matches, False otherwise (including
            malformed hashes).
        """
        ...
