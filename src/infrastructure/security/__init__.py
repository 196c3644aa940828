"""Security infrastructure adapters.

- Password hashing (bcrypt)
- Opaque token generation (cryptographic hex tokens)
- Inbound webhook signature verification (HMAC-SHA256)
"""

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from src.infrastructure.security.token_generator import SecureTokenGenerator
from src.infrastructure.security.webhook_signature import sign_payload, verify_signature

__all__ = [
    "BcryptPasswordService",
    "SecureTokenGenerator",
    "sign_payload",
    "verify_signature",
]
