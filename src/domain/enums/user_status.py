"""Account lifecycle status.

New password accounts start in PENDING_VERIFICATION and become ACTIVE once
the owner proves control of the email address (verification link, or a
completed password reset when that is configured to count as proof).
"""

from enum import Enum


class UserStatus(str, Enum):
    """Account lifecycle status."""

    PENDING_VERIFICATION = "pending_verification"
    ACTIVE = "active"
    BANNED = "banned"
