"""Password strength scoring.

Scores a candidate password from 0 to 4 on length and character variety,
penalising well-known passwords, and lists actionable feedback for the user.
A password is acceptable when it reaches a score of 3.
"""

import re
from dataclasses import dataclass, field

MIN_PASSWORD_LENGTH = 8
STRONG_SCORE = 3

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "123456",
        "123456789",
        "qwerty",
        "abc123",
        "password123",
        "admin",
        "letmein",
        "welcome",
        "monkey",
    }
)


@dataclass(frozen=True, slots=True, kw_only=True)
class PasswordStrength:
    """Strength assessment of a password.

    Attributes:
        score: 0 (very weak) to 4 (strong).
        feedback: Suggestions, empty for a flawless password.
        is_strong: Whether the password is acceptable.
    """

    score: int
    feedback: list[str] = field(default_factory=list)
    is_strong: bool = False

    @classmethod
    def evaluate(cls, password: str) -> "PasswordStrength":
        """Score a password.

        Args:
            password: Plaintext candidate.

        Returns:
            PasswordStrength assessment.

        Example:
            >>> PasswordStrength.evaluate("Sn3aky!23").is_strong
            True
            >>> PasswordStrength.evaluate("password").feedback[0]
            'Add uppercase letters'
        """
        feedback: list[str] = []
        score = 0

        if len(password) >= MIN_PASSWORD_LENGTH:
            score += 1
        else:
            feedback.append(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        checks = (
            (r"[A-Z]", "Add uppercase letters"),
            (r"[a-z]", "Add lowercase letters"),
            (r"\d", "Add numbers"),
            (r"[^A-Za-z0-9]", "Add special characters"),
        )
        for pattern, hint in checks:
            if re.search(pattern, password):
                score += 1
            else:
                feedback.append(hint)

        if password.lower() in COMMON_PASSWORDS:
            score = max(0, score - 2)
            feedback.append("Avoid common passwords")

        return cls(
            score=min(4, score),
            feedback=feedback,
            is_strong=score >= STRONG_SCORE,
        )
