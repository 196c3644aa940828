"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (RegisterUser, VerifyEmail).

Each command has a corresponding handler in commands/handlers/.
"""

from src.application.commands.auth_commands import (
    ConfirmPasswordReset,
    RegisterUser,
    RequestPasswordReset,
    ResendVerification,
    VerifyEmail,
)

__all__ = [
    "ConfirmPasswordReset",
    "RegisterUser",
    "RequestPasswordReset",
    "ResendVerification",
    "VerifyEmail",
]
