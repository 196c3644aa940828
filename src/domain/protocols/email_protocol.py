"""EmailProtocol - Port for email service implementations.

Infrastructure layer provides concrete implementations (StubEmailService,
SESEmailService). Delivery failures are reported as ``False`` and logged by
the adapter; they are never raised to the caller.
"""

from typing import Any, Protocol


class EmailProtocol(Protocol):
    """Email service protocol (port).

    Methods:
        send_templated_email: Render a named template and deliver it
        send_verification_email: Send email verification link
        send_password_reset_email: Send password reset link

    Example Implementation:
        >>> class StubEmailService:
        ...     async def send_verification_email(
        ...         self, to_email: str, name: str, verification_url: str
        ...     ) -> bool:
        ...         print(f"[STUB] Verification email to {to_email}")
        ...         return True
    """

    async def send_templated_email(
        self,
        to_email: str,
        template_name: str,
        variables: dict[str, Any],
    ) -> bool:
        """Render template_name with variables and deliver it.

        Args:
            to_email: Recipient email address.
            template_name: Registered template ("email-verification",
                "password-reset").
            variables: Template variables ({{name}} placeholders).

        Returns:
            True if the message was accepted for delivery.
        """
        ...

    async def send_verification_email(
        self,
        to_email: str,
        name: str,
        verification_url: str,
    ) -> bool:
        """Send email verification link to user.

        Example:
            >>> await email_service.send_verification_email(
            ...     to_email="user@example.com",
            ...     name="Ada",
            ...     verification_url="https://app.com/verify-email?token=abc123",
            ... )
        """
        ...

    async def send_password_reset_email(
        self,
        to_email: str,
        name: str,
        reset_url: str,
    ) -> bool:
        """Send password reset link to user."""
        ...
