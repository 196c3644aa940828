"""Shared behaviour of the email adapters.

Subclasses only implement ``_deliver``; template lookup, rendering and the
convenience senders live here.
"""

from typing import Any

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.email.templates import RenderedEmail, render_template


class BaseEmailService:
    """Base adapter implementing EmailProtocol on top of ``_deliver``.

    Args:
        logger: Structured logger.
        from_name: Display name of the sender.
        from_address: Sender address.
    """

    def __init__(
        self,
        *,
        logger: LoggerProtocol,
        from_name: str = "Hypea Platform",
        from_address: str = "noreply@hypea.com",
    ) -> None:
        self._logger = logger
        self._from_name = from_name
        self._from_address = from_address

    @property
    def sender(self) -> str:
        """RFC 5322 From header value."""
        return f'"{self._from_name}" <{self._from_address}>'

    async def send_templated_email(
        self,
        to_email: str,
        template_name: str,
        variables: dict[str, Any],
    ) -> bool:
        rendered = render_template(template_name, variables)
        if rendered is None:
            self._logger.error(
                "Unknown email template", template=template_name, to=to_email
            )
            return False
        return await self._deliver(to_email, rendered, template_name=template_name)

    async def send_verification_email(
        self, to_email: str, name: str, verification_url: str
    ) -> bool:
        return await self.send_templated_email(
            to_email,
            "email-verification",
            {"name": name, "verificationUrl": verification_url},
        )

    async def send_password_reset_email(
        self, to_email: str, name: str, reset_url: str
    ) -> bool:
        return await self.send_templated_email(
            to_email,
            "password-reset",
            {"name": name, "resetUrl": reset_url},
        )

    async def _deliver(
        self, to_email: str, email: RenderedEmail, *, template_name: str
    ) -> bool:
        """Send a rendered email (must be implemented by subclass)."""
        raise NotImplementedError("Subclass must implement _deliver()")
