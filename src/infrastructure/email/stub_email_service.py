"""Stub email adapter for development and testing.

Nothing leaves the process: each message is logged and recorded in
``sent`` so tests can assert on what would have been delivered.
"""

from dataclasses import dataclass
from typing import Any

from src.infrastructure.email.base_email_service import BaseEmailService
from src.infrastructure.email.templates import RenderedEmail


@dataclass(frozen=True, slots=True)
class SentEmail:
    """Record of a stubbed delivery."""

    to_email: str
    template_name: str
    email: RenderedEmail


class StubEmailService(BaseEmailService):
    """EmailProtocol implementation that logs instead of sending."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.sent: list[SentEmail] = []

    async def _deliver(
        self, to_email: str, email: RenderedEmail, *, template_name: str
    ) -> bool:
        self.sent.append(SentEmail(to_email, template_name, email))
        self._logger.info(
            "Email delivered (stub)",
            to=to_email,
            sender=self.sender,
            template=template_name,
            subject=email.subject,
        )
        return True
