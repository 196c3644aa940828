"""AWS SES email adapter (production).

boto3 is synchronous, so each send runs in a worker thread via
``asyncio.to_thread`` to keep the event loop free.
"""

import asyncio
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.infrastructure.email.base_email_service import BaseEmailService
from src.infrastructure.email.templates import RenderedEmail


class SESEmailService(BaseEmailService):
    """EmailProtocol implementation backed by Amazon SES.

    Args:
        region: AWS region of the SES endpoint.
        client: Optional preconfigured SES client (tests).
        **kwargs: Passed to BaseEmailService (logger, from_name, from_address).
    """

    def __init__(self, *, region: str, client: Any = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._client = client or boto3.client("ses", region_name=region)

    async def _deliver(
        self, to_email: str, email: RenderedEmail, *, template_name: str
    ) -> bool:
        body: dict[str, Any] = {"Html": {"Data": email.html, "Charset": "UTF-8"}}
        if email.text:
            body["Text"] = {"Data": email.text, "Charset": "UTF-8"}

        try:
            response = await asyncio.to_thread(
                self._client.send_email,
                Source=self.sender,
                Destination={"ToAddresses": [to_email]},
                Message={
                    "Subject": {"Data": email.subject, "Charset": "UTF-8"},
                    "Body": body,
                },
            )
        except (ClientError, BotoCoreError) as e:
            self._logger.error(
                "Email delivery failed",
                error=e,
                to=to_email,
                template=template_name,
            )
            return False

        self._logger.info(
            "Email delivered",
            to=to_email,
            template=template_name,
            message_id=response.get("MessageId"),
        )
        return True
