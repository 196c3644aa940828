"""Unit tests for email templates and the stub/SES adapters.

Tests cover:
- Placeholder substitution and conditional blocks
- Built-in verification and reset templates
- StubEmailService records deliveries
- SESEmailService request shape and error handling (boto3 client mocked)
"""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from src.infrastructure.email import (
    SESEmailService,
    StubEmailService,
    render_template,
)
from src.infrastructure.email.templates import render_string


@pytest.mark.unit
class TestTemplates:
    def test_placeholders_substituted(self):
        assert render_string("Hi {{name}}!", {"name": "Ada"}) == "Hi Ada!"

    def test_missing_variable_renders_empty(self):
        assert render_string("Hi {{ name }}!", {}) == "Hi !"

    def test_conditional_block(self):
        template = "Hi{{#if vip}} VIP {{name}}{{/if}}"

        assert render_string(template, {"vip": True, "name": "Ada"}) == "Hi VIP Ada"
        assert render_string(template, {"vip": False, "name": "Ada"}) == "Hi"

    def test_verification_template(self):
        rendered = render_template(
            "email-verification",
            {"name": "Ada", "verificationUrl": "https://hypea.test/v?token=abc"},
        )

        assert rendered is not None
        assert rendered.subject == "Verify your email address"
        assert "Hello Ada" in rendered.html
        assert 'href="https://hypea.test/v?token=abc"' in rendered.html
        assert "24 hours" in rendered.text

    def test_reset_template(self):
        rendered = render_template(
            "password-reset", {"name": "Ada", "resetUrl": "https://hypea.test/r"}
        )

        assert rendered.subject == "Reset your password"
        assert "https://hypea.test/r" in rendered.text
        assert "1 hour" in rendered.html

    def test_html_part_escapes_values(self):
        rendered = render_template(
            "email-verification",
            {
                "name": "<script>alert(1)</script>",
                "verificationUrl": "https://hypea.test/v?token=abc",
            },
        )

        assert "<script>" not in rendered.html
        assert "Hello &lt;script&gt;alert(1)&lt;/script&gt;," in rendered.html
        # Plain text is not HTML and keeps the value as given
        assert "Hello <script>alert(1)</script>," in rendered.text

    def test_escape_is_opt_in(self):
        assert render_string("{{v}}", {"v": "a & b"}) == "a & b"
        assert render_string("{{v}}", {"v": "a & b"}, escape=True) == "a &amp; b"

    def test_unknown_template(self):
        assert render_template("newsletter", {}) is None


@pytest.mark.unit
class TestStubEmailService:
    @pytest.mark.asyncio
    async def test_records_verification_email(self):
        service = StubEmailService(logger=Mock())

        sent = await service.send_verification_email(
            to_email="ada@example.com",
            name="Ada",
            verification_url="https://hypea.test/v",
        )

        assert sent is True
        assert len(service.sent) == 1
        record = service.sent[0]
        assert record.to_email == "ada@example.com"
        assert record.template_name == "email-verification"
        assert "https://hypea.test/v" in record.email.html

    @pytest.mark.asyncio
    async def test_unknown_template_not_sent(self):
        logger = Mock()
        service = StubEmailService(logger=logger)

        sent = await service.send_templated_email("ada@example.com", "newsletter", {})

        assert sent is False
        assert service.sent == []
        logger.error.assert_called_once()

    def test_sender_header(self):
        service = StubEmailService(
            logger=Mock(), from_name="Hypea", from_address="hi@hypea.test"
        )

        assert service.sender == '"Hypea" <hi@hypea.test>'


@pytest.mark.unit
class TestSESEmailService:
    @pytest.mark.asyncio
    async def test_send_email_request(self):
        client = Mock()
        client.send_email.return_value = {"MessageId": "msg-1"}
        service = SESEmailService(region="us-east-1", client=client, logger=Mock())

        sent = await service.send_password_reset_email(
            to_email="ada@example.com", name="Ada", reset_url="https://hypea.test/r"
        )

        assert sent is True
        kwargs = client.send_email.call_args.kwargs
        assert kwargs["Source"] == '"Hypea Platform" <noreply@hypea.com>'
        assert kwargs["Destination"] == {"ToAddresses": ["ada@example.com"]}
        assert kwargs["Message"]["Subject"]["Data"] == "Reset your password"
        assert "Text" in kwargs["Message"]["Body"]

    @pytest.mark.asyncio
    async def test_client_error_returns_false(self):
        client = Mock()
        client.send_email.side_effect = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "Email address not verified"}},
            "SendEmail",
        )
        logger = Mock()
        service = SESEmailService(region="us-east-1", client=client, logger=logger)

        sent = await service.send_verification_email(
            to_email="ada@example.com", name="Ada", verification_url="https://x"
        )

        assert sent is False
        logger.error.assert_called_once()
