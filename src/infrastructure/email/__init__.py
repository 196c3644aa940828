"""Email service implementations.

- StubEmailService: Logs messages (development/testing)
- SESEmailService: AWS SES (production)
"""

from src.infrastructure.email.ses_email_service import SESEmailService
from src.infrastructure.email.stub_email_service import SentEmail, StubEmailService
from src.infrastructure.email.templates import TEMPLATES, render_template

__all__ = [
    "SESEmailService",
    "SentEmail",
    "StubEmailService",
    "TEMPLATES",
    "render_template",
]
