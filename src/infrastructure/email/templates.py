"""Built-in email templates and their renderer.

Templates use ``{{name}}`` placeholders and ``{{#if name}}...{{/if}}``
conditional blocks. Placeholders for missing or falsy variables render as
an empty string; conditional blocks render only when the variable is truthy.
Values substituted into the HTML part are HTML-escaped.
"""

import html
import re
from dataclasses import dataclass
from typing import Any

_PLACEHOLDER = re.compile(r"{{\s*(\w+)\s*}}")
_CONDITIONAL = re.compile(r"{{#if\s+(\w+)}}(.*?){{/if}}", re.DOTALL)


@dataclass(frozen=True, slots=True, kw_only=True)
class EmailTemplate:
    """Unrendered template."""

    subject: str
    html: str
    text: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class RenderedEmail:
    """Template rendered with concrete variables."""

    subject: str
    html: str
    text: str | None


_FOOTER_HTML = (
    '<hr style="margin: 30px 0; border: none; border-top: 1px solid #e5e7eb;">'
    '<p style="color: #6b7280; font-size: 14px;">Best regards,<br>The Hypea Team</p>'
)
_BUTTON_STYLE = (
    "display: inline-block; background-color: #6366f1; color: white; "
    "padding: 12px 24px; text-decoration: none; border-radius: 8px; margin: 20px 0;"
)

TEMPLATES: dict[str, EmailTemplate] = {
    "email-verification": EmailTemplate(
        subject="Verify your email address",
        html=(
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
            '<h1 style="color: #6366f1;">Verify Your Email</h1>'
            "<p>Hello {{name}},</p>"
            "<p>Please click the button below to verify your email address:</p>"
            f'<a href="{{{{verificationUrl}}}}" style="{_BUTTON_STYLE}">Verify Email</a>'
            "<p>Or copy and paste this link in your browser:</p>"
            '<p><a href="{{verificationUrl}}">{{verificationUrl}}</a></p>'
            "<p>This link will expire in 24 hours.</p>"
            "<p>If you didn't create an account, you can safely ignore this email.</p>"
            f"{_FOOTER_HTML}</div>"
        ),
        text=(
            "Hello {{name}},\n\n"
            "Please verify your email address by visiting: {{verificationUrl}}\n\n"
            "This link will expire in 24 hours.\n\n"
            "If you didn't create an account, you can safely ignore this email.\n\n"
            "Best regards,\nThe Hypea Team\n"
        ),
    ),
    "password-reset": EmailTemplate(
        subject="Reset your password",
        html=(
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
            '<h1 style="color: #6366f1;">Reset Your Password</h1>'
            "<p>Hello {{name}},</p>"
            "<p>You requested to reset your password. "
            "Click the button below to set a new password:</p>"
            f'<a href="{{{{resetUrl}}}}" style="{_BUTTON_STYLE}">Reset Password</a>'
            "<p>Or copy and paste this link in your browser:</p>"
            '<p><a href="{{resetUrl}}">{{resetUrl}}</a></p>'
            "<p>This link will expire in 1 hour.</p>"
            "<p>If you didn't request a password reset, you can safely ignore this email.</p>"
            f"{_FOOTER_HTML}</div>"
        ),
        text=(
            "Hello {{name}},\n\n"
            "You requested to reset your password. "
            "Visit this link to set a new password: {{resetUrl}}\n\n"
            "This link will expire in 1 hour.\n\n"
            "If you didn't request a password reset, you can safely ignore this email.\n\n"
            "Best regards,\nThe Hypea Team\n"
        ),
    ),
}


def render_string(
    template: str, variables: dict[str, Any], *, escape: bool = False
) -> str:
    """Render conditional blocks, then substitute placeholders.

    With ``escape`` set, substituted values are HTML-escaped.

    Example:
        >>> render_string("Hi {{name}}{{#if vip}} (VIP){{/if}}", {"name": "Ada"})
        'Hi Ada'
    """
    result = _CONDITIONAL.sub(
        lambda m: m.group(2) if variables.get(m.group(1)) else "", template
    )

    def substitute(match: re.Match[str]) -> str:
        value = str(variables.get(match.group(1)) or "")
        return html.escape(value) if escape else value

    return _PLACEHOLDER.sub(substitute, result)


def render_template(name: str, variables: dict[str, Any]) -> RenderedEmail | None:
    """Render a registered template.

    Returns:
        RenderedEmail, or None for an unknown template name.
    """
    template = TEMPLATES.get(name)
    if template is None:
        return None
    return RenderedEmail(
        subject=render_string(template.subject, variables),
        html=render_string(template.html, variables, escape=True),
        text=render_string(template.text, variables) if template.text else None,
    )
