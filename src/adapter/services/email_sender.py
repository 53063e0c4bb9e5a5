import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Dict, Optional, Tuple

from src.app.services.email_sender import EmailTemplate, IEmailSender

logger = logging.getLogger(__name__)

TEMPLATES: Dict[EmailTemplate, Tuple[str, str]] = {
    EmailTemplate.invitation: (
        "You're invited to join {organization_name}",
        "<p>Hello {invitee_name},</p>"
        "<p>{inviter_name} invited you to join <strong>{organization_name}</strong> "
        "as {role}.</p>"
        '<p><a href="{invitation_url}">Accept invitation</a></p>'
        "<p>This link expires on {expires_at}.</p>",
    ),
    EmailTemplate.tenant_registered: (
        "We received your registration for {organization_name}",
        "<p>Hello {owner_name},</p>"
        "<p>Your registration for <strong>{organization_name}</strong> is awaiting "
        "review. We will email you once it has been approved.</p>",
    ),
    EmailTemplate.tenant_approved: (
        "{organization_name} has been approved",
        "<p>Hello {owner_name},</p>"
        "<p><strong>{organization_name}</strong> has been approved.</p>"
        '<p><a href="{login_url}">Sign in</a> to get started.</p>',
    ),
    EmailTemplate.tenant_rejected: (
        "Update on your registration for {organization_name}",
        "<p>Hello {owner_name},</p>"
        "<p>We could not approve <strong>{organization_name}</strong>.</p>"
        "<p>Reason: {reason}</p>"
        '<p>Questions? Contact <a href="mailto:{support_email}">{support_email}</a>.</p>',
    ),
}


def render(template: EmailTemplate, data: Dict[str, Any]) -> Tuple[str, str]:
    subject, body = TEMPLATES[template]
    return subject.format(**data), body.format(**data)


class SmtpEmailSender(IEmailSender):
    """Sends templated HTML mail over SMTP"""

    def __init__(
        self,
        host: str,
        port: int,
        from_email: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
    ):
        self.host = host
        self.port = port
        self.from_email = from_email
        self.username = username
        self.password = password
        self.use_tls = use_tls

    async def send(self, to: str, template: EmailTemplate, data: Dict[str, Any]) -> bool:
        try:
            subject, body = render(template, data)
        except KeyError as e:
            logger.error(f"Missing field {e} for {template.value} email")
            return False
        # smtplib blocks; keep it off the event loop
        return await asyncio.to_thread(self._deliver, to, subject, body)

    def _deliver(self, to: str, subject: str, body: str) -> bool:
        try:
            msg = MIMEMultipart()
            msg["From"] = self.from_email
            msg["To"] = to
            msg["Subject"] = subject
            msg.attach(MIMEText(body, "html"))

            with smtplib.SMTP(self.host, self.port) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(msg)

            logger.info(f"Email '{subject}' sent to {to}")
            return True
        except Exception as e:
            logger.error(f"Failed to send email to {to}: {str(e)}")
            return False


class LoggingEmailSender(IEmailSender):
    """Used when no SMTP server is configured; nothing leaves the process"""

    async def send(self, to: str, template: EmailTemplate, data: Dict[str, Any]) -> bool:
        logger.info(f"Email not sent (SMTP not configured): {template.value} to {to}")
        return False
