from typing import Optional
from urllib.parse import urlencode

from src.app.services.email_sender import EmailTemplate, IEmailSender, send_best_effort
from src.domain.entities import Invitation, Organization, User


def build_invitation_url(base_url: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/accept-invite?{urlencode({'token': token})}"


async def send_invitation_email(
    email_sender: IEmailSender,
    invitation: Invitation,
    invitation_url: str,
    organization: Optional[Organization],
    inviter: Optional[User],
) -> bool:
    invitee_name = " ".join(
        part for part in (invitation.first_name, invitation.last_name) if part
    )
    return await send_best_effort(
        email_sender,
        invitation.email,
        EmailTemplate.invitation,
        {
            "invitee_name": invitee_name or invitation.email,
            "inviter_name": (inviter.name or inviter.email) if inviter else "Your team",
            "organization_name": organization.name if organization else invitation.tenant_id,
            "role": invitation.role.value,
            "invitation_url": invitation_url,
            "expires_at": invitation.expires_at.strftime("%Y-%m-%d %H:%M UTC"),
        },
    )
