from datetime import datetime
from uuid import UUID

from libs.result import Result, Return
from src.app.errors import InvitationInvalidError, NotFoundError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import InvitationStatus


async def lost_race(uow: UnitOfWork, invitation_id: UUID, now: datetime) -> Result:
    """
    Error for a conditional invitation write that matched no row.

    Another writer changed the row first; report what it looks like now.
    """
    current = await uow.invitations.get_by_id(invitation_id)
    status = current.effective_status(now) if current is not None else None
    # Still pending means the token was rotated by a resend
    if status is None or status == InvitationStatus.pending:
        return Return.err(NotFoundError("INVITATION_NOT_FOUND", "Invitation not found"))
    return Return.err(InvitationInvalidError(status))
