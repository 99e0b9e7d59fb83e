"""
Cancel Invitation Use Case

Cancellation by the inviter reuses the declined terminal state.
"""

import logging
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import Accepted, AuditEvent
from tenant_access.libs.result import Error, Result, Return

from .dtos import CancelInvitationResponse
from .validation import insufficient_role, invitation_not_found

logger = logging.getLogger(__name__)


def _already_accepted() -> Error:
    return Error(
        "INVITATION_ALREADY_ACCEPTED",
        "Cannot cancel an invitation that has already been accepted",
    )


class CancelInvitationUseCase:
    """
    Use case for cancelling invitations.

    Business Rules:
    - Only the scope's authority can cancel
    - Accepted invitations cannot be cancelled; their grant stays untouched
    - Otherwise declined_at is stamped (no separate cancelled status)
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @storage_guard
    async def execute(
        self, invitation_id: UUID, caller_id: UUID
    ) -> Result[CancelInvitationResponse]:
        now = self.clock.now()

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(invitation_not_found())

            if not await self.uow.members.is_authority(invitation.scope_id, caller_id):
                return Return.err(insufficient_role("cancel"))

            if isinstance(invitation.response, Accepted):
                return Return.err(_already_accepted())

            cancelled = await self.uow.invitations.mark_declined(
                invitation.id, now, require_unresponded=False
            )
            if not cancelled:
                # Accepted between the read and the update
                return Return.err(_already_accepted())

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=invitation.scope_id,
                    user_id=caller_id,
                    action="invitation_cancelled",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": invitation.email,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            "Invitation cancelled",
            extra={"invitation_id": str(invitation_id), "caller_id": str(caller_id)},
        )

        return Return.ok(CancelInvitationResponse())
