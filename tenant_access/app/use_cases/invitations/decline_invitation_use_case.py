"""
Decline Invitation Use Case
"""

import logging

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.token_hasher import TokenHasher
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import AuditEvent
from tenant_access.libs.result import Error, Result, Return

from .dtos import DeclineInvitationResponse
from .validation import email_mismatch_error, invitation_not_found, response_error

logger = logging.getLogger(__name__)


class DeclineInvitationUseCase:
    """
    Use case for declining invitations.

    Business Rules:
    - Same lookup and state checks as accept
    - The declining email must always match the invitation
    - Declining is terminal until the inviter resends
    """

    def __init__(self, uow: UnitOfWork, token_hasher: TokenHasher, clock: Clock):
        self.uow = uow
        self.token_hasher = token_hasher
        self.clock = clock

    @storage_guard
    async def execute(
        self, token: str, user_email: str
    ) -> Result[DeclineInvitationResponse]:
        token_hash = self.token_hasher.hash(token)
        now = self.clock.now()

        async with self.uow:
            invitation = await self.uow.invitations.get_by_token_hash(token_hash)
            if invitation is None:
                return Return.err(invitation_not_found())

            error = email_mismatch_error(invitation, user_email)
            if error is None:
                error = response_error(invitation, now)
            if error:
                return Return.err(error)

            declined = await self.uow.invitations.mark_declined(
                invitation.id, now, token_hash=token_hash
            )
            if not declined:
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_RESPONDED",
                        "This invitation has already been responded to",
                    )
                )

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=invitation.scope_id,
                    action="invitation_declined",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": invitation.email,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            "Invitation declined",
            extra={
                "invitation_id": str(invitation.id),
                "scope_id": str(invitation.scope_id),
            },
        )

        return Return.ok(DeclineInvitationResponse())
