"""
Resend Invitation Use Case

Reissues an invitation with a fresh token and expiry.
"""

import logging
from datetime import timedelta
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.notifier import Notifier, deliver_best_effort
from tenant_access.app.services.token_hasher import TokenHasher
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import Accepted, AuditEvent
from tenant_access.libs.result import Error, Result, Return

from .create_invitation_use_case import DEFAULT_EXPIRATION
from .dtos import ResendInvitationResponse
from .validation import insufficient_role, invitation_not_found

logger = logging.getLogger(__name__)


def _already_accepted() -> Error:
    return Error(
        "INVITATION_ALREADY_ACCEPTED",
        "Cannot resend an invitation that has already been accepted",
    )


class ResendInvitationUseCase:
    """
    Use case for resending invitations.

    Business Rules:
    - Only the scope's authority can resend
    - Accepted invitations cannot be resent
    - A fresh token replaces the old one, which stops matching
    - Expiry is extended and any decline is cleared
    - A declined invitation is not revived while another active invitation
      exists for the same (email, scope)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_hasher: TokenHasher,
        notifier: Notifier,
        clock: Clock,
        expiration: timedelta = DEFAULT_EXPIRATION,
    ):
        self.uow = uow
        self.token_hasher = token_hasher
        self.notifier = notifier
        self.clock = clock
        self.expiration = expiration

    @storage_guard
    async def execute(
        self, invitation_id: UUID, caller_id: UUID
    ) -> Result[ResendInvitationResponse]:
        now = self.clock.now()

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(invitation_not_found())

            if not await self.uow.members.is_authority(invitation.scope_id, caller_id):
                return Return.err(insufficient_role("resend"))

            if isinstance(invitation.response, Accepted):
                return Return.err(_already_accepted())

            active = await self.uow.invitations.get_active_by_scope_and_email(
                invitation.scope_id, invitation.email, now
            )
            if active and active.id != invitation.id:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "Another active invitation already exists for this email",
                    )
                )

            token = self.token_hasher.generate()
            expires_at = now + self.expiration
            reissued = await self.uow.invitations.reissue(
                invitation.id, self.token_hasher.hash(token), expires_at
            )
            if not reissued:
                return Return.err(_already_accepted())

            inviter = await self.uow.users.get_by_id(caller_id)
            scope = await self.uow.scopes.get_by_id(invitation.scope_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=invitation.scope_id,
                    user_id=caller_id,
                    action="invitation_resent",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": invitation.email,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            "Invitation resent",
            extra={"invitation_id": str(invitation_id), "caller_id": str(caller_id)},
        )

        inviter_name = inviter.full_name if inviter and inviter.full_name else "A scope owner"
        scope_name = scope.name if scope else str(invitation.scope_id)
        await deliver_best_effort(
            self.notifier.notify_invitation(
                invitation.email, token, inviter_name, scope_name, invitation.message
            ),
            {"invitation_id": str(invitation.id), "notification": "invitation"},
        )

        return Return.ok(
            ResendInvitationResponse(token=token, expires_at=expires_at.isoformat())
        )
