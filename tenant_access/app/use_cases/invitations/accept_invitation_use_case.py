"""
Accept Invitation Use Case

Consumes an invitation token: the invitee joins the scope and receives the
invited role there.
"""

import logging
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.notifier import Notifier, deliver_best_effort
from tenant_access.app.services.token_hasher import TokenHasher
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import AuditEvent, Grant
from tenant_access.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse
from .validation import email_mismatch_error, invitation_not_found, response_error

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting invitations.

    Business Rules:
    - The presented token is hashed and looked up by hash
    - The accepting user's email must match the invitation (case-insensitive),
      whatever state the invitation is in
    - Accepted, declined and expired invitations are rejected
    - Acceptance is stamped with a conditional update; of two concurrent
      accepts only one succeeds
    - Membership and the scoped grant are idempotent
    - The inviter is notified best-effort after commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_hasher: TokenHasher,
        notifier: Notifier,
        clock: Clock,
    ):
        self.uow = uow
        self.token_hasher = token_hasher
        self.notifier = notifier
        self.clock = clock

    @storage_guard
    async def execute(
        self, token: str, user_id: UUID, user_email: str
    ) -> Result[AcceptInvitationResponse]:
        """
        Execute accept invitation use case.

        Args:
            token: Plaintext invitation token
            user_id: Authenticated user accepting the invitation
            user_email: Email of the authenticated user

        Returns:
            Result with AcceptInvitationResponse DTO, or Error
        """
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

            accepted = await self.uow.invitations.mark_accepted(
                invitation.id, token_hash, now
            )
            if not accepted:
                return Return.err(
                    Error(
                        "INVITATION_ALREADY_RESPONDED",
                        "This invitation has already been responded to",
                    )
                )

            await self.uow.members.add_member(invitation.scope_id, user_id)
            await self.uow.grants.get_or_create(
                Grant(
                    user_id=user_id,
                    role_id=invitation.role_id,
                    scope_id=invitation.scope_id,
                    assigned_at=now,
                ),
                now,
            )

            role = await self.uow.roles.get_by_id(invitation.role_id)
            role_name = role.name if role else str(invitation.role_id)
            inviter = await self.uow.users.get_by_id(invitation.inviter_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=invitation.scope_id,
                    user_id=user_id,
                    action="invitation_accepted",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "role": role_name,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            "Invitation accepted",
            extra={
                "invitation_id": str(invitation.id),
                "scope_id": str(invitation.scope_id),
                "user_id": str(user_id),
            },
        )

        if inviter:
            await deliver_best_effort(
                self.notifier.notify_welcome(inviter.email, inviter.first_name),
                {"invitation_id": str(invitation.id), "notification": "welcome"},
            )

        return Return.ok(
            AcceptInvitationResponse(scope_id=str(invitation.scope_id), role=role_name)
        )
