"""
Create Invitation Use Case

Handles inviting an email address to join a scope with a role.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.notifier import Notifier, deliver_best_effort
from tenant_access.app.services.role_store import highest_authority, outranks, role_above_caller
from tenant_access.app.services.token_hasher import TokenHasher
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.base import normalize_email
from tenant_access.domain.entities import AuditEvent, Invitation, ScopeFilter
from tenant_access.libs.result import Error, Result, Return

from .dtos import CreateInvitationResponse, InvitationView
from .validation import insufficient_role

logger = logging.getLogger(__name__)

DEFAULT_ROLE_NAME = "PARTICIPANT"
DEFAULT_EXPIRATION = timedelta(days=7)


class CreateInvitationUseCase:
    """
    Use case for inviting an email address to a scope.

    Business Rules:
    - Only the scope's authority (active owner) can invite
    - An email that already belongs to an active member cannot be invited
    - Role defaults to the platform baseline role when not given
    - The invited role cannot carry more authority (lower level) than the
      inviter's best role in the scope
    - At most one active (unresponded, unexpired) invitation per (email, scope)
    - Only the SHA-256 hash of the token is stored; it expires after 7 days
    - Notification is best-effort and never fails the invitation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_hasher: TokenHasher,
        notifier: Notifier,
        clock: Clock,
        default_role_name: str = DEFAULT_ROLE_NAME,
        expiration: timedelta = DEFAULT_EXPIRATION,
    ):
        self.uow = uow
        self.token_hasher = token_hasher
        self.notifier = notifier
        self.clock = clock
        self.default_role_name = default_role_name
        self.expiration = expiration

    @storage_guard
    async def execute(
        self,
        inviter_id: UUID,
        email: str,
        scope_id: UUID,
        role_name: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Result[CreateInvitationResponse]:
        """
        Execute create invitation use case.

        Args:
            inviter_id: User ID of the person sending the invite
            email: Email address to invite
            scope_id: Target scope (organization/group)
            role_name: Role granted on acceptance (defaults to the baseline role)
            message: Optional personal message for the invitee

        Returns:
            Result with CreateInvitationResponse (including the plaintext token), or Error
        """
        email = normalize_email(email)
        now = self.clock.now()

        async with self.uow:
            if not await self.uow.members.is_authority(scope_id, inviter_id):
                return Return.err(insufficient_role("send"))

            # The invitee must not already be an active member
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user and await self.uow.members.is_member(
                scope_id, existing_user.id
            ):
                return Return.err(
                    Error("ALREADY_MEMBER", "This user is already a member of the scope")
                )

            role_name = role_name or self.default_role_name
            role = await self.uow.roles.get_by_name(role_name)
            if role is None:
                return Return.err(Error("ROLE_NOT_FOUND", f"Role {role_name} not found"))

            best = await highest_authority(
                self.uow, inviter_id, ScopeFilter.of(scope_id), now
            )
            if outranks(role, best):
                return Return.err(role_above_caller(role))

            active = await self.uow.invitations.get_active_by_scope_and_email(
                scope_id, email, now
            )
            if active:
                return Return.err(
                    Error(
                        "INVITE_ALREADY_EXISTS",
                        "An active invitation already exists for this email",
                    )
                )

            token = self.token_hasher.generate()
            invitation = Invitation(
                inviter_id=inviter_id,
                email=email,
                role_id=role.id,
                scope_id=scope_id,
                token_hash=self.token_hasher.hash(token),
                message=message,
                expires_at=now + self.expiration,
                created_at=now,
            )
            invitation = await self.uow.invitations.create(invitation)

            inviter = await self.uow.users.get_by_id(inviter_id)
            scope = await self.uow.scopes.get_by_id(scope_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=scope_id,
                    user_id=inviter_id,
                    action="invitation_sent",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "invited_email": email,
                        "role": role.name,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            "Invitation created",
            extra={
                "invitation_id": str(invitation.id),
                "scope_id": str(scope_id),
                "inviter_id": str(inviter_id),
            },
        )

        inviter_name = inviter.full_name if inviter and inviter.full_name else "A scope owner"
        scope_name = scope.name if scope else str(scope_id)
        await deliver_best_effort(
            self.notifier.notify_invitation(
                email, token, inviter_name, scope_name, message
            ),
            {"invitation_id": str(invitation.id), "notification": "invitation"},
        )

        return Return.ok(
            CreateInvitationResponse(
                invitation=InvitationView.from_invitation(invitation, now),
                token=token,
            )
        )
