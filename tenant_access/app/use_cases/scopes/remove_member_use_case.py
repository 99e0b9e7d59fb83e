"""
Remove Member from Scope Use Case

Handles removing (soft delete) members from a scope.
"""

import logging
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import AuditEvent, MembershipStatus
from tenant_access.libs.result import Error, Result, Return

from .dtos import RemoveMemberResponse

logger = logging.getLogger(__name__)


class RemoveMemberUseCase:
    """
    Use case for removing members from a scope.

    Business Rules:
    - Only the scope's authority can remove members
    - Owners cannot be removed
    - Membership is soft-deleted (status=revoked)
    - Every grant the member holds in the scope is removed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @storage_guard
    async def execute(
        self,
        requester_id: UUID,
        scope_id: UUID,
        member_id: UUID,
    ) -> Result[RemoveMemberResponse]:
        """
        Execute remove member use case.

        Args:
            requester_id: User ID of the person removing the member
            scope_id: Scope the member is removed from
            member_id: User ID of the member to remove

        Returns:
            Result with RemoveMemberResponse DTO, or Error
        """
        async with self.uow:
            if not await self.uow.members.is_authority(scope_id, requester_id):
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "Only scope owners can remove members")
                )

            membership = await self.uow.members.get_by_user_and_scope(member_id, scope_id)
            if membership is None or not membership.is_active():
                return Return.err(
                    Error(
                        "MEMBERSHIP_NOT_FOUND",
                        "Target user is not a member of this scope",
                    )
                )

            if membership.is_owner:
                return Return.err(
                    Error("CANNOT_REMOVE_OWNER", "Scope owners cannot be removed")
                )

            membership.status = MembershipStatus.revoked
            await self.uow.members.update(membership)

            revoked = await self.uow.grants.delete_in_scope(member_id, scope_id)

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=scope_id,
                    user_id=requester_id,
                    action="member_removed",
                    event_metadata={
                        "removed_user_id": str(member_id),
                        "grants_revoked": revoked,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            "Member removed",
            extra={
                "scope_id": str(scope_id),
                "member_id": str(member_id),
                "grants_revoked": revoked,
            },
        )

        return Return.ok(RemoveMemberResponse(grants_revoked=revoked))
