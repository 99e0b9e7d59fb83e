"""
List Invitations Use Cases

Paginated reads of invitations, newest first.
"""

from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.base import normalize_email
from tenant_access.libs.result import Error, Result, Return

from .dtos import InvitationPage, InvitationView, PageMeta

MAX_PAGE_SIZE = 100


def _window(page: int, limit: int):
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    return page, limit, (page - 1) * limit


class ListPendingInvitationsUseCase:
    """Invitations addressed to an email that have not been responded to"""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @storage_guard
    async def execute(
        self, email: str, page: int = 1, limit: int = 20
    ) -> Result[InvitationPage]:
        page, limit, offset = _window(page, limit)
        now = self.clock.now()

        async with self.uow:
            invitations, total = await self.uow.invitations.list_unresponded_by_email(
                normalize_email(email), offset, limit
            )

        return Return.ok(
            InvitationPage(
                data=[InvitationView.from_invitation(i, now) for i in invitations],
                meta=PageMeta.build(page, limit, total),
            )
        )


class ListScopeInvitationsUseCase:
    """All invitations of a scope; the caller must be an active member"""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @storage_guard
    async def execute(
        self, scope_id: UUID, caller_id: UUID, page: int = 1, limit: int = 20
    ) -> Result[InvitationPage]:
        page, limit, offset = _window(page, limit)
        now = self.clock.now()

        async with self.uow:
            if not await self.uow.members.is_member(scope_id, caller_id):
                return Return.err(
                    Error("NOT_A_MEMBER", "You are not a member of this scope")
                )

            invitations, total = await self.uow.invitations.list_by_scope(
                scope_id, offset, limit
            )

        return Return.ok(
            InvitationPage(
                data=[InvitationView.from_invitation(i, now) for i in invitations],
                meta=PageMeta.build(page, limit, total),
            )
        )
