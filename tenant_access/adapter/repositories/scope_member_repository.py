from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.app.repositories.scope_member_repository import IScopeMemberRepository
from tenant_access.domain.entities import MembershipStatus, ScopeMember


class ScopeMemberRepository(IScopeMemberRepository):
    """Scope membership provider implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_scope(
        self, user_id: UUID, scope_id: UUID
    ) -> Optional[ScopeMember]:
        """Get membership by user and scope, whatever its status"""
        stmt = select(ScopeMember).where(
            ScopeMember.user_id == user_id, ScopeMember.scope_id == scope_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_member(self, scope_id: UUID, user_id: UUID) -> ScopeMember:
        """Ensure an active membership exists; a revoked one is reactivated"""
        member = await self.get_by_user_and_scope(user_id, scope_id)
        if member is None:
            return await self.create(ScopeMember(user_id=user_id, scope_id=scope_id))

        if not member.is_active():
            member.status = MembershipStatus.active
            member = await self.update(member)
        return member

    async def is_member(self, scope_id: UUID, user_id: UUID) -> bool:
        """True if the user holds an active membership"""
        member = await self.get_by_user_and_scope(user_id, scope_id)
        return member is not None and member.is_active()

    async def is_authority(self, scope_id: UUID, user_id: UUID) -> bool:
        """True if the user is an active owner of the scope"""
        member = await self.get_by_user_and_scope(user_id, scope_id)
        return member is not None and member.is_active() and member.is_owner

    async def create(self, member: ScopeMember) -> ScopeMember:
        """Create a new membership"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def update(self, member: ScopeMember) -> ScopeMember:
        """Update existing membership"""
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member
