from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenant_access.domain.entities import ScopeMember


class IScopeMemberRepository(ABC):
    """Scope membership provider - application layer"""

    @abstractmethod
    async def get_by_user_and_scope(
        self, user_id: UUID, scope_id: UUID
    ) -> Optional[ScopeMember]:
        """Get membership by user and scope, whatever its status"""
        pass

    @abstractmethod
    async def add_member(self, scope_id: UUID, user_id: UUID) -> ScopeMember:
        """Ensure an active membership exists (idempotent)"""
        pass

    @abstractmethod
    async def is_member(self, scope_id: UUID, user_id: UUID) -> bool:
        """True if the user holds an active membership"""
        pass

    @abstractmethod
    async def is_authority(self, scope_id: UUID, user_id: UUID) -> bool:
        """True if the user is an active owner of the scope"""
        pass

    @abstractmethod
    async def create(self, member: ScopeMember) -> ScopeMember:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, member: ScopeMember) -> ScopeMember:
        """Update existing membership"""
        pass
