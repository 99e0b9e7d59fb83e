from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.app.repositories.scope_repository import IScopeRepository
from tenant_access.domain.entities import Scope


class ScopeRepository(IScopeRepository):
    """Scope repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, scope_id: UUID) -> Optional[Scope]:
        """Get scope by ID"""
        stmt = select(Scope).where(Scope.id == scope_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, scope: Scope) -> Scope:
        """Create a new scope"""
        self.session.add(scope)
        await self.session.flush()
        await self.session.refresh(scope)
        return scope
