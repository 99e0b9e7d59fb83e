from typing import Iterable, List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.app.repositories.role_repository import IRoleRepository
from tenant_access.domain.entities import Role, RolePermission


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        stmt = select(Role).where(Role.id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by exact (case-sensitive) name"""
        stmt = select(Role).where(Role.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_names(self, names: Iterable[str]) -> List[Role]:
        """Get every role whose name is in names"""
        names = list(names)
        if not names:
            return []

        stmt = select(Role).where(col(Role.name).in_(names))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_ids(self, role_ids: Iterable[UUID]) -> List[Role]:
        """Get roles by IDs, ordered by level"""
        role_ids = list(role_ids)
        if not role_ids:
            return []

        stmt = select(Role).where(col(Role.id).in_(role_ids)).order_by(Role.level, Role.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, role: Role) -> Role:
        """Create a new role"""
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def attach_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Link a permission to a role; returns False if already linked"""
        stmt = select(RolePermission).where(
            RolePermission.role_id == role_id,
            RolePermission.permission_id == permission_id,
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is not None:
            return False

        self.session.add(RolePermission(role_id=role_id, permission_id=permission_id))
        await self.session.flush()
        return True
