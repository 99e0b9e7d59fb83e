from typing import Iterable, List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.app.repositories.permission_repository import IPermissionRepository
from tenant_access.domain.entities import Permission, RolePermission


class PermissionRepository(IPermissionRepository):
    """Permission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by its resource.action name"""
        stmt = select(Permission).where(Permission.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Permission]:
        """List every permission ordered by (resource, action)"""
        stmt = select(Permission).order_by(Permission.resource, Permission.action)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_roles(self, role_ids: Iterable[UUID]) -> List[Permission]:
        """Distinct permissions carried by any of the given roles"""
        role_ids = list(role_ids)
        if not role_ids:
            return []

        stmt = (
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(col(RolePermission.role_id).in_(role_ids))
            .distinct()
            .order_by(Permission.resource, Permission.action)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, permission: Permission) -> Permission:
        """Create a new permission"""
        self.session.add(permission)
        await self.session.flush()
        await self.session.refresh(permission)
        return permission
