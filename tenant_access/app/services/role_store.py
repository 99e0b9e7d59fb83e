"""
Role Store

Named, leveled roles and the permissions each carries. Roles are reference
data here; there is no resolution cache to invalidate when they change.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import Permission, Role, ScopeFilter
from tenant_access.libs.result import Error, Result, Return


class RoleStore:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @storage_guard
    async def find_by_name(self, name: str) -> Result[Role]:
        """Exact, case-sensitive match"""
        async with self.uow:
            role = await self.uow.roles.get_by_name(name)

        if role is None:
            return Return.err(Error("ROLE_NOT_FOUND", f"Role {name} not found"))
        return Return.ok(role)

    @storage_guard
    async def find_by_id(self, role_id: UUID) -> Result[Role]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)

        if role is None:
            return Return.err(
                Error("ROLE_NOT_FOUND", f"Role with ID {role_id} not found")
            )
        return Return.ok(role)

    @storage_guard
    async def permissions_of(self, role: Role) -> Result[List[Permission]]:
        async with self.uow:
            permissions = await self.uow.permissions.list_for_roles([role.id])
        return Return.ok(unique_permissions(permissions))


def unique_permissions(permissions: List[Permission]) -> List[Permission]:
    """Deduplicate by id, keeping (resource, action) order"""
    by_id = {permission.id: permission for permission in permissions}
    return sorted(by_id.values(), key=lambda p: (p.resource, p.action))


async def highest_authority(
    uow: UnitOfWork, user_id: UUID, scope: ScopeFilter, now: datetime
) -> Optional[int]:
    """
    Lowest role level among the user's unexpired grants matching scope, or
    None without grants. Runs inside the caller's open unit of work.
    """
    grants = await uow.grants.list_active(user_id, scope, now)
    if not grants:
        return None
    roles = await uow.roles.get_by_ids({grant.role_id for grant in grants})
    return min((role.level for role in roles), default=None)


def outranks(role: Role, level: Optional[int]) -> bool:
    """True when role carries more authority than a holder of level"""
    return level is None or role.level < level


def role_above_caller(role: Role) -> Error:
    return Error(
        "ROLE_ABOVE_CALLER",
        f"Role {role.name} carries more authority than the caller holds",
    )
