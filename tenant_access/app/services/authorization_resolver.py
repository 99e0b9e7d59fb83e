"""
Authorization Resolver

Effective permissions and capability checks over the Grant Ledger and Role
Store. Read-only: no operation changes state.
"""

from typing import FrozenSet, Iterable, List, Optional
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.role_store import highest_authority, unique_permissions
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import Permission, ScopeFilter
from tenant_access.libs.result import Result, Return


class AuthorizationResolver:
    """
    Business Rules:
    - Effective permissions = union of permissions of every unexpired grant's
      role matching the scope filter
    - A user without grants resolves to an empty set, never an error
    - Unknown role or permission names resolve to False
    - ScopeFilter.of(scope) does not fold in platform-wide grants
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @storage_guard
    async def effective_permissions(
        self, user_id: UUID, scope: ScopeFilter = ScopeFilter.any()
    ) -> Result[List[Permission]]:
        return Return.ok(await self._effective_permissions(user_id, scope))

    @storage_guard
    async def has_role(
        self, user_id: UUID, role_name: str, scope: ScopeFilter = ScopeFilter.any()
    ) -> Result[bool]:
        return Return.ok(await self._holds_any_role(user_id, [role_name], scope))

    @storage_guard
    async def has_any_role(
        self,
        user_id: UUID,
        role_names: Iterable[str],
        scope: ScopeFilter = ScopeFilter.any(),
    ) -> Result[bool]:
        return Return.ok(await self._holds_any_role(user_id, role_names, scope))

    @storage_guard
    async def has_permission(
        self, user_id: UUID, name: str, scope: ScopeFilter = ScopeFilter.any()
    ) -> Result[bool]:
        names = await self._permission_names(user_id, scope)
        return Return.ok(name in names)

    @storage_guard
    async def has_any_permission(
        self,
        user_id: UUID,
        names: Iterable[str],
        scope: ScopeFilter = ScopeFilter.any(),
    ) -> Result[bool]:
        held = await self._permission_names(user_id, scope)
        return Return.ok(not held.isdisjoint(names))

    @storage_guard
    async def has_all_permissions(
        self,
        user_id: UUID,
        names: Iterable[str],
        scope: ScopeFilter = ScopeFilter.any(),
    ) -> Result[bool]:
        held = await self._permission_names(user_id, scope)
        return Return.ok(held.issuperset(names))

    @storage_guard
    async def best_level(
        self, user_id: UUID, scope: ScopeFilter = ScopeFilter.any()
    ) -> Result[Optional[int]]:
        """Lowest level (most authority) among held roles; None without grants"""
        now = self.clock.now()
        async with self.uow:
            level = await highest_authority(self.uow, user_id, scope, now)
        return Return.ok(level)

    async def _effective_permissions(
        self, user_id: UUID, scope: ScopeFilter
    ) -> List[Permission]:
        now = self.clock.now()
        async with self.uow:
            grants = await self.uow.grants.list_active(user_id, scope, now)
            if not grants:
                return []
            permissions = await self.uow.permissions.list_for_roles(
                {g.role_id for g in grants}
            )
        return unique_permissions(permissions)

    async def _permission_names(
        self, user_id: UUID, scope: ScopeFilter
    ) -> FrozenSet[str]:
        permissions = await self._effective_permissions(user_id, scope)
        return frozenset(p.name for p in permissions)

    async def _holds_any_role(
        self, user_id: UUID, role_names: Iterable[str], scope: ScopeFilter
    ) -> bool:
        role_names = list(role_names)
        if not role_names:
            return False

        now = self.clock.now()
        async with self.uow:
            roles = await self.uow.roles.get_by_names(role_names)
            if not roles:
                return False
            grants = await self.uow.grants.list_active(user_id, scope, now)

        wanted = {role.id for role in roles}
        return any(grant.role_id in wanted for grant in grants)
