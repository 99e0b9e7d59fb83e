"""
Permission Catalog

Read-only lookup over the seeded resource.action permissions.
"""

from typing import List

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import Permission
from tenant_access.libs.result import Error, Result, Return


class PermissionCatalog:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @storage_guard
    async def find(self, name: str) -> Result[Permission]:
        async with self.uow:
            permission = await self.uow.permissions.get_by_name(name)

        if permission is None:
            return Return.err(
                Error("PERMISSION_NOT_FOUND", f"Permission {name} not found")
            )
        return Return.ok(permission)

    @storage_guard
    async def list_all(self) -> Result[List[Permission]]:
        """All permissions ordered by (resource, action)"""
        async with self.uow:
            return Return.ok(await self.uow.permissions.list_all())
