"""
Seed Catalog Use Case

Inserts the default permissions and system roles. Safe to re-run.
"""

import logging
from typing import Dict, List, Tuple

from pydantic import BaseModel

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.catalog import ALL_PERMISSIONS, DEFAULT_PERMISSIONS, DEFAULT_ROLES
from tenant_access.domain.entities import Permission, Role
from tenant_access.libs.result import Result, Return

logger = logging.getLogger(__name__)


class SeedCatalogResponse(BaseModel):
    permissions_created: int = 0
    roles_created: int = 0
    links_created: int = 0


class SeedCatalogUseCase:
    """
    Use case for seeding the RBAC catalog.

    Business Rules:
    - Missing permissions and roles are created, existing ones are left alone
    - "*" in a role's permission list expands to every catalog permission
    - Re-running creates nothing
    """

    def __init__(
        self,
        uow: UnitOfWork,
        permissions: List[Tuple[str, str, str, str]] = DEFAULT_PERMISSIONS,
        roles: Dict[str, Tuple[str, str, int, List[str]]] = DEFAULT_ROLES,
    ):
        self.uow = uow
        self.permissions = permissions
        self.roles = roles

    @storage_guard
    async def execute(self) -> Result[SeedCatalogResponse]:
        response = SeedCatalogResponse()

        async with self.uow:
            catalog: Dict[str, Permission] = {}
            for resource, action, display_name, description in self.permissions:
                name = Permission.identity(resource, action)
                permission = await self.uow.permissions.get_by_name(name)
                if permission is None:
                    permission = await self.uow.permissions.create(
                        Permission(
                            name=name,
                            display_name=display_name,
                            description=description,
                            resource=resource,
                            action=action,
                        )
                    )
                    response.permissions_created += 1
                catalog[name] = permission

            for name, (display_name, description, level, names) in self.roles.items():
                role = await self.uow.roles.get_by_name(name)
                if role is None:
                    role = await self.uow.roles.create(
                        Role(
                            name=name,
                            display_name=display_name,
                            description=description,
                            level=level,
                            is_system_role=True,
                        )
                    )
                    response.roles_created += 1

                if ALL_PERMISSIONS in names:
                    names = list(catalog)
                for permission_name in names:
                    permission = catalog.get(permission_name)
                    if permission is None:
                        logger.warning(
                            "Role %s references unknown permission %s",
                            name,
                            permission_name,
                        )
                        continue
                    if await self.uow.roles.attach_permission(role.id, permission.id):
                        response.links_created += 1

            await self.uow.commit()

        logger.info("Catalog seeded", extra=response.model_dump())
        return Return.ok(response)
