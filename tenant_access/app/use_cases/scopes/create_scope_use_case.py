"""
Create Scope Use Case

Creates an organization/group and makes its creator the owner.
"""

import logging
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import AuditEvent, Grant, Scope, ScopeMember
from tenant_access.libs.result import Error, Result, Return

from .dtos import CreateScopeResponse

logger = logging.getLogger(__name__)

OWNER_ROLE_NAME = "ORGANIZER"


class CreateScopeUseCase:
    """
    Use case for creating scopes.

    Business Logic:
    1. Resolve the owner role (ROLE_NOT_FOUND if the catalog is not seeded)
    2. Create the Scope
    3. Create an owner ScopeMember for the creator
    4. Grant the owner role to the creator, scoped to the new scope
    5. Create AuditEvent with action=scope_created
    6. Commit transaction atomically
    """

    def __init__(self, uow: UnitOfWork, clock: Clock, owner_role_name: str = OWNER_ROLE_NAME):
        self.uow = uow
        self.clock = clock
        self.owner_role_name = owner_role_name

    @storage_guard
    async def execute(self, creator_id: UUID, name: str) -> Result[CreateScopeResponse]:
        now = self.clock.now()

        async with self.uow:
            role = await self.uow.roles.get_by_name(self.owner_role_name)
            if role is None:
                return Return.err(
                    Error("ROLE_NOT_FOUND", f"Role {self.owner_role_name} not found")
                )

            scope = await self.uow.scopes.create(Scope(name=name.strip(), created_at=now))

            await self.uow.members.create(
                ScopeMember(user_id=creator_id, scope_id=scope.id, is_owner=True)
            )
            await self.uow.grants.get_or_create(
                Grant(user_id=creator_id, role_id=role.id, scope_id=scope.id, assigned_at=now),
                now,
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=scope.id,
                    user_id=creator_id,
                    action="scope_created",
                    event_metadata={"name": scope.name, "role": role.name},
                )
            )

            await self.uow.commit()

        logger.info(
            "Scope created",
            extra={"scope_id": str(scope.id), "creator_id": str(creator_id)},
        )

        return Return.ok(
            CreateScopeResponse(id=str(scope.id), name=scope.name, role=role.name)
        )
