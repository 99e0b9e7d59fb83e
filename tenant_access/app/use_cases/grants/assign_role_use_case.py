"""
Assign Role Use Case

Handles administrative role grants, platform-wide or scoped.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.authorization_resolver import AuthorizationResolver
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.grant_ledger import GrantLedger
from tenant_access.app.services.role_store import RoleStore
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.libs.result import Result, Return

from .authority import authorize_role_change
from .dtos import AssignRoleResponse

logger = logging.getLogger(__name__)


class AssignRoleUseCase:
    """
    Use case for assigning a role to a user.

    Business Rules:
    - The caller needs user.update in the grant's own scope; a platform grant
      needs it platform-wide, scoped grants never count
    - The caller cannot hand out a role with more authority (lower level) than
      the best role they hold in that scope; equal level is allowed
    - Idempotent on (user, role, scope)
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @storage_guard
    async def execute(
        self,
        caller_id: UUID,
        user_id: UUID,
        role_name: str,
        scope_id: Optional[UUID] = None,
        expires_at: Optional[datetime] = None,
    ) -> Result[AssignRoleResponse]:
        role_result = await authorize_role_change(
            AuthorizationResolver(self.uow, self.clock),
            RoleStore(self.uow),
            caller_id,
            role_name,
            scope_id,
        )
        if role_result.is_err():
            return role_result
        role = role_result.value

        result = await GrantLedger(self.uow, self.clock).grant(
            user_id, role.id, scope_id, expires_at
        )
        if result.is_err():
            return result
        grant = result.value

        logger.info(
            "Role assigned",
            extra={
                "caller_id": str(caller_id),
                "user_id": str(user_id),
                "role": role.name,
                "scope_id": str(scope_id),
            },
        )

        return Return.ok(
            AssignRoleResponse(
                id=str(grant.id),
                user_id=str(grant.user_id),
                role=role.name,
                scope_id=str(grant.scope_id) if grant.scope_id else None,
                expires_at=grant.expires_at.isoformat() if grant.expires_at else None,
            )
        )
