"""
Revoke Role Use Case
"""

import logging
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
from .dtos import RevokeRoleResponse

logger = logging.getLogger(__name__)


class RevokeRoleUseCase:
    """
    Business Rules:
    - Same authority as assignment: user.update in the grant's scope, and no
      role above the caller's own level
    - Revoking an absent grant succeeds with revoked=False
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
    ) -> Result[RevokeRoleResponse]:
        role_result = await authorize_role_change(
            AuthorizationResolver(self.uow, self.clock),
            RoleStore(self.uow),
            caller_id,
            role_name,
            scope_id,
        )
        if role_result.is_err():
            return role_result

        result = await GrantLedger(self.uow, self.clock).revoke(
            user_id, role_result.value.id, scope_id
        )
        if result.is_err():
            return result

        if result.value:
            logger.info(
                "Role revoked",
                extra={
                    "caller_id": str(caller_id),
                    "user_id": str(user_id),
                    "role": role_name,
                },
            )
        return Return.ok(RevokeRoleResponse(revoked=result.value))
