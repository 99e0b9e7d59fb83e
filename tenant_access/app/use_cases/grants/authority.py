"""
Caller authority over a grant's target scope
"""

from typing import Optional
from uuid import UUID

from tenant_access.app.services.authorization_resolver import AuthorizationResolver
from tenant_access.app.services.role_store import RoleStore, outranks, role_above_caller
from tenant_access.domain.entities import Role, ScopeFilter
from tenant_access.libs.result import Error, Result, Return

MANAGE_PERMISSION = "user.update"


def target_scope(scope_id: Optional[UUID]) -> ScopeFilter:
    """Platform grants are governed by platform grants only"""
    return ScopeFilter.platform() if scope_id is None else ScopeFilter.of(scope_id)


async def authorize_role_change(
    resolver: AuthorizationResolver,
    roles: RoleStore,
    caller_id: UUID,
    role_name: str,
    scope_id: Optional[UUID],
) -> Result[Role]:
    """
    Resolve role_name for a grant change by caller_id in the target scope.

    Each step opens its own unit of work; none may run inside an open one.
    """
    target = target_scope(scope_id)

    allowed = await resolver.has_permission(caller_id, MANAGE_PERMISSION, target)
    if allowed.is_err():
        return allowed
    if not allowed.value:
        return Return.err(
            Error("PERMISSION_DENIED", f"Requires {MANAGE_PERMISSION} permission")
        )

    role_result = await roles.find_by_name(role_name)
    if role_result.is_err():
        return role_result
    role = role_result.value

    level = await resolver.best_level(caller_id, target)
    if level.is_err():
        return level
    if outranks(role, level.value):
        return Return.err(role_above_caller(role))

    return Return.ok(role)
