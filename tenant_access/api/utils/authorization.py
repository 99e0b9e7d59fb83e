"""
Permission-based authorization dependencies for API endpoints.

Usage:
    @router.post("/scopes/{scope_id}/invitations")
    async def create_invitation(
        scope_id: UUID,
        current_user: dict = Depends(require_permission("invitation.send")),
    ):
        ...

A scope_id path or query parameter narrows the check to grants of that
scope; without one every grant of the user counts.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends

from tenant_access.api.error import raise_for_error
from tenant_access.app.services.authorization_resolver import AuthorizationResolver
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.depends import get_clock, get_current_user, get_unit_of_work
from tenant_access.domain.entities import ScopeFilter
from tenant_access.libs.result import Error

logger = logging.getLogger(__name__)


def scope_filter(scope_id: Optional[UUID] = None, platform: bool = False) -> ScopeFilter:
    if scope_id is not None:
        return ScopeFilter.of(scope_id)
    if platform:
        return ScopeFilter.platform()
    return ScopeFilter.any()


def require_permission(permission: str):
    """
    Factory that creates a dependency requiring a permission.

    Returns the authenticated JWT payload when the user holds the
    permission, raises a 403 ClientError otherwise.
    """

    async def permission_checker(
        scope_id: Optional[UUID] = None,
        current_user: dict = Depends(get_current_user),
        uow: UnitOfWork = Depends(get_unit_of_work),
        clock: Clock = Depends(get_clock),
    ) -> dict:
        resolver = AuthorizationResolver(uow, clock)
        scope = scope_filter(scope_id)
        result = await resolver.has_permission(
            UUID(current_user["user_id"]), permission, scope
        )
        if result.is_err():
            raise_for_error(result.error)

        if not result.value:
            logger.warning(
                "Insufficient permissions",
                extra={
                    "user_id": current_user["user_id"],
                    "scope_id": str(scope_id),
                    "required_permission": permission,
                },
            )
            raise_for_error(
                Error("PERMISSION_DENIED", f"Requires {permission} permission")
            )

        return current_user

    return permission_checker
