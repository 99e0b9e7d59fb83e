from datetime import UTC, datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field, field_validator

from tenant_access.api.error import raise_for_error
from tenant_access.api.utils.authorization import scope_filter
from tenant_access.app.services.authorization_resolver import AuthorizationResolver
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.grant_ledger import GrantLedger
from tenant_access.app.services.permission_catalog import PermissionCatalog
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.app.use_cases.grants import (
    AssignRoleResponse,
    AssignRoleUseCase,
    RevokeRoleResponse,
    RevokeRoleUseCase,
)
from tenant_access.depends import get_clock, get_current_user, get_unit_of_work

router = APIRouter(tags=["Authorization"])


class PermissionInfo(BaseModel):
    name: str
    display_name: str
    resource: str
    action: str


class RoleInfo(BaseModel):
    name: str
    display_name: str
    level: int


class PermissionCheckResponse(BaseModel):
    permission: str
    allowed: bool


class GrantRoleRequest(BaseModel):
    """Administrative role assignment payload"""

    user_id: UUID
    role: str = Field(..., description="Role name")
    scope_id: Optional[UUID] = Field(None, description="Omit for a platform-wide grant")
    expires_at: Optional[datetime] = None

    @field_validator("expires_at")
    @classmethod
    def _naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value


def _permission_info(permissions) -> List[PermissionInfo]:
    return [
        PermissionInfo(
            name=p.name, display_name=p.display_name, resource=p.resource, action=p.action
        )
        for p in permissions
    ]


@router.get("/permissions", response_model=List[PermissionInfo])
async def list_permissions(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Permission catalog ordered by (resource, action)"""
    result = await PermissionCatalog(uow).list_all()
    if result.is_err():
        raise_for_error(result.error)

    return _permission_info(result.value)


@router.get("/me/permissions", response_model=List[PermissionInfo])
async def my_permissions(
    scope_id: Optional[UUID] = Query(None),
    platform: bool = Query(False),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Effective permissions of the caller, optionally narrowed to one scope"""
    resolver = AuthorizationResolver(uow, clock)
    result = await resolver.effective_permissions(
        UUID(current_user["user_id"]), scope_filter(scope_id, platform)
    )
    if result.is_err():
        raise_for_error(result.error)

    return _permission_info(result.value)


@router.get("/me/permissions/check", response_model=PermissionCheckResponse)
async def check_permission(
    name: str = Query(..., description="Permission name, e.g. session.create"),
    scope_id: Optional[UUID] = Query(None),
    platform: bool = Query(False),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    resolver = AuthorizationResolver(uow, clock)
    result = await resolver.has_permission(
        UUID(current_user["user_id"]), name, scope_filter(scope_id, platform)
    )
    if result.is_err():
        raise_for_error(result.error)

    return PermissionCheckResponse(permission=name, allowed=result.value)


@router.get("/me/roles", response_model=List[RoleInfo])
async def my_roles(
    scope_id: Optional[UUID] = Query(None),
    platform: bool = Query(False),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Roles the caller holds through unexpired grants"""
    ledger = GrantLedger(uow, clock)
    result = await ledger.list_roles(
        UUID(current_user["user_id"]), scope_filter(scope_id, platform)
    )
    if result.is_err():
        raise_for_error(result.error)

    return [RoleInfo(name=r.name, display_name=r.display_name, level=r.level) for r in result.value]


@router.post("/grants", status_code=status.HTTP_201_CREATED, response_model=AssignRoleResponse)
async def grant_role(
    request: GrantRoleRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Assign a role (administrative grant). Idempotent on (user, role, scope).

    Requires user.update in the grant's own scope (platform-wide when
    scope_id is omitted).

    Raises:
        - 403 Forbidden: PERMISSION_DENIED, ROLE_ABOVE_CALLER
        - 404 Not Found: ROLE_NOT_FOUND
    """
    result = await AssignRoleUseCase(uow, clock).execute(
        UUID(current_user["user_id"]),
        request.user_id,
        request.role,
        request.scope_id,
        request.expires_at,
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/grants", response_model=RevokeRoleResponse)
async def revoke_role(
    user_id: UUID = Query(...),
    role: str = Query(...),
    grant_scope_id: Optional[UUID] = Query(None),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Revoke a role; revoking an absent grant succeeds with revoked=false"""
    result = await RevokeRoleUseCase(uow, clock).execute(
        UUID(current_user["user_id"]), user_id, role, grant_scope_id
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value
