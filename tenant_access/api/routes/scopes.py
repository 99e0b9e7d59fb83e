from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from tenant_access.api.error import raise_for_error
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.app.use_cases.scopes import (
    CreateScopeResponse,
    CreateScopeUseCase,
    RemoveMemberResponse,
    RemoveMemberUseCase,
)
from tenant_access.depends import get_clock, get_current_user, get_unit_of_work

router = APIRouter(prefix="/scopes", tags=["Scopes"])


class CreateScopeRequest(BaseModel):
    """Create scope HTTP request payload"""

    name: str = Field(..., min_length=1, max_length=255, description="Scope name")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateScopeResponse)
async def create_scope(
    request: CreateScopeRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Create Scope

    The caller becomes the owner and receives the owner role in the new scope.

    Raises:
        - 404 Not Found: ROLE_NOT_FOUND (catalog not seeded)
    """
    use_case = CreateScopeUseCase(
        uow, clock, owner_role_name=ApplicationConfig.SCOPE_OWNER_ROLE
    )
    result = await use_case.execute(UUID(current_user["user_id"]), request.name)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/{scope_id}/members/{member_id}", response_model=RemoveMemberResponse)
async def remove_member(
    scope_id: UUID,
    member_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE, CANNOT_REMOVE_OWNER
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
    """
    use_case = RemoveMemberUseCase(uow)
    result = await use_case.execute(UUID(current_user["user_id"]), scope_id, member_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
