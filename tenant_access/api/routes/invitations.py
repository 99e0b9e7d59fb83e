from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from tenant_access.api.error import raise_for_error
from tenant_access.api.utils.authorization import require_permission
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.notifier import Notifier
from tenant_access.app.services.token_hasher import TokenHasher
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    DeclineInvitationResponse,
    DeclineInvitationUseCase,
    InvitationPage,
    ListPendingInvitationsUseCase,
    ListScopeInvitationsUseCase,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from tenant_access.depends import (
    INVITATION_TTL,
    get_clock,
    get_current_user,
    get_notifier,
    get_token_hasher,
    get_unit_of_work,
)

router = APIRouter(tags=["Invitations"])


class CreateInvitationRequest(BaseModel):
    """Create invitation HTTP request payload"""

    email: EmailStr = Field(..., description="Email address to invite")
    role: Optional[str] = Field(None, description="Role name granted on acceptance")
    message: Optional[str] = Field(None, max_length=1000)


class InvitationTokenRequest(BaseModel):
    """Accept/decline HTTP request payload"""

    token: str = Field(..., min_length=1, description="Invitation token")


@router.post(
    "/scopes/{scope_id}/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateInvitationResponse,
)
async def create_invitation(
    scope_id: UUID,
    request: CreateInvitationRequest,
    current_user: dict = Depends(require_permission("invitation.send")),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_hasher: TokenHasher = Depends(get_token_hasher),
    notifier: Notifier = Depends(get_notifier),
    clock: Clock = Depends(get_clock),
):
    """
    Create Invitation

    Raises:
        - 403 Forbidden: PERMISSION_DENIED, INSUFFICIENT_ROLE
        - 404 Not Found: ROLE_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER, INVITE_ALREADY_EXISTS
    """
    use_case = CreateInvitationUseCase(
        uow,
        token_hasher,
        notifier,
        clock,
        default_role_name=ApplicationConfig.DEFAULT_INVITATION_ROLE,
        expiration=INVITATION_TTL,
    )
    result = await use_case.execute(
        UUID(current_user["user_id"]),
        request.email,
        scope_id,
        role_name=request.role,
        message=request.message,
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/scopes/{scope_id}/invitations", response_model=InvitationPage)
async def list_scope_invitations(
    scope_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """All invitations of a scope, newest first. Requires active membership."""
    use_case = ListScopeInvitationsUseCase(uow, clock)
    result = await use_case.execute(scope_id, UUID(current_user["user_id"]), page, limit)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/invitations/pending", response_model=InvitationPage)
async def list_pending_invitations(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """Invitations addressed to the caller's email that await a response"""
    use_case = ListPendingInvitationsUseCase(uow, clock)
    result = await use_case.execute(current_user["email"], page, limit)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/invitations/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: InvitationTokenRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_hasher: TokenHasher = Depends(get_token_hasher),
    notifier: Notifier = Depends(get_notifier),
    clock: Clock = Depends(get_clock),
):
    """
    Accept Invitation

    Raises:
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED, INVITATION_ALREADY_DECLINED,
                        INVITATION_ALREADY_RESPONDED
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = AcceptInvitationUseCase(uow, token_hasher, notifier, clock)
    result = await use_case.execute(
        request.token, UUID(current_user["user_id"]), current_user["email"]
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/invitations/decline", response_model=DeclineInvitationResponse)
async def decline_invitation(
    request: InvitationTokenRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_hasher: TokenHasher = Depends(get_token_hasher),
    clock: Clock = Depends(get_clock),
):
    """Decline Invitation. Same errors as accept."""
    use_case = DeclineInvitationUseCase(uow, token_hasher, clock)
    result = await use_case.execute(request.token, current_user["email"])

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/invitations/{invitation_id}", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Cancel Invitation

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED
    """
    use_case = CancelInvitationUseCase(uow, clock)
    result = await use_case.execute(invitation_id, UUID(current_user["user_id"]))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/invitations/{invitation_id}/resend", response_model=ResendInvitationResponse
)
async def resend_invitation(
    invitation_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_hasher: TokenHasher = Depends(get_token_hasher),
    notifier: Notifier = Depends(get_notifier),
    clock: Clock = Depends(get_clock),
):
    """
    Resend Invitation

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: INVITATION_ALREADY_ACCEPTED, INVITE_ALREADY_EXISTS
    """
    use_case = ResendInvitationUseCase(
        uow, token_hasher, notifier, clock, expiration=INVITATION_TTL
    )
    result = await use_case.execute(invitation_id, UUID(current_user["user_id"]))

    if result.is_err():
        raise_for_error(result.error)

    return result.value
