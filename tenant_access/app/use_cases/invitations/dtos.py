"""
Invitation Use Case DTOs (Data Transfer Objects)

All Response classes for the invitation lifecycle.
"""

import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from tenant_access.domain.entities import Invitation


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationView(BaseModel):
    """Invitation as seen by callers; the token hash never leaves the core"""

    id: str
    inviter_id: str
    email: str
    role_id: str
    scope_id: str
    status: str
    message: Optional[str] = None
    expires_at: str
    created_at: str

    @classmethod
    def from_invitation(cls, invitation: Invitation, now: datetime) -> "InvitationView":
        return cls(
            id=str(invitation.id),
            inviter_id=str(invitation.inviter_id),
            email=invitation.email,
            role_id=str(invitation.role_id),
            scope_id=str(invitation.scope_id),
            status=invitation.status(now).value,
            message=invitation.message,
            expires_at=invitation.expires_at.isoformat(),
            created_at=invitation.created_at.isoformat(),
        )


class CreateInvitationResponse(BaseModel):
    """Response for create invitation use case - carries the plaintext token once"""

    invitation: InvitationView
    token: str


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    scope_id: str
    role: str
    status: str = "accepted"


class DeclineInvitationResponse(BaseModel):
    """Response for decline invitation use case"""

    status: str = "declined"


class CancelInvitationResponse(BaseModel):
    """Response for cancel invitation use case"""

    status: str = "cancelled"


class ResendInvitationResponse(BaseModel):
    """Response for resend invitation use case"""

    token: str
    expires_at: str
    status: str = "resent"


class PageMeta(BaseModel):
    page: int
    limit: int
    total_items: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_items: int) -> "PageMeta":
        total_pages = math.ceil(total_items / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total_items=total_items,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class InvitationPage(BaseModel):
    """One page of invitations, newest first"""

    data: List[InvitationView]
    meta: PageMeta
