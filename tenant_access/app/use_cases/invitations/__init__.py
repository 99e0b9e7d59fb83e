"""
Invitation Use Cases

Token lifecycle of scope invitations.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .cancel_invitation_use_case import CancelInvitationUseCase
from .create_invitation_use_case import CreateInvitationUseCase
from .decline_invitation_use_case import DeclineInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    CancelInvitationResponse,
    CreateInvitationResponse,
    DeclineInvitationResponse,
    InvitationPage,
    InvitationView,
    PageMeta,
    ResendInvitationResponse,
)
from .list_invitations_use_case import (
    ListPendingInvitationsUseCase,
    ListScopeInvitationsUseCase,
)
from .resend_invitation_use_case import ResendInvitationUseCase

__all__ = [
    "CreateInvitationUseCase",
    "AcceptInvitationUseCase",
    "DeclineInvitationUseCase",
    "CancelInvitationUseCase",
    "ResendInvitationUseCase",
    "ListPendingInvitationsUseCase",
    "ListScopeInvitationsUseCase",
    "InvitationView",
    "CreateInvitationResponse",
    "AcceptInvitationResponse",
    "DeclineInvitationResponse",
    "CancelInvitationResponse",
    "ResendInvitationResponse",
    "InvitationPage",
    "PageMeta",
]
