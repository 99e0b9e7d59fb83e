"""
Use Cases

Organized into domain folders:
- invitations/: Invitation token lifecycle
- scopes/: Scope creation and membership
- grants/: Administrative role assignment
- bootstrap/: Catalog seeding
"""

from .bootstrap import SeedCatalogUseCase
from .grants import AssignRoleUseCase, RevokeRoleUseCase
from .invitations import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    DeclineInvitationUseCase,
    ListPendingInvitationsUseCase,
    ListScopeInvitationsUseCase,
    ResendInvitationUseCase,
)
from .scopes import CreateScopeUseCase, RemoveMemberUseCase

__all__ = [
    # Invitations
    "CreateInvitationUseCase",
    "AcceptInvitationUseCase",
    "DeclineInvitationUseCase",
    "CancelInvitationUseCase",
    "ResendInvitationUseCase",
    "ListPendingInvitationsUseCase",
    "ListScopeInvitationsUseCase",
    # Scopes
    "CreateScopeUseCase",
    "RemoveMemberUseCase",
    # Grants
    "AssignRoleUseCase",
    "RevokeRoleUseCase",
    # Bootstrap
    "SeedCatalogUseCase",
]
