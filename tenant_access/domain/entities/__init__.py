"""
Domain Entities

All domain entities organized by model.
"""

# Export all enums
from .enums import InvitationStatus, MembershipStatus, ScopeMode

# Export all entities
from .permission import Permission
from .role import Role, RolePermission
from .grant import Grant, ScopeFilter
from .invitation import Accepted, Declined, Invitation, InvitationResponse, Pending
from .scope import Scope
from .scope_member import ScopeMember
from .user import User
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "InvitationStatus",
    "MembershipStatus",
    "ScopeMode",
    # Entities
    "Permission",
    "Role",
    "RolePermission",
    "Grant",
    "ScopeFilter",
    "Invitation",
    "InvitationResponse",
    "Pending",
    "Accepted",
    "Declined",
    "Scope",
    "ScopeMember",
    "User",
    "AuditEvent",
]
