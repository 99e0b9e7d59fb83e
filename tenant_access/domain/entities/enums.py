"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MembershipStatus(str, Enum):
    """Scope membership status"""

    active = "active"
    revoked = "revoked"


class InvitationStatus(str, Enum):
    """Invitation status, derived from the response state and expiry"""

    pending = "pending"
    accepted = "accepted"
    declined = "declined"
    expired = "expired"


class ScopeMode(str, Enum):
    """How a grant query treats the scope column"""

    any = "any"
    platform = "platform"
    specific = "specific"
