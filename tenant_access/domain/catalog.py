"""
Default RBAC catalog

System roles and the permissions they carry, seeded at bootstrap.
Permission names are "<resource>.<action>".
"""

from typing import Dict, List, Tuple

# (resource, action, display_name, description)
DEFAULT_PERMISSIONS: List[Tuple[str, str, str, str]] = [
    # User
    ("user", "create", "Create Users", "Can create new user accounts"),
    ("user", "read", "View Users", "Can view user information"),
    ("user", "update", "Update Users", "Can update user information"),
    ("user", "delete", "Delete Users", "Can delete user accounts"),
    # Session
    ("session", "create", "Create Sessions", "Can create new sessions"),
    ("session", "read", "View Sessions", "Can view session details"),
    ("session", "update", "Update Sessions", "Can modify sessions"),
    ("session", "delete", "Delete Sessions", "Can cancel/delete sessions"),
    ("session", "manage", "Manage All Sessions", "Full session management across all users"),
    # Organization
    ("organization", "create", "Create Organizations", "Can create organizations"),
    ("organization", "read", "View Organizations", "Can view organization details"),
    ("organization", "update", "Update Organizations", "Can modify organizations"),
    ("organization", "delete", "Delete Organizations", "Can delete organizations"),
    # Invitation
    ("invitation", "send", "Send Invitations", "Can send invitations"),
    ("invitation", "manage", "Manage Invitations", "Full invitation management"),
    # Feature & subscription
    ("feature", "manage", "Manage Features", "Can manage feature flags"),
    ("subscription", "read", "View Subscriptions", "Can view subscription info"),
    ("subscription", "manage", "Manage Subscriptions", "Full subscription management"),
]

ALL_PERMISSIONS = "*"

# name -> (display_name, description, level, permission names)
DEFAULT_ROLES: Dict[str, Tuple[str, str, int, List[str]]] = {
    "SUPER_ADMIN": (
        "Super Administrator",
        "Full platform access - platform owner",
        1,
        [ALL_PERMISSIONS],
    ),
    "ADMIN": (
        "Administrator",
        "Platform administration and user management",
        2,
        [
            "user.read",
            "user.update",
            "session.read",
            "session.manage",
            "organization.read",
            "organization.update",
            "invitation.manage",
            "subscription.read",
        ],
    ),
    "SUPPORT": (
        "Support Agent",
        "Customer support - read-only access to help users",
        3,
        ["user.read", "session.read", "organization.read", "subscription.read"],
    ),
    "ORGANIZER": (
        "Organizer",
        "Can create and manage sessions, invite participants",
        5,
        [
            "session.create",
            "session.read",
            "session.update",
            "session.delete",
            "invitation.send",
        ],
    ),
    "PARTICIPANT": (
        "Participant",
        "Can join sessions and manage own profile",
        10,
        ["session.read"],
    ),
}
