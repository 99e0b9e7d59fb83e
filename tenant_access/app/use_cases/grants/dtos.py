"""
Grant Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel


class AssignRoleResponse(BaseModel):
    """Response for assign role use case"""

    id: str
    user_id: str
    role: str
    scope_id: Optional[str] = None
    expires_at: Optional[str] = None


class RevokeRoleResponse(BaseModel):
    """Response for revoke role use case"""

    revoked: bool
