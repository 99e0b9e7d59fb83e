"""
Scope Use Case DTOs
"""

from pydantic import BaseModel


class CreateScopeResponse(BaseModel):
    """Response for create scope use case"""

    id: str
    name: str
    role: str


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str = "removed"
    grants_revoked: int = 0
