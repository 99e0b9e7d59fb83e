"""
ScopeMember Entity

Links a User to a Scope.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import MembershipStatus


class ScopeMember(SQLModel, table=True):
    """
    ScopeMember entity - membership of a user in a scope.

    Business Rules:
    - (user_id, scope_id) must be unique
    - Active owners are the scope's authority
    - Revoked memberships count as absent
    """

    __tablename__ = "scope_members"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(nullable=False, index=True)
    scope_id: UUID = Field(foreign_key="scopes.id", nullable=False, index=True)

    is_owner: bool = Field(default=False)
    status: MembershipStatus = Field(default=MembershipStatus.active)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_scope_member_user_scope", "user_id", "scope_id", unique=True),
        Index("idx_scope_member_status", "status"),
    )

    def is_active(self) -> bool:
        return self.status == MembershipStatus.active
