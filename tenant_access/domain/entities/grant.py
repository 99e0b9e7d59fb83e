"""
Grant Entity

A role assignment for a user, optionally scoped and optionally time-limited.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now
from .enums import ScopeMode


class Grant(SQLModel, table=True):
    """
    Grant entity - (user, role, scope?) assignment.

    Business Rules:
    - At most one grant per (user_id, role_id, scope_id)
    - scope_id None means platform-wide
    - scope_id is a lookup key only; removing a scope does not cascade here
    - Once expires_at has passed the grant is treated as absent
    """

    __tablename__ = "grants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(nullable=False, index=True)
    role_id: UUID = Field(foreign_key="roles.id", nullable=False)
    scope_id: Optional[UUID] = Field(default=None, index=True)

    assigned_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_grant_user_role_scope", "user_id", "role_id", "scope_id", unique=True),
        # NULLs are distinct in the index above; platform grants need their own
        Index(
            "idx_grant_user_role_platform",
            "user_id",
            "role_id",
            unique=True,
            sqlite_where=text("scope_id IS NULL"),
            postgresql_where=text("scope_id IS NULL"),
        ),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now


@dataclass(frozen=True)
class ScopeFilter:
    """
    Which grants a read considers.

    ScopeFilter.any()          every scope, platform-wide included
    ScopeFilter.platform()     platform-wide grants only (scope_id IS NULL)
    ScopeFilter.of(scope_id)   grants of exactly that scope
    """

    mode: ScopeMode
    scope_id: Optional[UUID] = None

    @classmethod
    def any(cls) -> "ScopeFilter":
        return cls(ScopeMode.any)

    @classmethod
    def platform(cls) -> "ScopeFilter":
        return cls(ScopeMode.platform)

    @classmethod
    def of(cls, scope_id: UUID) -> "ScopeFilter":
        return cls(ScopeMode.specific, scope_id)
