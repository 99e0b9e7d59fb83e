"""
Role Entity

Named, leveled roles and the link table to their permissions.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class Role(SQLModel, table=True):
    """
    Role entity - a named bundle of permissions.

    Business Rules:
    - name is unique and matched case-sensitively
    - level: 1 = highest authority, 10 = lowest (comparison only)
    - System roles are never deleted
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=50)
    display_name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=255)

    level: int = Field(default=10)
    is_system_role: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))


class RolePermission(SQLModel, table=True):
    """Links roles to permissions (many-to-many)"""

    __tablename__ = "role_permissions"

    role_id: UUID = Field(foreign_key="roles.id", primary_key=True)
    permission_id: UUID = Field(foreign_key="permissions.id", primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_role_permission_permission", "permission_id"),)
