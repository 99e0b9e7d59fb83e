"""
Permission Entity

A single capability, identified by "<resource>.<action>".
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utc_now


class Permission(SQLModel, table=True):
    """
    Permission entity - seeded at bootstrap, never mutated at runtime.

    Business Rules:
    - name is "<resource>.<action>" and unique
    - Catalog listing is ordered by (resource, action)
    """

    __tablename__ = "permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(unique=True, index=True, max_length=100)
    display_name: str = Field(max_length=100)
    description: Optional[str] = None

    resource: str = Field(max_length=50)
    action: str = Field(max_length=50)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_permission_resource_action", "resource", "action"),)

    @classmethod
    def identity(cls, resource: str, action: str) -> str:
        return f"{resource}.{action}"
