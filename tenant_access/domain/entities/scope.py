"""
Scope Entity

An organization or group that qualifies role grants.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utc_now


class Scope(SQLModel, table=True):
    """
    Scope entity - organization/group.

    Business Rules:
    - The creator becomes its owner (authority)
    - Owns its invitations; grants only reference it by id
    """

    __tablename__ = "scopes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
