"""
User Entity

Directory record for a person who can belong to many scopes.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utc_now


class User(SQLModel, table=True):
    """
    User entity - the user directory record.

    Business Rules:
    - Email must be unique across all users (stored lower-case)
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)

    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
