"""
AuditEvent Entity

Immutable log of authorization and invitation events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utc_now


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of grant and invitation events.

    Business Rules:
    - Immutable (never updated or deleted)
    - scope_id nullable for platform-wide events
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    scope_id: Optional[UUID] = Field(default=None, index=True)
    user_id: Optional[UUID] = Field(default=None, index=True)

    action: str = Field(max_length=100)  # e.g., "invitation_sent", "role_granted"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_scope_action", "scope_id", "action"),
    )
