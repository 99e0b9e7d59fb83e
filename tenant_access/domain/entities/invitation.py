"""
Invitation Entity

Invitation to join a scope with a role. The response state is an explicit
variant; nullable timestamps exist only in the storage record.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from ..base import normalize_email, utc_now
from .enums import InvitationStatus


class Pending(BaseModel):
    kind: Literal["pending"] = "pending"


class Accepted(BaseModel):
    kind: Literal["accepted"] = "accepted"
    at: datetime


class Declined(BaseModel):
    """Declined by the invitee, or cancelled by the inviter (responder unknown)"""

    kind: Literal["declined"] = "declined"
    at: datetime


InvitationResponse = Annotated[
    Union[Pending, Accepted, Declined], Field(discriminator="kind")
]


class Invitation(BaseModel):
    """
    Invitation entity - single-use, time-limited invitation to a scope.

    Business Rules:
    - Only the SHA-256 hash of the token is kept
    - Expires 7 days after creation (or after the last resend)
    - Consumed exactly once by accept or decline
    - Email is compared case-insensitively
    - At most one active invitation per (email, scope_id)
    """

    id: UUID = Field(default_factory=uuid4)

    inviter_id: UUID
    email: str
    role_id: UUID
    scope_id: UUID

    token_hash: str
    message: Optional[str] = None

    response: InvitationResponse = Field(default_factory=Pending)

    # Timestamps
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at

    def status(self, now: datetime) -> InvitationStatus:
        if isinstance(self.response, Accepted):
            return InvitationStatus.accepted
        if isinstance(self.response, Declined):
            return InvitationStatus.declined
        if self.is_expired(now):
            return InvitationStatus.expired
        return InvitationStatus.pending

    def is_active(self, now: datetime) -> bool:
        return self.status(now) == InvitationStatus.pending

    def is_addressed_to(self, email: str) -> bool:
        return self.email == normalize_email(email)
