from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID, uuid4

from sqlalchemy import func, update
from sqlmodel import Column, DateTime, Field, Index, SQLModel, col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.app.repositories.invitation_repository import IInvitationRepository
from tenant_access.domain.base import normalize_email, utc_now
from tenant_access.domain.entities import Accepted, Declined, Invitation, Pending


class InvitationRecord(SQLModel, table=True):
    """
    Storage shape of an Invitation.

    The response state is kept as two nullable timestamps; at most one is set.
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    inviter_id: UUID = Field(nullable=False, index=True)
    email: str = Field(max_length=255, index=True)
    role_id: UUID = Field(foreign_key="roles.id", nullable=False)
    scope_id: UUID = Field(foreign_key="scopes.id", nullable=False, index=True)

    token_hash: str = Field(unique=True, max_length=64)
    message: Optional[str] = Field(default=None, max_length=1000)

    # Response state
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    declined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_email_scope", "email", "scope_id"),
        Index("idx_invitation_created_at", "created_at"),
    )

    @classmethod
    def from_domain(cls, invitation: Invitation) -> "InvitationRecord":
        response = invitation.response
        return cls(
            id=invitation.id,
            inviter_id=invitation.inviter_id,
            email=invitation.email,
            role_id=invitation.role_id,
            scope_id=invitation.scope_id,
            token_hash=invitation.token_hash,
            message=invitation.message,
            accepted_at=response.at if isinstance(response, Accepted) else None,
            declined_at=response.at if isinstance(response, Declined) else None,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
        )

    def to_domain(self) -> Invitation:
        if self.accepted_at is not None:
            response = Accepted(at=self.accepted_at)
        elif self.declined_at is not None:
            response = Declined(at=self.declined_at)
        else:
            response = Pending()

        return Invitation(
            id=self.id,
            inviter_id=self.inviter_id,
            email=self.email,
            role_id=self.role_id,
            scope_id=self.scope_id,
            token_hash=self.token_hash,
            message=self.message,
            response=response,
            expires_at=self.expires_at,
            created_at=self.created_at,
        )


def _unresponded():
    return (
        col(InvitationRecord.accepted_at).is_(None),
        col(InvitationRecord.declined_at).is_(None),
    )


class InvitationRepository(IInvitationRepository):
    """
    Invitation repository implementation using SQLModel.

    State transitions are conditional UPDATEs; a rowcount of zero means the
    row no longer satisfied the precondition.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, stmt) -> Optional[Invitation]:
        result = await self.session.execute(stmt)
        record = result.scalars().first()
        return record.to_domain() if record else None

    async def _page(self, stmt, offset: int, limit: int) -> Tuple[List[Invitation], int]:
        count_stmt = select(func.count()).select_from(stmt.subquery())
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = stmt.order_by(col(InvitationRecord.created_at).desc()).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return [record.to_domain() for record in result.scalars().all()], total

    async def _conditional_update(self, stmt) -> bool:
        result = await self.session.execute(stmt.execution_options(synchronize_session="fetch"))
        return result.rowcount == 1

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(InvitationRecord).where(InvitationRecord.id == invitation_id)
        return await self._first(stmt)

    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by the hash of its token"""
        stmt = select(InvitationRecord).where(InvitationRecord.token_hash == token_hash)
        return await self._first(stmt)

    async def get_active_by_scope_and_email(
        self, scope_id: UUID, email: str, now: datetime
    ) -> Optional[Invitation]:
        """Get the unresponded, unexpired invitation for (scope, email)"""
        stmt = (
            select(InvitationRecord)
            .where(
                InvitationRecord.scope_id == scope_id,
                InvitationRecord.email == normalize_email(email),
                col(InvitationRecord.expires_at) >= now,
                *_unresponded(),
            )
            .order_by(col(InvitationRecord.created_at).desc())
        )
        return await self._first(stmt)

    async def list_unresponded_by_email(
        self, email: str, offset: int, limit: int
    ) -> Tuple[List[Invitation], int]:
        """Unresponded invitations for an email, newest first, with total count"""
        stmt = select(InvitationRecord).where(
            InvitationRecord.email == normalize_email(email), *_unresponded()
        )
        return await self._page(stmt, offset, limit)

    async def list_by_scope(
        self, scope_id: UUID, offset: int, limit: int
    ) -> Tuple[List[Invitation], int]:
        """All invitations of a scope, newest first, with total count"""
        stmt = select(InvitationRecord).where(InvitationRecord.scope_id == scope_id)
        return await self._page(stmt, offset, limit)

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        record = InvitationRecord.from_domain(invitation)
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record.to_domain()

    async def mark_accepted(
        self, invitation_id: UUID, token_hash: str, at: datetime
    ) -> bool:
        """Stamp acceptance if still unresponded and still carrying token_hash"""
        stmt = (
            update(InvitationRecord)
            .where(
                InvitationRecord.id == invitation_id,
                InvitationRecord.token_hash == token_hash,
                *_unresponded(),
            )
            .values(accepted_at=at)
        )
        return await self._conditional_update(stmt)

    async def mark_declined(
        self,
        invitation_id: UUID,
        at: datetime,
        token_hash: Optional[str] = None,
        require_unresponded: bool = True,
    ) -> bool:
        """Stamp a decline; never overwrites an acceptance"""
        conditions = [
            InvitationRecord.id == invitation_id,
            col(InvitationRecord.accepted_at).is_(None),
        ]
        if require_unresponded:
            conditions.append(col(InvitationRecord.declined_at).is_(None))
        if token_hash is not None:
            conditions.append(InvitationRecord.token_hash == token_hash)

        stmt = update(InvitationRecord).where(*conditions).values(declined_at=at)
        return await self._conditional_update(stmt)

    async def reissue(
        self, invitation_id: UUID, token_hash: str, expires_at: datetime
    ) -> bool:
        """Replace the token, extend expiry and clear any decline, unless accepted"""
        stmt = (
            update(InvitationRecord)
            .where(
                InvitationRecord.id == invitation_id,
                col(InvitationRecord.accepted_at).is_(None),
            )
            .values(token_hash=token_hash, expires_at=expires_at, declined_at=None)
        )
        return await self._conditional_update(stmt)
