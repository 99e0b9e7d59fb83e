import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.app.repositories.grant_repository import IGrantRepository
from tenant_access.domain.entities import Grant, ScopeFilter, ScopeMode

logger = logging.getLogger(__name__)


def _scope_clause(scope_id: Optional[UUID]):
    if scope_id is None:
        return col(Grant.scope_id).is_(None)
    return Grant.scope_id == scope_id


class GrantRepository(IGrantRepository):
    """Grant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(
        self, user_id: UUID, role_id: UUID, scope_id: Optional[UUID]
    ) -> Optional[Grant]:
        """Get the grant row for a (user, role, scope) triple, expired or not"""
        stmt = select(Grant).where(
            Grant.user_id == user_id,
            Grant.role_id == role_id,
            _scope_clause(scope_id),
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(self, grant: Grant, now: datetime) -> Grant:
        """
        Store a grant unless an identical (user, role, scope) row exists.

        The insert runs in a savepoint so that losing a race against a
        concurrent identical insert only rolls back the savepoint.
        """
        existing = await self.get(grant.user_id, grant.role_id, grant.scope_id)
        if existing is None:
            try:
                async with self.session.begin_nested():
                    self.session.add(grant)
                    await self.session.flush()
                await self.session.refresh(grant)
                return grant
            except IntegrityError:
                logger.info(
                    "Concurrent grant insert detected",
                    extra={"user_id": str(grant.user_id), "role_id": str(grant.role_id)},
                )
                existing = await self.get(grant.user_id, grant.role_id, grant.scope_id)
                if existing is None:
                    raise

        if existing.is_expired(now):
            existing.expires_at = grant.expires_at
            existing.assigned_at = grant.assigned_at
            self.session.add(existing)
            await self.session.flush()
            await self.session.refresh(existing)

        return existing

    async def delete(
        self, user_id: UUID, role_id: UUID, scope_id: Optional[UUID]
    ) -> bool:
        """Delete a grant; returns whether a row was removed"""
        stmt = delete(Grant).where(
            Grant.user_id == user_id,
            Grant.role_id == role_id,
            _scope_clause(scope_id),
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def delete_in_scope(self, user_id: UUID, scope_id: UUID) -> int:
        """Delete every grant of a user in a scope; returns rows removed"""
        stmt = delete(Grant).where(Grant.user_id == user_id, Grant.scope_id == scope_id)
        result = await self.session.execute(stmt)
        return result.rowcount

    async def list_active(
        self, user_id: UUID, scope: ScopeFilter, now: datetime
    ) -> List[Grant]:
        """Unexpired grants of a user matching the scope filter"""
        stmt = select(Grant).where(
            Grant.user_id == user_id,
            or_(col(Grant.expires_at).is_(None), col(Grant.expires_at) > now),
        )
        if scope.mode == ScopeMode.platform:
            stmt = stmt.where(col(Grant.scope_id).is_(None))
        elif scope.mode == ScopeMode.specific:
            stmt = stmt.where(Grant.scope_id == scope.scope_id)

        result = await self.session.execute(stmt.order_by(Grant.assigned_at))
        return list(result.scalars().all())
