from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.app.repositories.user_repository import IUserRepository
from tenant_access.domain.base import normalize_email
from tenant_access.domain.entities import User


class UserRepository(IUserRepository):
    """User directory implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address (stored lower-case)"""
        stmt = select(User).where(User.email == normalize_email(email))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        """Create a new user"""
        user.email = normalize_email(user.email)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
