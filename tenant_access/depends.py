from datetime import timedelta

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenant_access.adapter.services.logging_notifier import LoggingNotifier
from tenant_access.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenant_access.api.utils.jwt import verify_jwt
from tenant_access.app.services.clock import Clock, SystemClock
from tenant_access.app.services.notifier import Notifier
from tenant_access.app.services.token_hasher import Sha256TokenHasher, TokenHasher

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

INVITATION_TTL = timedelta(days=ApplicationConfig.INVITATION_TTL_DAYS)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return SystemClock()


def get_token_hasher() -> TokenHasher:
    return Sha256TokenHasher()


def get_notifier() -> Notifier:
    return LoggingNotifier(accept_url=ApplicationConfig.ACCEPT_INVITATION_URL)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id and email

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload


async def init_db():
    """Create every table registered on the SQLModel metadata"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
