import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenant_access.api.utils.jwt import generate_jwt
from tenant_access.app.services.token_hasher import Sha256TokenHasher
from tenant_access.app.use_cases.bootstrap import SeedCatalogUseCase
from tenant_access.depends import get_notifier, get_unit_of_work
from tenant_access.domain.entities import User
from tests.utils.fakes import FixedClock, RecordingNotifier


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def uow(db_session):
    return SqlAlchemyUnitOfWork(db_session)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def token_hasher():
    return Sha256TokenHasher()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
async def seeded(uow):
    """Default permissions and system roles"""
    result = await SeedCatalogUseCase(uow).execute()
    assert result.is_ok()
    return result.value


@pytest.fixture
def make_user(uow):
    async def _make_user(email: str, first_name: str = "", last_name: str = "") -> User:
        async with uow:
            user = await uow.users.create(
                User(email=email, first_name=first_name, last_name=last_name)
            )
            await uow.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {generate_jwt(user.id, user.email)}"}

    return _auth_headers


@pytest_asyncio.fixture
async def client(db_session, notifier):
    from httpx import ASGITransport
    from tenant_access.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notifier] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
