from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlmodel.ext.asyncio.session import AsyncSession

from tenant_access.adapter.repositories.audit_event_repository import AuditEventRepository
from tenant_access.adapter.repositories.grant_repository import GrantRepository
from tenant_access.adapter.repositories.invitation_repository import InvitationRepository
from tenant_access.adapter.repositories.permission_repository import PermissionRepository
from tenant_access.adapter.repositories.role_repository import RoleRepository
from tenant_access.adapter.repositories.scope_member_repository import ScopeMemberRepository
from tenant_access.adapter.repositories.scope_repository import ScopeRepository
from tenant_access.adapter.repositories.user_repository import UserRepository
from tenant_access.app.services.unit_of_work import StorageUnavailableError, UnitOfWork

STORAGE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.permissions = PermissionRepository(self.session)
        self.roles = RoleRepository(self.session)
        self.grants = GrantRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.members = ScopeMemberRepository(self.session)
        self.scopes = ScopeRepository(self.session)
        self.users = UserRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc is None:
            # Detached rows stay readable after the rollback below
            self.session.expunge_all()
        try:
            await self.rollback()
        except DBAPIError as rollback_error:
            if exc is None:
                raise StorageUnavailableError(str(rollback_error)) from rollback_error

        # Connectivity faults and pool timeouts surface as one infrastructure error
        if isinstance(exc, STORAGE_ERRORS):
            raise StorageUnavailableError(str(exc)) from exc
        return False

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
