from abc import ABC, abstractmethod

from tenant_access.app.repositories.audit_event_repository import IAuditEventRepository
from tenant_access.app.repositories.grant_repository import IGrantRepository
from tenant_access.app.repositories.invitation_repository import IInvitationRepository
from tenant_access.app.repositories.permission_repository import IPermissionRepository
from tenant_access.app.repositories.role_repository import IRoleRepository
from tenant_access.app.repositories.scope_member_repository import IScopeMemberRepository
from tenant_access.app.repositories.scope_repository import IScopeRepository
from tenant_access.app.repositories.user_repository import IUserRepository


class StorageUnavailableError(Exception):
    """The backing store could not be reached or timed out"""


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    permissions: IPermissionRepository
    roles: IRoleRepository
    grants: IGrantRepository
    invitations: IInvitationRepository
    members: IScopeMemberRepository
    scopes: IScopeRepository
    users: IUserRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
