import pytest
from unittest.mock import AsyncMock, MagicMock

from tenant_access.app.services.token_hasher import Sha256TokenHasher
from tests.utils.fakes import FixedClock, RecordingNotifier

REPOSITORY_METHODS = {
    "permissions": ["get_by_name", "list_all", "list_for_roles", "create"],
    "roles": [
        "get_by_id",
        "get_by_name",
        "get_by_names",
        "get_by_ids",
        "create",
        "attach_permission",
    ],
    "grants": ["get", "get_or_create", "delete", "delete_in_scope", "list_active"],
    "invitations": [
        "get_by_id",
        "get_by_token_hash",
        "get_active_by_scope_and_email",
        "list_unresponded_by_email",
        "list_by_scope",
        "create",
        "mark_accepted",
        "mark_declined",
        "reissue",
    ],
    "members": [
        "get_by_user_and_scope",
        "add_member",
        "is_member",
        "is_authority",
        "create",
        "update",
    ],
    "scopes": ["get_by_id", "create"],
    "users": ["get_by_id", "get_by_email", "create"],
    "audit_events": ["create"],
}


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with every repository method as an AsyncMock"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repository, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock())
        setattr(uow, repository, repo)

    return uow


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def token_hasher():
    return Sha256TokenHasher()


@pytest.fixture
def notifier():
    return RecordingNotifier()
