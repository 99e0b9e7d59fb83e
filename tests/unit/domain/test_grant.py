from datetime import datetime, timedelta
from uuid import uuid4

from tenant_access.domain.entities import Grant, ScopeFilter

NOW = datetime(2026, 3, 1, 12, 0, 0)


def test_grant_without_expiry_never_expires():
    grant = Grant(user_id=uuid4(), role_id=uuid4())

    assert not grant.is_expired(NOW + timedelta(days=3650))


def test_grant_expires_at_its_timestamp():
    grant = Grant(user_id=uuid4(), role_id=uuid4(), expires_at=NOW)

    assert not grant.is_expired(NOW - timedelta(seconds=1))
    assert grant.is_expired(NOW)
