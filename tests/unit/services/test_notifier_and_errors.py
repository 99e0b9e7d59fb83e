import logging
from unittest.mock import AsyncMock

import pytest

from tenant_access.app.errors import ERROR_KINDS, ErrorKind, kind_of, storage_guard
from tenant_access.app.services.notifier import deliver_best_effort
from tenant_access.app.services.token_hasher import Sha256TokenHasher
from tenant_access.app.services.unit_of_work import StorageUnavailableError
from tenant_access.libs.result import Error, Return


@pytest.mark.asyncio
async def test_deliver_best_effort_swallows_exceptions(caplog):
    send = AsyncMock(side_effect=RuntimeError("smtp exploded"))

    with caplog.at_level(logging.ERROR):
        await deliver_best_effort(send(), {"invitation_id": "abc"})

    assert "Notification raised" in caplog.text


@pytest.mark.asyncio
async def test_deliver_best_effort_logs_error_results(caplog):
    async def send():
        return Return.err(Error("SMTP_DOWN", "Mail relay unavailable"))

    with caplog.at_level(logging.WARNING):
        await deliver_best_effort(send(), {"invitation_id": "abc"})

    assert "Mail relay unavailable" in caplog.text


@pytest.mark.asyncio
async def test_storage_guard_converts_storage_errors():
    @storage_guard
    async def flaky():
        raise StorageUnavailableError("connection refused")

    result = await flaky()

    assert result.is_err()
    assert result.error.code == "STORAGE_UNAVAILABLE"


@pytest.mark.asyncio
async def test_storage_guard_does_not_hide_bugs():
    @storage_guard
    async def broken():
        raise KeyError("bug")

    with pytest.raises(KeyError):
        await broken()


def test_every_error_code_has_one_kind():
    assert kind_of(Error("EMAIL_MISMATCH", "")) == ErrorKind.forbidden
    assert kind_of(Error("INVITATION_EXPIRED", "")) == ErrorKind.expired
    assert kind_of(Error("INVITATION_ALREADY_RESPONDED", "")) == ErrorKind.conflict
    assert set(ERROR_KINDS.values()) == set(ErrorKind)


def test_unclassified_error_code():
    with pytest.raises(ValueError):
        kind_of(Error("SOMETHING_NEW", ""))


def test_token_hasher():
    hasher = Sha256TokenHasher()

    token = hasher.generate()

    assert len(token) == 64
    assert token != hasher.generate()
    assert hasher.hash(token) == hasher.hash(token)
    assert hasher.hash(token) != hasher.hash(hasher.generate())
    assert len(hasher.hash(token)) == 64
