from datetime import timedelta
from uuid import uuid4

import pytest

from tenant_access.app.use_cases.invitations import DeclineInvitationUseCase
from tenant_access.domain.entities import Accepted, Invitation

TOKEN = "b" * 64


@pytest.fixture
def invitation(token_hasher, clock):
    return Invitation(
        inviter_id=uuid4(),
        email="guest@example.com",
        role_id=uuid4(),
        scope_id=uuid4(),
        token_hash=token_hasher.hash(TOKEN),
        expires_at=clock.now() + timedelta(days=7),
    )


@pytest.fixture
def ready_uow(mock_uow, invitation):
    mock_uow.invitations.get_by_token_hash.return_value = invitation
    mock_uow.invitations.mark_declined.return_value = True
    return mock_uow


@pytest.mark.asyncio
async def test_decline_invitation(ready_uow, token_hasher, clock, invitation):
    use_case = DeclineInvitationUseCase(ready_uow, token_hasher, clock)

    result = await use_case.execute(TOKEN, "GUEST@example.com")

    assert result.is_ok()
    assert result.value.status == "declined"
    ready_uow.invitations.mark_declined.assert_called_once_with(
        invitation.id, clock.now(), token_hash=invitation.token_hash
    )
    ready_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_decline_requires_matching_email(ready_uow, token_hasher, clock):
    use_case = DeclineInvitationUseCase(ready_uow, token_hasher, clock)

    result = await use_case.execute(TOKEN, "someone-else@example.com")

    assert result.is_err()
    assert result.error.code == "EMAIL_MISMATCH"
    ready_uow.invitations.mark_declined.assert_not_called()


@pytest.mark.asyncio
async def test_decline_accepted_invitation_conflicts(
    ready_uow, token_hasher, clock, invitation
):
    invitation.response = Accepted(at=clock.now())
    use_case = DeclineInvitationUseCase(ready_uow, token_hasher, clock)

    result = await use_case.execute(TOKEN, "guest@example.com")

    assert result.error.code == "INVITATION_ALREADY_ACCEPTED"


@pytest.mark.asyncio
async def test_decline_expired_invitation(ready_uow, token_hasher, clock):
    clock.advance(days=8)
    use_case = DeclineInvitationUseCase(ready_uow, token_hasher, clock)

    result = await use_case.execute(TOKEN, "guest@example.com")

    assert result.error.code == "INVITATION_EXPIRED"


@pytest.mark.asyncio
async def test_decline_lost_race_conflicts(ready_uow, token_hasher, clock):
    ready_uow.invitations.mark_declined.return_value = False
    use_case = DeclineInvitationUseCase(ready_uow, token_hasher, clock)

    result = await use_case.execute(TOKEN, "guest@example.com")

    assert result.error.code == "INVITATION_ALREADY_RESPONDED"
    ready_uow.commit.assert_not_called()
