from datetime import timedelta
from uuid import uuid4

import pytest

from tenant_access.app.services.unit_of_work import StorageUnavailableError
from tenant_access.app.use_cases.invitations import AcceptInvitationUseCase
from tenant_access.domain.entities import Accepted, Declined, Invitation, Role, User
from tests.utils.fakes import RecordingNotifier

TOKEN = "a" * 64


@pytest.fixture
def inviter():
    return User(id=uuid4(), email="owner@acme.com", first_name="Olivia")


@pytest.fixture
def invitation(token_hasher, clock, inviter):
    return Invitation(
        inviter_id=inviter.id,
        email="guest@example.com",
        role_id=uuid4(),
        scope_id=uuid4(),
        token_hash=token_hasher.hash(TOKEN),
        expires_at=clock.now() + timedelta(days=7),
        created_at=clock.now(),
    )


@pytest.fixture
def ready_uow(mock_uow, invitation, inviter):
    mock_uow.invitations.get_by_token_hash.return_value = invitation
    mock_uow.invitations.mark_accepted.return_value = True
    mock_uow.roles.get_by_id.return_value = Role(
        id=invitation.role_id, name="PARTICIPANT", display_name="Participant"
    )
    mock_uow.users.get_by_id.return_value = inviter
    return mock_uow


@pytest.mark.asyncio
async def test_accept_invitation_grants_role_and_membership(
    ready_uow, token_hasher, notifier, clock, invitation, inviter
):
    user_id = uuid4()
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, user_id, "Guest@Example.com")

    assert result.is_ok()
    assert result.value.scope_id == str(invitation.scope_id)
    assert result.value.role == "PARTICIPANT"

    ready_uow.invitations.get_by_token_hash.assert_called_once_with(token_hasher.hash(TOKEN))
    ready_uow.invitations.mark_accepted.assert_called_once_with(
        invitation.id, invitation.token_hash, clock.now()
    )
    ready_uow.members.add_member.assert_called_once_with(invitation.scope_id, user_id)

    grant = ready_uow.grants.get_or_create.call_args[0][0]
    assert grant.user_id == user_id
    assert grant.role_id == invitation.role_id
    assert grant.scope_id == invitation.scope_id

    ready_uow.commit.assert_called_once()
    assert notifier.welcomes == [{"email": inviter.email, "first_name": "Olivia"}]


@pytest.mark.asyncio
async def test_accept_just_before_expiry_succeeds(
    ready_uow, token_hasher, notifier, clock
):
    clock.advance(days=6, hours=23, minutes=59)
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "guest@example.com")

    assert result.is_ok()


@pytest.mark.asyncio
async def test_accept_after_expiry_fails(ready_uow, token_hasher, notifier, clock):
    clock.advance(days=7, seconds=1)
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "guest@example.com")

    assert result.is_err()
    assert result.error.code == "INVITATION_EXPIRED"
    ready_uow.invitations.mark_accepted.assert_not_called()


@pytest.mark.asyncio
async def test_accept_unknown_token(mock_uow, token_hasher, notifier, clock):
    mock_uow.invitations.get_by_token_hash.return_value = None
    use_case = AcceptInvitationUseCase(mock_uow, token_hasher, notifier, clock)

    result = await use_case.execute("nope", uuid4(), "guest@example.com")

    assert result.is_err()
    assert result.error.code == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_accept_email_mismatch_is_forbidden(
    ready_uow, token_hasher, notifier, clock
):
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "intruder@example.com")

    assert result.is_err()
    assert result.error.code == "EMAIL_MISMATCH"
    ready_uow.grants.get_or_create.assert_not_called()


@pytest.mark.asyncio
async def test_accept_email_mismatch_wins_over_expiry(
    ready_uow, token_hasher, notifier, clock
):
    clock.advance(days=30)
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "intruder@example.com")

    assert result.error.code == "EMAIL_MISMATCH"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response, code",
    [
        ("accepted", "INVITATION_ALREADY_ACCEPTED"),
        ("declined", "INVITATION_ALREADY_DECLINED"),
    ],
)
async def test_accept_responded_invitation_conflicts(
    ready_uow, token_hasher, notifier, clock, invitation, response, code
):
    variant = Accepted if response == "accepted" else Declined
    invitation.response = variant(at=clock.now())
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "guest@example.com")

    assert result.is_err()
    assert result.error.code == code


@pytest.mark.asyncio
async def test_accept_lost_race_conflicts(ready_uow, token_hasher, notifier, clock):
    ready_uow.invitations.mark_accepted.return_value = False
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "guest@example.com")

    assert result.is_err()
    assert result.error.code == "INVITATION_ALREADY_RESPONDED"
    ready_uow.grants.get_or_create.assert_not_called()
    ready_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_accept_survives_notifier_failure(ready_uow, token_hasher, clock):
    notifier = RecordingNotifier(fail=True)
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "guest@example.com")

    assert result.is_ok()
    assert len(notifier.welcomes) == 1


@pytest.mark.asyncio
async def test_accept_storage_fault_becomes_result(
    ready_uow, token_hasher, notifier, clock
):
    ready_uow.invitations.get_by_token_hash.side_effect = StorageUnavailableError("down")
    use_case = AcceptInvitationUseCase(ready_uow, token_hasher, notifier, clock)

    result = await use_case.execute(TOKEN, uuid4(), "guest@example.com")

    assert result.is_err()
    assert result.error.code == "STORAGE_UNAVAILABLE"
