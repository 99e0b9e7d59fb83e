from datetime import datetime, timedelta
from uuid import uuid4

from tenant_access.domain.entities import (
    Accepted,
    Declined,
    Invitation,
    InvitationStatus,
    Pending,
)

CREATED = datetime(2026, 3, 1, 12, 0, 0)


def make_invitation(**overrides):
    fields = dict(
        inviter_id=uuid4(),
        email="Guest@Example.com ",
        role_id=uuid4(),
        scope_id=uuid4(),
        token_hash="f" * 64,
        expires_at=CREATED + timedelta(days=7),
        created_at=CREATED,
    )
    fields.update(overrides)
    return Invitation(**fields)


def test_email_is_normalized():
    invitation = make_invitation()

    assert invitation.email == "guest@example.com"
    assert invitation.is_addressed_to("GUEST@example.COM")
    assert not invitation.is_addressed_to("other@example.com")


def test_new_invitation_is_pending():
    invitation = make_invitation()

    assert isinstance(invitation.response, Pending)
    assert invitation.status(CREATED) == InvitationStatus.pending
    assert invitation.is_active(CREATED)


def test_expiry_boundary():
    invitation = make_invitation()

    assert invitation.status(CREATED + timedelta(days=6, hours=23, minutes=59)) == (
        InvitationStatus.pending
    )
    assert invitation.status(CREATED + timedelta(days=7)) == InvitationStatus.pending
    assert invitation.status(CREATED + timedelta(days=7, seconds=1)) == (
        InvitationStatus.expired
    )


def test_responses_win_over_expiry():
    late = CREATED + timedelta(days=30)

    accepted = make_invitation(response=Accepted(at=CREATED))
    declined = make_invitation(response=Declined(at=CREATED))

    assert accepted.status(late) == InvitationStatus.accepted
    assert declined.status(late) == InvitationStatus.declined
    assert not accepted.is_active(CREATED)


def test_response_variant_from_tagged_dict():
    invitation = make_invitation(response={"kind": "accepted", "at": CREATED})

    assert isinstance(invitation.response, Accepted)
    assert invitation.response.at == CREATED
