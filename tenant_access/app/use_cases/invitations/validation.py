"""
Checks shared by the invitation use cases.
"""

from datetime import datetime
from typing import Optional

from tenant_access.domain.entities import Accepted, Declined, Invitation
from tenant_access.libs.result import Error


def response_error(invitation: Invitation, now: datetime) -> Optional[Error]:
    """Error for an invitation that can no longer be accepted or declined"""
    if isinstance(invitation.response, Accepted):
        return Error(
            "INVITATION_ALREADY_ACCEPTED",
            "This invitation has already been accepted",
        )
    if isinstance(invitation.response, Declined):
        return Error(
            "INVITATION_ALREADY_DECLINED",
            "This invitation has already been declined",
        )
    if invitation.is_expired(now):
        return Error("INVITATION_EXPIRED", "This invitation has expired")
    return None


def email_mismatch_error(invitation: Invitation, email: str) -> Optional[Error]:
    if invitation.is_addressed_to(email):
        return None
    return Error(
        "EMAIL_MISMATCH",
        "This invitation was sent to a different email address",
    )


def invitation_not_found() -> Error:
    return Error("INVITATION_NOT_FOUND", "Invitation not found")


def insufficient_role(action: str) -> Error:
    return Error("INSUFFICIENT_ROLE", f"Only scope owners can {action} invitations")
