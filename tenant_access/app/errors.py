"""
Error taxonomy

Every error code returned by the core belongs to exactly one kind. Callers map
kinds, not codes, to user-facing behaviour.
"""

import functools
import logging
from enum import Enum
from typing import Dict

from tenant_access.app.services.unit_of_work import StorageUnavailableError
from tenant_access.libs.result import Error, Return

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    not_found = "not_found"
    forbidden = "forbidden"
    conflict = "conflict"
    expired = "expired"
    storage_unavailable = "storage_unavailable"


ERROR_KINDS: Dict[str, ErrorKind] = {
    # Entity absent
    "PERMISSION_NOT_FOUND": ErrorKind.not_found,
    "ROLE_NOT_FOUND": ErrorKind.not_found,
    "INVITATION_NOT_FOUND": ErrorKind.not_found,
    "MEMBERSHIP_NOT_FOUND": ErrorKind.not_found,
    # Authority / identity mismatch
    "INSUFFICIENT_ROLE": ErrorKind.forbidden,
    "NOT_A_MEMBER": ErrorKind.forbidden,
    "EMAIL_MISMATCH": ErrorKind.forbidden,
    "CANNOT_REMOVE_OWNER": ErrorKind.forbidden,
    "PERMISSION_DENIED": ErrorKind.forbidden,
    "ROLE_ABOVE_CALLER": ErrorKind.forbidden,
    # Invalid state transition
    "INVITATION_ALREADY_ACCEPTED": ErrorKind.conflict,
    "INVITATION_ALREADY_DECLINED": ErrorKind.conflict,
    "INVITATION_ALREADY_RESPONDED": ErrorKind.conflict,
    "INVITE_ALREADY_EXISTS": ErrorKind.conflict,
    "ALREADY_MEMBER": ErrorKind.conflict,
    # Time-based invalidation
    "INVITATION_EXPIRED": ErrorKind.expired,
    # Infrastructure
    "STORAGE_UNAVAILABLE": ErrorKind.storage_unavailable,
}


def kind_of(error: Error) -> ErrorKind:
    try:
        return ERROR_KINDS[error.code]
    except KeyError:
        raise ValueError(f"Unclassified error code: {error.code}") from None


def storage_guard(func):
    """Turn StorageUnavailableError raised by a coroutine into a STORAGE_UNAVAILABLE result."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except StorageUnavailableError as exc:
            logger.error("Storage unavailable in %s: %s", func.__qualname__, exc)
            return Return.err(
                Error("STORAGE_UNAVAILABLE", "Storage is temporarily unavailable")
            )

    return wrapper
