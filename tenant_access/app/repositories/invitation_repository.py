from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from tenant_access.domain.entities import Invitation


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[Invitation]:
        """Get invitation by the hash of its token"""
        pass

    @abstractmethod
    async def get_active_by_scope_and_email(
        self, scope_id: UUID, email: str, now: datetime
    ) -> Optional[Invitation]:
        """Get the unresponded, unexpired invitation for (scope, email)"""
        pass

    @abstractmethod
    async def list_unresponded_by_email(
        self, email: str, offset: int, limit: int
    ) -> Tuple[List[Invitation], int]:
        """Unresponded invitations for an email, newest first, with total count"""
        pass

    @abstractmethod
    async def list_by_scope(
        self, scope_id: UUID, offset: int, limit: int
    ) -> Tuple[List[Invitation], int]:
        """All invitations of a scope, newest first, with total count"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def mark_accepted(
        self, invitation_id: UUID, token_hash: str, at: datetime
    ) -> bool:
        """
        Stamp acceptance if the invitation is still unresponded and still
        carries token_hash. Returns False when another writer got there first.
        """
        pass

    @abstractmethod
    async def mark_declined(
        self,
        invitation_id: UUID,
        at: datetime,
        token_hash: Optional[str] = None,
        require_unresponded: bool = True,
    ) -> bool:
        """
        Stamp a decline. Never overwrites an acceptance; with
        require_unresponded it also refuses an already declined row.
        """
        pass

    @abstractmethod
    async def reissue(
        self, invitation_id: UUID, token_hash: str, expires_at: datetime
    ) -> bool:
        """Replace the token, extend expiry and clear any decline, unless accepted"""
        pass
