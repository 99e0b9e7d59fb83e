from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from tenant_access.domain.entities import Grant, ScopeFilter


class IGrantRepository(ABC):
    """Grant repository interface - application layer"""

    @abstractmethod
    async def get(
        self, user_id: UUID, role_id: UUID, scope_id: Optional[UUID]
    ) -> Optional[Grant]:
        """Get the grant row for a (user, role, scope) triple, expired or not"""
        pass

    @abstractmethod
    async def get_or_create(self, grant: Grant, now: datetime) -> Grant:
        """
        Store a grant unless an identical (user, role, scope) row exists.

        An existing unexpired row is returned unchanged; an expired one is
        revived with the new grant's expiry.
        """
        pass

    @abstractmethod
    async def delete(
        self, user_id: UUID, role_id: UUID, scope_id: Optional[UUID]
    ) -> bool:
        """Delete a grant; returns whether a row was removed"""
        pass

    @abstractmethod
    async def delete_in_scope(self, user_id: UUID, scope_id: UUID) -> int:
        """Delete every grant of a user in a scope; returns rows removed"""
        pass

    @abstractmethod
    async def list_active(
        self, user_id: UUID, scope: ScopeFilter, now: datetime
    ) -> List[Grant]:
        """Unexpired grants of a user matching the scope filter"""
        pass
