from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from tenant_access.domain.entities import Scope


class IScopeRepository(ABC):
    """Scope repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, scope_id: UUID) -> Optional[Scope]:
        """Get scope by ID"""
        pass

    @abstractmethod
    async def create(self, scope: Scope) -> Scope:
        """Create a new scope"""
        pass
