from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from tenant_access.domain.entities import Role


class IRoleRepository(ABC):
    """Role repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get role by ID"""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by exact (case-sensitive) name"""
        pass

    @abstractmethod
    async def get_by_names(self, names: Iterable[str]) -> List[Role]:
        """Get every role whose name is in names"""
        pass

    @abstractmethod
    async def get_by_ids(self, role_ids: Iterable[UUID]) -> List[Role]:
        """Get roles by IDs, ordered by level"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def attach_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """Link a permission to a role; returns False if already linked"""
        pass
