from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from tenant_access.domain.entities import Permission


class IPermissionRepository(ABC):
    """Permission repository interface - application layer"""

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Permission]:
        """Get permission by its resource.action name"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Permission]:
        """List every permission ordered by (resource, action)"""
        pass

    @abstractmethod
    async def list_for_roles(self, role_ids: Iterable[UUID]) -> List[Permission]:
        """Distinct permissions carried by any of the given roles"""
        pass

    @abstractmethod
    async def create(self, permission: Permission) -> Permission:
        """Create a new permission"""
        pass
