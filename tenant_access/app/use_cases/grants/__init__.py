"""
Administrative Grant Use Cases
"""

from .assign_role_use_case import AssignRoleUseCase
from .dtos import AssignRoleResponse, RevokeRoleResponse
from .revoke_role_use_case import RevokeRoleUseCase

__all__ = [
    "AssignRoleUseCase",
    "RevokeRoleUseCase",
    "AssignRoleResponse",
    "RevokeRoleResponse",
]
