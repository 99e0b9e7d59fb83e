"""
Scope Management Use Cases
"""

from .create_scope_use_case import CreateScopeUseCase
from .dtos import CreateScopeResponse, RemoveMemberResponse
from .remove_member_use_case import RemoveMemberUseCase

__all__ = [
    "CreateScopeUseCase",
    "RemoveMemberUseCase",
    "CreateScopeResponse",
    "RemoveMemberResponse",
]
