"""
Grant Ledger

Records which user holds which role, optionally scoped and time-limited.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from tenant_access.app.errors import storage_guard
from tenant_access.app.services.clock import Clock
from tenant_access.app.services.unit_of_work import UnitOfWork
from tenant_access.domain.entities import AuditEvent, Grant, Role, ScopeFilter
from tenant_access.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class GrantLedger:
    """
    Business Rules:
    - grant is idempotent on (user, role, scope); an identical live grant is
      returned unchanged, an expired one is revived
    - revoke of an absent grant is a successful no-op
    - Expired grants never appear in reads
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    @storage_guard
    async def grant(
        self,
        user_id: UUID,
        role_id: UUID,
        scope_id: Optional[UUID] = None,
        expires_at: Optional[datetime] = None,
    ) -> Result[Grant]:
        now = self.clock.now()
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(
                    Error("ROLE_NOT_FOUND", f"Role with ID {role_id} not found")
                )

            grant = await self.uow.grants.get_or_create(
                Grant(
                    user_id=user_id,
                    role_id=role_id,
                    scope_id=scope_id,
                    assigned_at=now,
                    expires_at=expires_at,
                ),
                now,
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    scope_id=scope_id,
                    user_id=user_id,
                    action="role_granted",
                    event_metadata={"role": role.name, "grant_id": str(grant.id)},
                )
            )
            await self.uow.commit()

        logger.info(
            "Role granted",
            extra={"user_id": str(user_id), "role": role.name, "scope_id": str(scope_id)},
        )
        return Return.ok(grant)

    @storage_guard
    async def revoke(
        self, user_id: UUID, role_id: UUID, scope_id: Optional[UUID] = None
    ) -> Result[bool]:
        async with self.uow:
            removed = await self.uow.grants.delete(user_id, role_id, scope_id)
            if removed:
                await self.uow.audit_events.create(
                    AuditEvent(
                        scope_id=scope_id,
                        user_id=user_id,
                        action="role_revoked",
                        event_metadata={"role_id": str(role_id)},
                    )
                )
            await self.uow.commit()

        return Return.ok(removed)

    @storage_guard
    async def list_roles(
        self, user_id: UUID, scope: ScopeFilter
    ) -> Result[List[Role]]:
        now = self.clock.now()
        async with self.uow:
            grants = await self.uow.grants.list_active(user_id, scope, now)
            roles = await self.uow.roles.get_by_ids({g.role_id for g in grants})

        return Return.ok(roles)
