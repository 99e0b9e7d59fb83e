import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Dict, Optional

from tenant_access.libs.result import Result

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """
    Outbound messaging collaborator.

    Implementations return an error Result instead of raising; callers treat
    every failure as non-fatal.
    """

    @abstractmethod
    async def notify_invitation(
        self,
        email: str,
        token: str,
        inviter_name: str,
        scope_name: str,
        message: Optional[str] = None,
    ) -> Result[None]:
        pass

    @abstractmethod
    async def notify_welcome(self, email: str, first_name: str) -> Result[None]:
        pass


async def deliver_best_effort(
    send: Awaitable[Result[None]], context: Dict[str, Any]
) -> None:
    """
    Await a notifier call after the state change has been committed, logging
    and dropping any failure.
    """
    try:
        result = await send
    except Exception:
        logger.exception("Notification raised", extra=context)
        return

    if result.is_err():
        logger.warning(
            "Notification failed: %s",
            result.error.message,
            extra={**context, "error_code": result.error.code},
        )
