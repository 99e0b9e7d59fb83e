"""
Logging notifier

Records outbound invitation and welcome messages in the application log
instead of delivering them. Plaintext tokens are never logged.
"""

import logging
from typing import Optional

from tenant_access.app.services.notifier import Notifier
from tenant_access.libs.result import Result, Return

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    def __init__(self, accept_url: str = ""):
        self.accept_url = accept_url

    async def notify_invitation(
        self,
        email: str,
        token: str,
        inviter_name: str,
        scope_name: str,
        message: Optional[str] = None,
    ) -> Result[None]:
        logger.info(
            "Invitation notification: %s invited %s to %s",
            inviter_name,
            email,
            scope_name,
            extra={
                "recipient": email,
                "scope_name": scope_name,
                "has_message": message is not None,
                "accept_url": self.accept_url,
            },
        )
        return Return.ok()

    async def notify_welcome(self, email: str, first_name: str) -> Result[None]:
        logger.info(
            "Welcome notification to %s",
            email,
            extra={"recipient": email, "first_name": first_name},
        )
        return Return.ok()
