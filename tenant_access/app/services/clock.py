from abc import ABC, abstractmethod
from datetime import datetime

from tenant_access.domain.base import utc_now


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime:
        """Current time as naive UTC"""
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return utc_now()
