"""Time abstraction so timestamps can be controlled in tests."""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...

    def timestamp(self) -> int:
        """Current time in whole seconds since the epoch."""
        return int(self.now().timestamp())
