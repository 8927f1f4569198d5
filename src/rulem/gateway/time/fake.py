"""Fake time source for tests."""

from datetime import UTC, datetime, timedelta

from rulem.gateway.time.abc import Time

DEFAULT_FAKE_NOW = datetime(2024, 1, 15, 14, 30, 0, tzinfo=UTC)


class FakeTime(Time):
    """Fixed clock that only moves when a test advances it.

    Constructor Injection:
    ---------------------
    - current_time: Time returned by now() (defaults to 2024-01-15 14:30 UTC)
    """

    def __init__(self, current_time: datetime | None = None) -> None:
        self._current_time = current_time or DEFAULT_FAKE_NOW

    def now(self) -> datetime:
        return self._current_time

    def advance(self, *, seconds: int) -> None:
        """Move the clock forward (mutates internal state)."""
        self._current_time = self._current_time + timedelta(seconds=seconds)
