"""Production time source."""

from datetime import UTC, datetime

from rulem.gateway.time.abc import Time


class RealTime(Time):
    """Wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(UTC)
