# sim/clock.py
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo


def hms(h: int, m: int = 0, s: float = 0) -> float:
    """Decimal hours for a time of day, e.g. hms(5, 30) == 5.5."""
    return h + m / 60 + s / 3600


def decimal_hours(dt: datetime) -> float:
    """Time of day of `dt` in decimal hours (date and tz are ignored)."""
    return hms(dt.hour, dt.minute, dt.second + dt.microsecond / 1e6)


@dataclass(frozen=True)
class SimClock:
    """Maps simulation seconds onto wall-clock times of day."""

    epoch: datetime  # wall time of t=0; naive means UTC

    def wall_at(self, t: float, tz: tzinfo | None = None) -> datetime:
        epoch = self.epoch if self.epoch.tzinfo else self.epoch.replace(tzinfo=UTC)
        wall = epoch + timedelta(seconds=t)
        return wall.astimezone(tz) if tz is not None else wall

    def decimal_hours_at(self, t: float, *, tz: tzinfo | None = None) -> float:
        """Time of day at sim time t, in the form interpolators are queried with."""
        return decimal_hours(self.wall_at(t, tz))
