"""Wall-clock time paired with the IANA zone it belongs to.

``ZonedInstant`` keeps the local reading separate from the zone, so wall-clock
arithmetic stays in local time and only resolves to an absolute instant when
compared or placed on a timeline.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.parser import isoparse


@dataclass(frozen=True)
class ZonedInstant:
    local: datetime
    zone: str = "UTC"

    def __post_init__(self) -> None:
        if self.local.tzinfo is not None:
            raise TypeError(
                f"ZonedInstant.local must be a naive datetime, got {self.local!r}.\n"
                f"Hint: Pass the zone separately:\n"
                f"  ZonedInstant(datetime(2025, 1, 1, 9), 'US/Pacific')\n"
                f"  # Or convert an aware value: ZonedInstant.from_datetime(dt, 'US/Pacific')"
            )
        try:
            ZoneInfo(self.zone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone {self.zone!r}") from e

    def __str__(self) -> str:
        return f"{self.local.isoformat()} ({self.zone})"

    @classmethod
    def from_datetime(cls, dt: datetime, zone: str = "UTC") -> "ZonedInstant":
        """Express an aware datetime as wall-clock time in ``zone``.

        Naive datetimes are taken to already be local to ``zone``.
        """
        if dt.tzinfo is None:
            return cls(dt, zone)
        return cls(dt.astimezone(ZoneInfo(zone)).replace(tzinfo=None), zone)

    @classmethod
    def parse(cls, text: str, zone: str = "UTC") -> "ZonedInstant":
        """Parse ISO 8601 text; an offset in the text is converted into ``zone``."""
        return cls.from_datetime(isoparse(text), zone)

    @classmethod
    def now(cls, zone: str = "UTC") -> "ZonedInstant":
        return cls.from_datetime(datetime.now(timezone.utc), zone)

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.zone)

    @property
    def instant(self) -> datetime:
        """The aware datetime this wall-clock reading denotes."""
        return self.local.replace(tzinfo=self.tz)

    @property
    def utc(self) -> datetime:
        return self.instant.astimezone(timezone.utc)

    @property
    def date(self) -> "ZonedInstant":
        """Midnight of the same local day, in the same zone."""
        return ZonedInstant(
            self.local.replace(hour=0, minute=0, second=0, microsecond=0), self.zone
        )

    @property
    def time_of_day(self) -> timedelta:
        return self.local - self.date.local

    def is_after(self, other: "ZonedInstant") -> bool:
        return self.utc > other.utc

    def is_before(self, other: "ZonedInstant") -> bool:
        return self.utc < other.utc

    def add_duration(self, delta: timedelta) -> "ZonedInstant":
        """Shift the wall-clock reading forward, keeping the zone."""
        return ZonedInstant(self.local + delta, self.zone)

    def subtract_duration(self, delta: timedelta) -> "ZonedInstant":
        return ZonedInstant(self.local - delta, self.zone)

    def difference_from(self, other: "ZonedInstant") -> timedelta:
        """Elapsed time from ``other`` to this instant (negative if earlier)."""
        return self.utc - other.utc
