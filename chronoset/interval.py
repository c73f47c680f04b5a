from dataclasses import dataclass
from datetime import date, datetime, timedelta

from chronoset.util import MAX, MIN, coerce_point, shift
from chronoset.zoned import ZonedInstant

Bound = datetime | date | str | ZonedInstant | None


@dataclass(frozen=True, kw_only=True, order=True)
class Interval:
    """A directed range of time from ``start`` to ``end``.

    Reversed intervals (``start > end``) can be constructed, but the
    containment and overlap predicates refuse them.

    Attributes:
        start: Accepts any ``Bound`` (see ``coerce_point``); ``None`` means
            ``MIN``. Always a UTC ``datetime`` once constructed.
        end: As ``start``; ``None`` means ``MAX``.
    """

    start: Bound
    end: Bound

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", coerce_point(self.start, "start"))
        object.__setattr__(self, "end", coerce_point(self.end, "end"))

    def __str__(self) -> str:
        """Human-friendly string showing range and duration."""
        start = "-∞" if self.start == MIN else self.start.isoformat()
        end = "+∞" if self.end == MAX else self.end.isoformat()
        return f"Interval({start}→{end}, {self.duration})"

    @classmethod
    def from_duration(cls, start: Bound, duration: timedelta) -> "Interval":
        """Interval of length ``duration`` from ``start``.

        An end beyond the representable range clamps to ``MIN``/``MAX``.
        """
        begin = coerce_point(start, "start")
        return cls(start=begin, end=shift(begin, duration))

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def is_reversed(self) -> bool:
        return self.start > self.end

    def is_within(self, outer: "Interval") -> bool:
        """True if this interval lies wholly inside ``outer``."""
        self._require_forward("is_within", outer)
        return self.start >= outer.start and self.end <= outer.end

    def intersects(self, other: "Interval") -> bool:
        """True if the two intervals share a non-zero stretch of time.

        Intervals that only touch at an endpoint do not intersect.
        """
        self._require_forward("intersects", other)
        return self.start < other.end and self.end > other.start

    def includes(self, point: datetime | date | str | ZonedInstant) -> bool:
        """True if ``point`` lies in the interval, endpoints included."""
        self._require_forward("includes")
        moment = coerce_point(point)
        return self.start <= moment <= self.end

    def inverse(self) -> tuple["Interval", ...]:
        """Return the zero, one or two intervals covering all other time.

        The endpoints of this interval are shared with the result.
        """
        if self.start == MIN and self.end == MAX:
            return ()
        if self.start == MIN:
            return (Interval(start=self.end, end=MAX),)
        if self.end == MAX:
            return (Interval(start=MIN, end=self.start),)
        return (
            Interval(start=MIN, end=self.start),
            Interval(start=self.end, end=MAX),
        )

    def compare(self, other: "Interval") -> int:
        """Three-way comparison on ``(start, end)``: -1, 0 or 1."""
        mine = (self.start, self.end)
        theirs = (other.start, other.end)
        return (mine > theirs) - (mine < theirs)

    def _require_forward(self, operation: str, *others: "Interval") -> None:
        for interval in (self, *others):
            if interval.is_reversed:
                raise ValueError(
                    f"Interval.{operation}() is undefined for reversed intervals.\n"
                    f"Got: {interval!r} (start is after end)\n"
                    f"Hint: Swap the bounds, or build an IntervalSet, which drops "
                    f"reversed spans"
                )


ALL_TIME = Interval(start=MIN, end=MAX)
