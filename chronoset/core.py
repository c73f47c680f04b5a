import bisect
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from functools import reduce
from typing import Any

from chronoset.interval import ALL_TIME, Interval
from chronoset.util import MAX, MIN, coerce_point
from chronoset.zoned import ZonedInstant

logger = logging.getLogger(__name__)


def normalize(spans: Iterable[Interval]) -> tuple[Interval, ...]:
    """Canonicalize arbitrary spans into sorted, disjoint, non-adjacent form.

    Algorithm: Drop zero-length and reversed spans (they cover no time), remove
    exact duplicates, sort by (start, end), then sweep with an accumulator that
    absorbs every following span starting at or before its end. Touching spans
    merge, so the output never holds two spans where one ends as the next begins.

    The result does not depend on input order, and normalizing an already
    normalized sequence returns it unchanged.
    """
    candidates = list(spans)
    forward = [span for span in candidates if span.start < span.end]
    if len(forward) < len(candidates):
        logger.debug(
            "normalize dropped %d zero-length or reversed span(s)",
            len(candidates) - len(forward),
        )

    ordered = sorted(set(forward))

    merged: list[Interval] = []
    current: Interval | None = None
    for span in ordered:
        if current is None:
            current = span
        elif current.end >= span.start:
            if span.end > current.end:
                current = Interval(start=current.start, end=span.end)
        else:
            merged.append(current)
            current = span

    if current is not None:
        merged.append(current)
    return tuple(merged)


@dataclass(frozen=True, init=False)
class IntervalSet:
    """An arbitrary subset of the timeline, stored as normalized spans.

    ``spans`` is always strictly increasing, pairwise disjoint and free of
    touching neighbours; the empty tuple is the empty set. Two sets are equal
    exactly when their spans are.

    Example:
        >>> busy = IntervalSet.of(
        ...     Interval(start="2025-01-06T09:00Z", end="2025-01-06T10:00Z"),
        ...     Interval(start="2025-01-06T10:00Z", end="2025-01-06T11:30Z"),
        ... )
        >>> len(busy)  # touching meetings merge into one span
        1
        >>> free = ~busy
    """

    spans: tuple[Interval, ...]

    def __init__(self, spans: Iterable[Interval] = ()) -> None:
        object.__setattr__(self, "spans", normalize(spans))

    @classmethod
    def of(cls, *intervals: Interval) -> "IntervalSet":
        return cls(intervals)

    @classmethod
    def _from_normalized(cls, spans: Iterable[Interval]) -> "IntervalSet":
        """Wrap spans that already satisfy the set invariant, skipping normalization."""
        instance = object.__new__(cls)
        object.__setattr__(instance, "spans", tuple(spans))
        return instance

    def __str__(self) -> str:
        if not self.spans:
            return "IntervalSet(∅)"
        return "IntervalSet(" + ", ".join(str(span) for span in self.spans) + ")"

    def __iter__(self) -> Iterator[Interval]:
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)

    def __bool__(self) -> bool:
        return bool(self.spans)

    def __contains__(self, point: Any) -> bool:
        return self.includes(point)

    def __or__(self, other: "IntervalSet") -> "IntervalSet":
        return self.union(other)

    def __and__(self, other: "IntervalSet") -> "IntervalSet":
        return self.intersection(other)

    def __sub__(self, other: "IntervalSet") -> "IntervalSet":
        return self.difference(other)

    def __invert__(self) -> "IntervalSet":
        return self.inverse()

    @property
    def duration(self) -> timedelta:
        """Total time covered by the set."""
        return sum((span.duration for span in self.spans), timedelta())

    @property
    def bounds(self) -> Interval | None:
        """Smallest single interval containing the whole set, or None if empty."""
        if not self.spans:
            return None
        return Interval(start=self.spans[0].start, end=self.spans[-1].end)

    def union(self, other: "IntervalSet") -> "IntervalSet":
        """Return every point in this set, ``other``, or both."""
        other = _require_set(other, "union")
        return IntervalSet._from_normalized(normalize(self.spans + other.spans))

    def intersection(self, other: "IntervalSet") -> "IntervalSet":
        """Return every point covered by both sets.

        Algorithm: Two-pointer sweep over both span sequences. When the current
        spans overlap, emit the shared stretch and advance past whichever span
        ends first; the other may still overlap the next span on the opposite
        side. Spans that merely touch share a single instant, which a set
        cannot hold, so nothing is emitted for them.

        Output is normalized by construction: overlaps of sorted, disjoint,
        non-adjacent inputs come out in order and never touch.
        """
        other = _require_set(other, "intersection")
        mine, theirs = self.spans, other.spans
        result: list[Interval] = []
        i = j = 0
        while i < len(mine) and j < len(theirs):
            x, y = mine[i], theirs[j]
            if x.start > y.end:
                j += 1
            elif y.start > x.end:
                i += 1
            else:
                overlap_start = max(x.start, y.start)
                overlap_end = min(x.end, y.end)
                if overlap_start < overlap_end:
                    result.append(Interval(start=overlap_start, end=overlap_end))

                # Advance any span that ends at the overlap boundary
                if x.end <= y.end:
                    i += 1
                if y.end <= x.end:
                    j += 1

        return IntervalSet._from_normalized(result)

    def inverse(self) -> "IntervalSet":
        """Return the complement of this set within ``MIN``..``MAX``.

        Algorithm: Walk the spans with a cursor starting at ``MIN``; every gap
        between the cursor and the next span start becomes an interval, and the
        cursor jumps to that span's end. A final gap runs to ``MAX``.

        Endpoints are shared with the source set, so ``~~s == s`` holds for
        every set, including ones that reach ``MIN`` or ``MAX``.
        """
        gaps: list[Interval] = []
        cursor = MIN
        for span in self.spans:
            if span.start > cursor:
                gaps.append(Interval(start=cursor, end=span.start))
            cursor = span.end

        if cursor < MAX:
            gaps.append(Interval(start=cursor, end=MAX))
        return IntervalSet._from_normalized(gaps)

    def difference(self, other: "IntervalSet") -> "IntervalSet":
        """Return the points of this set that ``other`` does not cover."""
        other = _require_set(other, "difference")
        return self.intersection(other.inverse())

    def includes(self, point: datetime | date | str | ZonedInstant) -> bool:
        """True if some span contains ``point``, endpoints included."""
        moment = coerce_point(point)
        idx = bisect.bisect_right(self.spans, moment, key=lambda span: span.start)
        return idx > 0 and self.spans[idx - 1].includes(moment)

    def overlaps(self, interval: Interval) -> bool:
        """True if ``interval`` shares a non-zero stretch of time with the set."""
        return any(span.intersects(interval) for span in self.spans)


EMPTY = IntervalSet._from_normalized(())
EVERYTHING = IntervalSet._from_normalized((ALL_TIME,))


def _require_set(other: Any, operation: str) -> IntervalSet:
    if not isinstance(other, IntervalSet):
        raise TypeError(
            f"Cannot combine IntervalSet with {type(other).__name__} in {operation}.\n"
            f"Hint: Wrap intervals in a set first:\n"
            f"  intervals.{operation}(IntervalSet.of(Interval(start=..., end=...)))"
        )
    return other


def union(*sets: IntervalSet) -> IntervalSet:
    """Compose sets with union semantics (equivalent to chaining `|`)."""

    if not sets:
        raise ValueError(
            f"union() requires at least one IntervalSet argument.\n"
            f"Example: union(busy_a, busy_b, busy_c)"
        )

    return reduce(lambda acc, nxt: acc | nxt, sets)


def intersection(*sets: IntervalSet) -> IntervalSet:
    """Compose sets with intersection semantics (equivalent to chaining `&`)."""

    if not sets:
        raise ValueError(
            f"intersection() requires at least one IntervalSet argument.\n"
            f"Example: intersection(free_a, free_b, free_c)"
        )

    return reduce(lambda acc, nxt: acc & nxt, sets)


def difference(source: IntervalSet, *subtractors: IntervalSet) -> IntervalSet:
    """Remove every subtractor's coverage from ``source``."""
    return reduce(lambda acc, nxt: acc - nxt, subtractors, source)
