from .core import (
    EMPTY,
    EVERYTHING,
    IntervalSet,
    difference,
    intersection,
    normalize,
    union,
)
from .interval import ALL_TIME, Interval
from .util import DAY, HOUR, MAX, MIN, MINUTE, SECOND, WEEK
from .zoned import ZonedInstant

__all__ = [
    "Interval",
    "IntervalSet",
    "ZonedInstant",
    "normalize",
    "union",
    "intersection",
    "difference",
    "ALL_TIME",
    "EMPTY",
    "EVERYTHING",
    "MIN",
    "MAX",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]
