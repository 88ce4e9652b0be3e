"""Elapsed-time arithmetic between two calendar dates.

Months are ``days / 30`` and years are ``days / 365``. This is an
approximation, not calendar-accurate month arithmetic, and every window
comparison in the rule tables uses the same approximation so tier boundaries
stay consistent with the expiry dates shown to the user.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum


DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365


class TimeUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


_DAYS_PER_UNIT: dict[TimeUnit, int] = {
    TimeUnit.DAYS: 1,
    TimeUnit.WEEKS: DAYS_PER_WEEK,
    TimeUnit.MONTHS: DAYS_PER_MONTH,
    TimeUnit.YEARS: DAYS_PER_YEAR,
}

_SINGULAR: dict[TimeUnit, str] = {
    TimeUnit.DAYS: "day",
    TimeUnit.WEEKS: "week",
    TimeUnit.MONTHS: "month",
    TimeUnit.YEARS: "year",
}


# ---------------------------------------------------------------------------
# Elapsed time
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ElapsedTime:
    """Whole days between two dates, with approximate coarser units."""

    days: int

    @property
    def weeks(self) -> float:
        return self.days / DAYS_PER_WEEK

    @property
    def months(self) -> float:
        return self.days / DAYS_PER_MONTH

    @property
    def years(self) -> float:
        return self.days / DAYS_PER_YEAR

    @property
    def is_negative(self) -> bool:
        return self.days < 0

    def in_unit(self, unit: TimeUnit) -> float:
        if unit == TimeUnit.DAYS:
            return self.days
        return self.days / _DAYS_PER_UNIT[unit]

    def clamped(self) -> "ElapsedTime":
        """Return a copy with negative elapsed time treated as day zero."""
        if self.days >= 0:
            return self
        return ElapsedTime(days=0)


def elapsed_between(start: date, end: date) -> ElapsedTime:
    """Elapsed whole days from ``start`` to ``end``.

    Negative when ``end`` is before ``start``; callers decide the policy.
    """
    return ElapsedTime(days=(end - start).days)


# ---------------------------------------------------------------------------
# Windows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TimeWindow:
    """A statutory or contractual period, e.g. 30 days or 6 years.

    Usage::

        window = TimeWindow.months(6)
        window.contains(elapsed_between(purchase, today))
    """

    amount: int
    unit: TimeUnit

    @classmethod
    def days(cls, amount: int) -> "TimeWindow":
        return cls(amount, TimeUnit.DAYS)

    @classmethod
    def weeks(cls, amount: int) -> "TimeWindow":
        return cls(amount, TimeUnit.WEEKS)

    @classmethod
    def months(cls, amount: int) -> "TimeWindow":
        return cls(amount, TimeUnit.MONTHS)

    @classmethod
    def years(cls, amount: int) -> "TimeWindow":
        return cls(amount, TimeUnit.YEARS)

    @property
    def approx_days(self) -> int:
        return self.amount * _DAYS_PER_UNIT[self.unit]

    def contains(self, elapsed: ElapsedTime) -> bool:
        """Inclusive upper bound: exactly 30 days is inside a 30-day window."""
        return elapsed.in_unit(self.unit) <= self.amount

    def remaining_days(self, elapsed: ElapsedTime) -> int:
        return max(0, self.approx_days - elapsed.days)

    def ends_on(self, start: date) -> date:
        return start + timedelta(days=self.approx_days)

    def describe(self) -> str:
        return f"{self.amount}-{_SINGULAR[self.unit]}"
