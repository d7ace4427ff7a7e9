"""Sales totals per category over a recent period."""

from __future__ import annotations

import time
from enum import Enum

from .database import Database
from .medicine import SECONDS_PER_DAY


class Period(Enum):
    """A reporting window ending now."""

    TODAY = "today"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def days(self) -> int:
        return _PERIOD_DAYS[self]

    @property
    def label(self) -> str:
        return _PERIOD_LABELS[self]


_PERIOD_DAYS = {
    Period.TODAY: 1,
    Period.MONTH: 30,
    Period.QUARTER: 90,
    Period.YEAR: 365,
}

_PERIOD_LABELS = {
    Period.TODAY: "今日",
    Period.MONTH: "本月",
    Period.QUARTER: "本季度",
    Period.YEAR: "本年",
}


def period_start(period: Period | str, now: int | None = None) -> int:
    """Return the first second of ``period`` ending at ``now``."""
    period = Period(period)
    if now is None:
        now = int(time.time())
    return int(now) - period.days * SECONDS_PER_DAY


def sales_report(
    database: Database, period: Period | str = Period.TODAY, now: int | None = None
) -> list[tuple[str, float]]:
    """Return (category, sales amount) pairs for the period, ordered by category."""
    if now is None:
        now = int(time.time())
    start = period_start(period, now)
    return list(database.sales_by_category(start, int(now)).items())