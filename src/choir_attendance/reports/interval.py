from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import end_of_day, first_day_of_month, last_day_of_month, now_local, start_of_day
from ..core.exceptions import InvalidIntervalError


@dataclass(frozen=True)
class Interval:
    """Closed interval [start, end] of local datetimes."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidIntervalError(
                f"Start {self.start:%Y-%m-%d} is after end {self.end:%Y-%m-%d}"
            )

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    @classmethod
    def for_dates(cls, start: date, end: date) -> "Interval":
        """Whole days: from 00:00 on ``start`` up to the last instant of ``end``."""
        return cls(start_of_day(start), end_of_day(end))

    @classmethod
    def month_to_date(cls, now: Optional[datetime] = None) -> "Interval":
        now = now or now_local()
        return cls(start_of_day(first_day_of_month(now.date())), now)

    @classmethod
    def full_month(cls, now: Optional[datetime] = None) -> "Interval":
        now = now or now_local()
        return cls.for_dates(first_day_of_month(now.date()), last_day_of_month(now.date()))
