from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any

from ..core.exceptions import ValidationError
from .datetime_utils import coerce_date


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValidationError("End date must be on or after start date")

    @classmethod
    def of(cls, start: Any, end: Any) -> "DateRange":
        return cls(coerce_date(start, "start"), coerce_date(end, "end"))

    @classmethod
    def single(cls, day: date) -> "DateRange":
        return cls(day, day)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1
