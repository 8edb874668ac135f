import datetime
from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Weekday(IntEnum):
    """Sunday-based day numbering used by period tokens and anchoring."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day: datetime.date) -> "Weekday":
        # date.weekday() counts from Monday
        return cls((day.weekday() + 1) % 7)


class DayPeriodToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: str
    dayOfWeek: Weekday
    periodNumber: int


class MeetingBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    dayOfWeek: Weekday
    startTime: datetime.time
    endTime: datetime.time
    recurrence: Optional[str] = None
