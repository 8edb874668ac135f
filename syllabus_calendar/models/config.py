import datetime

import pytz
from pytz.tzinfo import BaseTzInfo
from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator, model_validator

from .term import TermLabel


class TermWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime.date
    end: datetime.date

    @model_validator(mode="after")
    def _check_window(self) -> "TermWindow":
        if self.start >= self.end:
            raise ValueError(f"term window {self.start} - {self.end} is empty")
        return self


class PeriodWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime.time
    end: datetime.time

    @model_validator(mode="after")
    def _check_window(self) -> "PeriodWindow":
        if self.start >= self.end:
            raise ValueError(f"period window {self.start} - {self.end} is empty")
        return self


class CalendarConfig(BaseModel):
    """
    Academic calendar of one institution.

    Holds the term registry (year -> term label -> window), the period
    bell schedule, the weekday aliases accepted in day/period tokens
    (index 0 is Sunday) and the time zone every event is anchored in.
    """

    model_config = ConfigDict(frozen=True)

    timeZone: str = "Asia/Tokyo"
    calendarName: str = "シラバスカレンダー"
    unscheduled: str = "他"
    timetableCodeLabel: str = "時間割コード"
    weekdays: list[list[str]]
    terms: dict[int, dict[TermLabel, TermWindow]]
    periods: dict[int, PeriodWindow]

    _weekday_lookup: dict[str, int] = PrivateAttr(default_factory=dict)

    @field_validator("timeZone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        if value not in pytz.all_timezones_set:
            raise ValueError(f"unknown time zone: {value}")
        return value

    @field_validator("weekdays")
    @classmethod
    def _seven_days(cls, value: list[list[str]]) -> list[list[str]]:
        if len(value) != 7:
            raise ValueError(f"expected 7 weekday alias lists, got {len(value)}")
        seen: set[str] = set()
        for aliases in value:
            if not aliases:
                raise ValueError("every weekday needs at least one alias")
            for alias in aliases:
                if alias in seen:
                    raise ValueError(f"weekday alias {alias!r} is used twice")
                seen.add(alias)
        return value

    @model_validator(mode="after")
    def _check_period_order(self) -> "CalendarConfig":
        numbers = sorted(self.periods)
        for current, following in zip(numbers, numbers[1:]):
            if following != current + 1:
                continue
            if self.periods[current].end > self.periods[following].start:
                raise ValueError(
                    f"period {current} overlaps period {following}"
                )
        return self

    @model_validator(mode="after")
    def _index_weekdays(self) -> "CalendarConfig":
        self._weekday_lookup = {
            alias: index
            for index, aliases in enumerate(self.weekdays)
            for alias in aliases
        }
        return self

    @property
    def tz(self) -> BaseTzInfo:
        return pytz.timezone(self.timeZone)

    @property
    def weekday_lookup(self) -> dict[str, int]:
        return self._weekday_lookup
