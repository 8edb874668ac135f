import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class CalendarEventDescriptor(BaseModel):
    """One weekly recurring course event, ready for ``events.insert``."""

    model_config = ConfigDict(frozen=True)

    title: str
    start: datetime.datetime
    end: datetime.datetime
    recurrence: str
    description: str
    timeZone: str
    courseCode: str = ""
    timetableCode: str = ""

    @field_validator("start", "end")
    @classmethod
    def _require_zone(cls, value: datetime.datetime) -> datetime.datetime:
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValueError("event times must carry a time zone")
        return value

    def to_request_body(self) -> dict[str, Any]:
        return {
            "summary": self.title,
            "start": {"dateTime": self.start.isoformat(), "timeZone": self.timeZone},
            "end": {"dateTime": self.end.isoformat(), "timeZone": self.timeZone},
            "recurrence": [self.recurrence],
            "description": self.description,
        }


class PersistedEvent(BaseModel):
    calendarId: str
    eventId: str
    courseId: str
    timetableId: str
