from .config import CalendarConfig, PeriodWindow, TermWindow
from .course import CourseDigest, SyllabusNode, SyllabusRecord
from .event import CalendarEventDescriptor, PersistedEvent
from .meeting import DayPeriodToken, MeetingBlock, Weekday
from .period import PeriodSlot
from .term import AcademicTerm, TermLabel

__all__ = [
    "AcademicTerm",
    "CalendarConfig",
    "CalendarEventDescriptor",
    "CourseDigest",
    "DayPeriodToken",
    "MeetingBlock",
    "PeriodSlot",
    "PeriodWindow",
    "PersistedEvent",
    "SyllabusNode",
    "SyllabusRecord",
    "TermLabel",
    "TermWindow",
    "Weekday",
]
