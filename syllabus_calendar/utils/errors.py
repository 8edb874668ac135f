from enum import Enum
from typing import Any, Optional


class ScheduleError(Exception):
    """Base class for data or configuration mismatches found while compiling."""


class TermNotFound(ScheduleError):
    def __init__(self, year: int, label: Any = None):
        self.year = year
        self.label = label
        if label is None:
            super().__init__(f"no terms are configured for {year}")
        else:
            super().__init__(f"term {label!r} is not configured for {year}")


class UnknownPeriod(ScheduleError):
    def __init__(self, period: int):
        self.period = period
        super().__init__(f"period {period} is not in the period table")


class TokenParseError(ScheduleError):
    def __init__(self, token: str, reason: str = "unrecognized token"):
        self.token = token
        self.reason = reason
        super().__init__(f"{reason}: {token!r}")


class MixedWeekdayError(ScheduleError):
    def __init__(self, expected: int, token: str):
        self.expected = expected
        self.token = token
        super().__init__(
            f"token {token!r} is not on the same weekday ({expected}) as the rest of the meeting"
        )


class CompileStage(Enum):
    DIGEST = "digest"
    TERM = "term"
    TOKENIZE = "tokenize"
    PERIOD = "period"
    MERGE = "merge"


class CompileError(ScheduleError):
    """A course could not be compiled; ``stage`` tells which step failed."""

    def __init__(self, stage: CompileStage, course: str, cause: Optional[Exception] = None):
        self.stage = stage
        self.course = course
        self.cause = cause
        message = f"[{stage.value}] {course}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
