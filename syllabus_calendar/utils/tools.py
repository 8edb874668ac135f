import datetime
from json import dump
from pathlib import Path
from typing import Any, Optional

import pytz
from pytz.tzinfo import BaseTzInfo
from pydantic_core import to_jsonable_python

from ..models import Weekday

PACKAGE_DIR = Path(__file__).resolve().parent.parent
CONFIG_PATH = PACKAGE_DIR / "calendar-config.yaml"

# relative to the working directory
BUILD_DIR = Path("build")
DEFAULT_DUMP_DIRECTORY = Path("dump")
TOKEN_PATH = Path("token.json")

# last second of the term's final day, local time
END_OF_DAY = datetime.time(23, 59, 59)


def compile_weekly_recurrence(end_date: datetime.date, tz: BaseTzInfo) -> str:
    # ref(Date-Time type): https://tools.ietf.org/html/rfc5545#section-3.3.5
    until = tz.localize(datetime.datetime.combine(end_date, END_OF_DAY))
    until_utc = until.astimezone(pytz.utc)
    return f"RRULE:FREQ=DAILY;INTERVAL=7;UNTIL={until_utc:%Y%m%dT%H%M%S}Z"


def anchor_first_occurrence(
    term_start: datetime.date,
    day_of_week: int,
    at: datetime.time,
    tz: BaseTzInfo,
) -> datetime.datetime:
    offset = (Weekday(day_of_week) - Weekday.of(term_start)) % 7
    day = term_start + datetime.timedelta(days=offset)
    return tz.localize(datetime.datetime.combine(day, at))


def school_year(today: Optional[datetime.date] = None) -> int:
    """Academic years start in April."""
    if today is None:
        today = datetime.date.today()
    return today.year if today.month >= 4 else today.year - 1


def save_json(obj: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.is_symlink() or path.exists():
        path.unlink()

    with open(path, "w", encoding="utf-8") as f:
        dump(obj, f, default=to_jsonable_python, ensure_ascii=False, indent=2)
