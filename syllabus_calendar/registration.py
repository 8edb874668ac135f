import datetime
import logging
from pathlib import Path
from typing import Optional, Union

from tqdm import tqdm

from .compiler import compile_courses
from .models import CalendarEventDescriptor, PersistedEvent
from .utils.config import load_config
from .utils.errors import TermNotFound
from .utils.google import CalendarClient, GoogleCalendarSession
from .utils.syllabus import read_dumped_syllabus
from .utils.tools import BUILD_DIR, CONFIG_PATH, save_json, school_year

logger = logging.getLogger(__name__)


def register_events(
    client: CalendarClient,
    calendar_id: str,
    events: list[CalendarEventDescriptor],
) -> list[PersistedEvent]:
    persisted: list[PersistedEvent] = []
    for event in tqdm(events, leave=True, desc="Registering events"):
        event_id = client.insert_event(calendar_id, event)
        persisted.append(
            PersistedEvent(
                calendarId=calendar_id,
                eventId=event_id,
                courseId=event.courseCode,
                timetableId=event.timetableCode,
            )
        )
        logger.info(f"registered {event.title} ({event.timetableCode}) id={event_id}")
    return persisted


def make_calendar(
    dump_dir: Union[str, Path],
    year: Optional[int] = None,
    config_path: Union[str, Path] = CONFIG_PATH,
    dry_run: bool = False,
    skip_errors: bool = False,
    output_path: Optional[Path] = None,
    client: Optional[CalendarClient] = None,
) -> Union[list[CalendarEventDescriptor], list[PersistedEvent]]:
    config = load_config(config_path)

    if year is None:
        year = school_year(datetime.datetime.now(config.tz).date())
    if year not in config.terms:
        raise TermNotFound(year)

    records = read_dumped_syllabus(dump_dir, year)
    events, failures = compile_courses(config, year, records, skip_errors=skip_errors)
    if failures:
        logger.warning(f"{len(failures)} courses could not be compiled")

    if dry_run:
        path = output_path or BUILD_DIR / f"events-{year}.json"
        save_json([event.to_request_body() for event in events], path)
        logger.info(f"dry run, wrote {len(events)} events to {path}")
        return events

    if client is None:
        with GoogleCalendarSession() as session_client:
            persisted = _register(session_client, config.calendarName, config.timeZone, events)
    else:
        persisted = _register(client, config.calendarName, config.timeZone, events)

    path = output_path or BUILD_DIR / f"persisted-{year}.json"
    save_json(persisted, path)
    logger.info(f"wrote {len(persisted)} persisted events to {path}")
    return persisted


def _register(
    client: CalendarClient,
    calendar_name: str,
    time_zone: str,
    events: list[CalendarEventDescriptor],
) -> list[PersistedEvent]:
    calendar_id = client.create_calendar(calendar_name, time_zone)
    return register_events(client, calendar_id, events)
