import logging
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from .models import CalendarConfig, CalendarEventDescriptor, CourseDigest, SyllabusRecord
from .utils.errors import (
    CompileError,
    CompileStage,
    MixedWeekdayError,
    TermNotFound,
    TokenParseError,
    UnknownPeriod,
)
from .utils.schedule import lookup_term, merge_tokens, split_day_period
from .utils.syllabus import record_to_digest
from .utils.tools import anchor_first_occurrence, compile_weekly_recurrence

logger = logging.getLogger(__name__)


def is_unscheduled(config: CalendarConfig, digest: CourseDigest) -> bool:
    return digest.dayPeriod.strip() == config.unscheduled


def compile_course_event(
    config: CalendarConfig, year: int, digest: CourseDigest
) -> Optional[CalendarEventDescriptor]:
    """
    Compile one course into a weekly recurring event.

    Returns None for courses marked unscheduled. Every other failure is
    raised as a CompileError tagged with the stage that failed.
    """
    if is_unscheduled(config, digest):
        return None

    course = str(digest)

    try:
        term = lookup_term(config, year, digest.term)
    except TermNotFound as e:
        raise CompileError(CompileStage.TERM, course, e) from e

    tokens = split_day_period(digest.dayPeriod)
    try:
        block = merge_tokens(config, tokens)
    except TokenParseError as e:
        raise CompileError(CompileStage.TOKENIZE, course, e) from e
    except UnknownPeriod as e:
        raise CompileError(CompileStage.PERIOD, course, e) from e
    except MixedWeekdayError as e:
        raise CompileError(CompileStage.MERGE, course, e) from e

    tz = config.tz
    block = block.model_copy(
        update={"recurrence": compile_weekly_recurrence(term.endDate, tz)}
    )
    start = anchor_first_occurrence(term.startDate, block.dayOfWeek, block.startTime, tz)
    end = anchor_first_occurrence(term.startDate, block.dayOfWeek, block.endTime, tz)

    return CalendarEventDescriptor(
        title=digest.title,
        start=start,
        end=end,
        recurrence=block.recurrence,
        description=f"{config.timetableCodeLabel}: {digest.timetableCode}\n\n"
        + digest.description,
        timeZone=config.timeZone,
        courseCode=digest.courseCode,
        timetableCode=digest.timetableCode,
    )


def digest_record(record: SyllabusRecord) -> CourseDigest:
    try:
        return record_to_digest(record)
    except ValidationError as e:
        title = record.digest.get("科目", "?")
        raise CompileError(
            CompileStage.DIGEST, f"{title} ({record.source or 'unnamed record'})", e
        ) from e


def compile_courses(
    config: CalendarConfig,
    year: int,
    courses: Iterable[Union[CourseDigest, SyllabusRecord]],
    skip_errors: bool = False,
) -> tuple[list[CalendarEventDescriptor], list[CompileError]]:
    """
    Compile a batch; dump records are turned into digests one at a time so a
    malformed record follows the same abort or skip policy as any other course.
    """
    events: list[CalendarEventDescriptor] = []
    failures: list[CompileError] = []
    skipped = 0

    for course in courses:
        try:
            digest = course if isinstance(course, CourseDigest) else digest_record(course)
            event = compile_course_event(config, year, digest)
        except CompileError as e:
            if not skip_errors:
                raise
            logger.warning(f"skip course {e.course}: stage={e.stage.value} {e.cause}")
            failures.append(e)
            continue

        if event is None:
            logger.debug(f"skip unscheduled course {digest}")
            skipped += 1
            continue
        events.append(event)

    logger.info(
        f"compiled {len(events)} events, {skipped} unscheduled, {len(failures)} failed"
    )
    return events, failures
