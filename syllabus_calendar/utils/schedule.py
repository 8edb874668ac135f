import logging
import re
from typing import Iterable, Union

from ..models import (
    AcademicTerm,
    CalendarConfig,
    DayPeriodToken,
    MeetingBlock,
    PeriodSlot,
    TermLabel,
    Weekday,
)
from .errors import MixedWeekdayError, TermNotFound, TokenParseError, UnknownPeriod

logger = logging.getLogger(__name__)

# 月3, Mon-3, Mon 3; ASCII period numbers without leading zeros
TOKEN_PATTERN = re.compile(r"^(?P<day>.+?)[-\s]?(?P<period>[1-9][0-9]*)$")
TOKEN_SEPARATORS = re.compile(r"[,、]")


def lookup_term(
    config: CalendarConfig, year: int, label: Union[TermLabel, str]
) -> AcademicTerm:
    terms = config.terms.get(year)
    if terms is None:
        raise TermNotFound(year)

    if not isinstance(label, TermLabel):
        try:
            label = TermLabel.parse(label)
        except ValueError:
            raise TermNotFound(year, label) from None

    window = terms.get(label)
    if window is None:
        raise TermNotFound(year, label.value)

    return AcademicTerm(
        year=year, label=label, startDate=window.start, endDate=window.end
    )


def lookup_period(config: CalendarConfig, period_number: int) -> PeriodSlot:
    window = config.periods.get(period_number)
    if window is None:
        raise UnknownPeriod(period_number)
    return PeriodSlot(
        periodNumber=period_number, startTime=window.start, endTime=window.end
    )


def split_day_period(text: str) -> list[str]:
    return [part.strip() for part in TOKEN_SEPARATORS.split(text) if part.strip()]


def parse_token(config: CalendarConfig, raw: str) -> DayPeriodToken:
    token = raw.strip()
    match = TOKEN_PATTERN.match(token)
    if not match:
        raise TokenParseError(raw, "no period number")

    day = config.weekday_lookup.get(match.group("day"))
    if day is None:
        raise TokenParseError(raw, "unknown weekday")

    period = int(match.group("period"))
    if period not in config.periods:
        raise UnknownPeriod(period)

    return DayPeriodToken(raw=token, dayOfWeek=Weekday(day), periodNumber=period)


def merge_tokens(config: CalendarConfig, tokens: Iterable[str]) -> MeetingBlock:
    """
    Collapse the day/period tokens of one meeting into a single block.

    Tokens are folded in the given order. A slot starting at or after the
    running end extends the block forward, any other slot moves the start
    backward. Only one contiguous span per meeting is representable.
    """
    parsed = [parse_token(config, token) for token in tokens]
    if not parsed:
        raise TokenParseError("", "empty day/period")

    first = parsed[0]
    slot = lookup_period(config, first.periodNumber)
    block = MeetingBlock(
        dayOfWeek=first.dayOfWeek, startTime=slot.startTime, endTime=slot.endTime
    )

    for token in parsed[1:]:
        if token.dayOfWeek != block.dayOfWeek:
            raise MixedWeekdayError(block.dayOfWeek, token.raw)

        slot = lookup_period(config, token.periodNumber)
        if block.endTime <= slot.startTime:
            block = block.model_copy(update={"endTime": slot.endTime})
        else:
            block = block.model_copy(update={"startTime": slot.startTime})

    logger.debug(
        f"merged {len(parsed)} tokens into {block.dayOfWeek.name} "
        f"{block.startTime:%H:%M}-{block.endTime:%H:%M}"
    )
    return block
