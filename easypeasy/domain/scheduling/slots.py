"""
Weekly meeting generation and cascading reschedule.

Both functions are pure: they take plain in-memory values and return new
ones. Persisting the result is the caller's job (see LabService).
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional, Union

from ...shared.dates import parse_calendar_date

MEETING_INTERVAL = timedelta(weeks=1)


class SchedulingError(Exception):
    """Base class for scheduling errors"""


class InvalidScheduleInput(SchedulingError):
    """Malformed start date, meeting count or target date"""


class MeetingNotFound(SchedulingError):
    """The requested meeting order is not part of the schedule"""

    def __init__(self, order):
        super().__init__(f"Meeting #{order} not found")
        self.order = order


@dataclass(frozen=True)
class ScheduledMeeting:
    order: int
    date: date


@dataclass(frozen=True)
class Schedule:
    meetings: list[ScheduledMeeting] = field(default_factory=list)
    end_date: Optional[date] = None


def _to_date(value: Union[str, date], label: str) -> date:
    try:
        return parse_calendar_date(value)
    except ValueError as e:
        raise InvalidScheduleInput(f"Invalid {label}: {e}") from e


def generate_schedule(start_date: Union[str, date], meeting_count: int) -> Schedule:
    """
    Build `meeting_count` meetings, one per week starting on `start_date`.

    Meeting i (0-indexed) gets order i + 1 and date start_date + 7*i days.
    end_date is the date of the last meeting, or None for an empty schedule.

    Raises:
        InvalidScheduleInput: If start_date is not a calendar date or
            meeting_count is not a non-negative integer
    """
    start = _to_date(start_date, "start date")

    # bool is an int subclass but never a valid count
    if isinstance(meeting_count, bool) or not isinstance(meeting_count, int):
        raise InvalidScheduleInput(f"Meeting count must be an integer, got {meeting_count!r}")
    if meeting_count < 0:
        raise InvalidScheduleInput(f"Meeting count must not be negative, got {meeting_count}")

    meetings = [
        ScheduledMeeting(order=i + 1, date=start + MEETING_INTERVAL * i)
        for i in range(meeting_count)
    ]
    end_date = meetings[-1].date if meetings else None
    return Schedule(meetings=meetings, end_date=end_date)


def reschedule_cascade(
    meetings: Iterable, moved_order: int, new_date: Union[str, date]
) -> list[ScheduledMeeting]:
    """
    Move meeting `moved_order` to `new_date` and shift every later meeting
    by the same number of days.

    `meetings` may hold any objects exposing `order` and `date`. Earlier
    meetings keep their dates, orders never change, and the input is left
    untouched. Dates of the result are not re-sorted: a large move can make
    them non-monotonic.

    Raises:
        InvalidScheduleInput: If new_date is not a calendar date
        MeetingNotFound: If no meeting has order `moved_order`
    """
    target = _to_date(new_date, "new date")
    ordered = sorted(
        (ScheduledMeeting(order=m.order, date=parse_calendar_date(m.date)) for m in meetings),
        key=lambda m: m.order,
    )

    moved = next((m for m in ordered if m.order == moved_order), None)
    if moved is None:
        raise MeetingNotFound(moved_order)

    delta = target - moved.date

    return [
        ScheduledMeeting(order=m.order, date=m.date + delta) if m.order >= moved_order else m
        for m in ordered
    ]
