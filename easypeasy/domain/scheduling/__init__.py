"""
Scheduling Domain

Pure scheduling logic for labs:
- slots.py: weekly meeting generation and cascading reschedule
- codes.py: lab code generation (venue + weekday + start time)

Nothing in this package touches the database. The labs domain loads the
meetings, calls these functions and saves the result in one commit.
"""

from .codes import generate_lab_code, lab_code_for
from .slots import (
    InvalidScheduleInput,
    MeetingNotFound,
    Schedule,
    ScheduledMeeting,
    SchedulingError,
    generate_schedule,
    reschedule_cascade,
)

__all__ = [
    "generate_lab_code",
    "lab_code_for",
    "generate_schedule",
    "reschedule_cascade",
    "Schedule",
    "ScheduledMeeting",
    "SchedulingError",
    "InvalidScheduleInput",
    "MeetingNotFound",
]
