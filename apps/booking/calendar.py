"""
Calendar entries for booking options.

Every session becomes one entry; an option without sessions becomes a single
option-level entry. Each entry carries its description rendered for the
calendar, with the entry itself passed as the event so only its own session
is listed.
"""
from dataclasses import dataclass
from typing import Any, Optional

from django.template.loader import render_to_string

from .descriptions import BookingOptionDescription
from .models import DisplayContext


@dataclass
class CalendarEntry:
    name: str
    timestart: Any
    timeduration: int                 # seconds
    optionid: Any
    optiondate_id: Optional[Any] = None
    description: str = ''

    def as_json(self) -> dict:
        return {
            'name': self.name,
            'timestart': self.timestart.isoformat() if self.timestart else None,
            'timeduration': self.timeduration,
            'optionid': str(self.optionid),
            'optiondateid': str(self.optiondate_id) if self.optiondate_id else None,
            'description': str(self.description),
        }


def _duration_seconds(start, end) -> int:
    if not (start and end):
        return 0
    return max(0, int((end - start).total_seconds()))


def build_calendar_entries(details, user=None) -> list:
    option = details.option
    if details.sessions:
        entries = [
            CalendarEntry(
                name=option.text,
                timestart=session.coursestarttime,
                timeduration=_duration_seconds(session.coursestarttime, session.courseendtime),
                optionid=option.id,
                optiondate_id=session.id,
            )
            for session in details.sessions
        ]
    else:
        entries = [
            CalendarEntry(
                name=option.text,
                timestart=option.coursestarttime,
                timeduration=_duration_seconds(option.coursestarttime, option.courseendtime),
                optionid=option.id,
            )
        ]

    for entry in entries:
        data = BookingOptionDescription(
            details.booking, option, entry, DisplayContext.CALENDAR, user=user,
        ).export_for_template()
        entry.description = render_to_string('booking/bookingoption_description_event.html', data.as_dict())
    return entries
