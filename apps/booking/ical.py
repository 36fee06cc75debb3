"""
iCalendar (.ics) export of a booking option.

One VEVENT per session (or one for an option without sessions). The event
description is the plain text rendering of the option description, so the
call to action is the bare link that mail clients turn clickable.
"""
import html
from datetime import timezone as dt_timezone

from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.html import strip_tags

from .descriptions import BookingOptionDescription
from .models import DisplayContext
from .options import get_option_details

PRODID = '-//Course Booking//Booking Option//EN'


def _ics_escape(text: str) -> str:
    """Escape text for ICS TEXT values."""
    return (
        text.replace('\\', '\\\\').replace('\r\n', '\\n').replace('\n', '\\n').replace(';', '\\;').replace(',', '\\,')
    )


def _fold(line: str) -> list:
    """Split a content line into pieces of at most 75 octets (RFC 5545 3.1)."""
    pieces, current, size = [], '', 0
    for char in line:
        width = len(char.encode('utf-8'))
        if size + width > 75:
            pieces.append(current)
            # Continuation lines start with a single space
            current, size = ' ', 1
        current += char
        size += width
    pieces.append(current)
    return pieces


def _dt_utc(value) -> str:
    return value.astimezone(dt_timezone.utc).strftime('%Y%m%dT%H%M%SZ')


def _event_lines(uid, start, end, summary, location, description, dtstamp) -> list:
    lines = [
        'BEGIN:VEVENT',
        f'UID:{_ics_escape(uid)}',
        f'DTSTAMP:{dtstamp}',
        f'DTSTART:{_dt_utc(start)}',
    ]
    if end:
        lines.append(f'DTEND:{_dt_utc(end)}')
    lines.append(f'SUMMARY:{_ics_escape(summary)}')
    if location:
        lines.append(f'LOCATION:{_ics_escape(location)}')
    if description:
        lines.append(f'DESCRIPTION:{_ics_escape(description)}')
    lines.append('END:VEVENT')
    return lines


class _SessionEvent:
    """Event stand-in that binds the description to one session."""
    def __init__(self, optiondate_id):
        self.optiondate_id = optiondate_id


def _plain_description(booking, option, event, user) -> str:
    data = BookingOptionDescription(
        booking, option, event, DisplayContext.ICAL, user=user,
    ).export_for_template()
    context = data.as_dict()
    context['description'] = html.unescape(strip_tags(data.description))
    return render_to_string('booking/bookingoption_description_ical.txt', context).strip()


def build_option_ics(booking, option, user=None) -> str:
    """
    Return the calendar as text with CRLF line endings. An option with
    neither sessions nor a start time gives a calendar without events.
    """
    details = get_option_details(booking.cmid, option.id, user=user)
    location = details.option.location or details.option.address
    dtstamp = _dt_utc(timezone.now())

    lines = [
        'BEGIN:VCALENDAR',
        'VERSION:2.0',
        f'PRODID:{PRODID}',
        'CALSCALE:GREGORIAN',
        'METHOD:PUBLISH',
    ]

    if details.sessions:
        for session in details.sessions:
            description = _plain_description(booking, option, _SessionEvent(session.id), user)
            lines += _event_lines(
                uid=f'{session.id}@coursebooking',
                start=session.coursestarttime,
                end=session.courseendtime,
                summary=details.option.text,
                location=location,
                description=description,
                dtstamp=dtstamp,
            )
    elif details.option.coursestarttime:
        description = _plain_description(booking, option, None, user)
        lines += _event_lines(
            uid=f'{details.option.id}@coursebooking',
            start=details.option.coursestarttime,
            end=details.option.courseendtime,
            summary=details.option.text,
            location=location,
            description=description,
            dtstamp=dtstamp,
        )

    lines.append('END:VCALENDAR')
    # ICS standard uses CRLF
    return '\r\n'.join(piece for line in lines for piece in _fold(line)) + '\r\n'
