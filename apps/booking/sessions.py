"""
Session/date lister — expands a booking option into per-session date
entries for templates.

Public API:
  return_array_of_sessions(details, event=None, description_param=0, with_custom_fields=False)
  return_string_from_dates(start, end)

Each entry:
  {"datestring": "5 August 2030, 10:00 - 11:30", "customfields": [...] | False}
"""
import logging
from datetime import timedelta
from urllib.parse import urlencode

from django.conf import settings
from django.urls import reverse
from django.utils import timezone
from django.utils.formats import date_format
from django.utils.html import format_html
from django.utils.translation import gettext as _

from .models import DisplayContext

logger = logging.getLogger(__name__)


# ── Date helpers ──────────────────────────────────────────────────────────────

def return_string_from_dates(start, end) -> str:
    """
    Human readable span of a session. The end shows only its time when it
    falls on the same local day as the start. Missing start gives ''.
    """
    if not start:
        return ''
    start = timezone.localtime(start)
    datestring = date_format(start, settings.BOOKING_DATETIME_FORMAT)
    if end:
        end = timezone.localtime(end)
        fmt = settings.BOOKING_TIME_FORMAT if end.date() == start.date() else settings.BOOKING_DATETIME_FORMAT
        datestring += ' - ' + date_format(end, fmt)
    return datestring


def join_window_open(session) -> bool:
    opens_at = session.coursestarttime - timedelta(minutes=settings.BOOKING_JOIN_WINDOW_MINUTES)
    return timezone.now() >= opens_at


# ── Custom fields ─────────────────────────────────────────────────────────────

def _join_link(details, session, field) -> str:
    query = urlencode({
        'id': details.cmid,
        'optionid': details.optionid,
        'action': 'join',
        'sessionid': session.id,
        'fieldid': field.id,
    })
    return f"{settings.SITE_URL}{reverse('booking:join')}?{query}"


def _render_meeting_field(details, session, field, description_param):
    """
    Meeting fields never expose the stored meeting URL; they point at the
    join redirect, which checks the booking state again.
    """
    link = _join_link(details, session, field)

    if description_param == DisplayContext.ICAL:
        return {'name': None, 'value': f"{field.cfgname}: {link}"}

    if description_param == DisplayContext.MAIL:
        return {'name': f"{field.cfgname}: ", 'value': format_html('<a href="{}">{}</a>', link, link)}

    if description_param == DisplayContext.CALENDAR:
        return {
            'name': None,
            'value': format_html('<a href="{}" class="btn btn-info">{}</a>', link, field.cfgname),
        }

    # Website: only booked users see anything, and the button only shortly before start
    if not details.iambooked:
        return None
    if not join_window_open(session):
        return {
            'name': f"{field.cfgname}: ",
            'value': _('The link will be available %(minutes)s minutes before the session starts.') % {
                'minutes': settings.BOOKING_JOIN_WINDOW_MINUTES,
            },
        }
    return {
        'name': None,
        'value': format_html('<a href="{}" class="btn btn-info" target="_blank">{}</a>', link, field.cfgname),
    }


def _render_customfield(details, session, field, description_param):
    if field.is_meeting:
        return _render_meeting_field(details, session, field, description_param)
    return {'name': f"{field.cfgname}: ", 'value': field.value}


def return_array_of_customfields(details, session, description_param) -> list:
    fields = []
    for field in session.customfields.all():
        rendered = _render_customfield(details, session, field, description_param)
        if rendered:
            fields.append(rendered)
    return fields


# ── Sessions ──────────────────────────────────────────────────────────────────

def _sessions_for(details, event):
    """
    Without an event every session is listed. An event stands for one
    session (event.optiondate_id); an event without a session lists none.
    """
    if event is None:
        return list(details.sessions)
    optiondate_id = getattr(event, 'optiondate_id', None)
    if not optiondate_id:
        return []
    return [s for s in details.sessions if str(s.id) == str(optiondate_id)]


def return_array_of_sessions(details, event=None, description_param=0, with_custom_fields=False) -> list:
    """
    Return the ordered date entries of an option.

    Options without sessions (or an event not bound to a session) yield a
    single entry built from the option's own start and end.
    """
    sessions = _sessions_for(details, event)

    if not sessions:
        return [{
            'datestring': return_string_from_dates(
                details.option.coursestarttime, details.option.courseendtime,
            ),
            'customfields': False,
        }]

    entries = []
    for session in sessions:
        customfields = False
        if with_custom_fields:
            customfields = return_array_of_customfields(details, session, description_param)
        entries.append({
            'datestring': return_string_from_dates(session.coursestarttime, session.courseendtime),
            'customfields': customfields,
        })
    logger.debug('Listed %d session(s) for option %s', len(entries), details.optionid)
    return entries
