from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from django.utils import timezone

from apps.booking.models import DisplayContext, SessionCustomField
from apps.booking.options import get_option_details
from apps.booking.sessions import return_array_of_sessions, return_string_from_dates

pytestmark = pytest.mark.django_db


def aware(*args):
    return timezone.make_aware(datetime(*args))


# ── Date strings ──────────────────────────────────────────────────────────────

def test_same_day_end_shows_time_only():
    assert return_string_from_dates(aware(2030, 8, 5, 10, 0), aware(2030, 8, 5, 11, 30)) == \
        '5 August 2030, 10:00 - 11:30'


def test_end_on_other_day_shows_full_date():
    assert return_string_from_dates(aware(2030, 8, 5, 10, 0), aware(2030, 8, 6, 12, 0)) == \
        '5 August 2030, 10:00 - 6 August 2030, 12:00'


def test_missing_start_gives_empty_string():
    assert return_string_from_dates(None, aware(2030, 8, 5, 11, 30)) == ''


def test_missing_end_shows_start_only():
    assert return_string_from_dates(aware(2030, 8, 5, 10, 0), None) == '5 August 2030, 10:00'


# ── Session listing ───────────────────────────────────────────────────────────

def test_sessions_listed_in_start_order(booking, option, sessions):
    details = get_option_details(booking.cmid, option.id)
    entries = return_array_of_sessions(details)
    assert [e['datestring'] for e in entries] == [
        '5 August 2030, 10:00 - 11:30',
        '6 August 2030, 09:00 - 12:00',
    ]
    assert all(e['customfields'] is False for e in entries)


def test_event_limits_listing_to_its_session(booking, option, sessions):
    details = get_option_details(booking.cmid, option.id)
    event = SimpleNamespace(optiondate_id=sessions[1].id)
    entries = return_array_of_sessions(details, event)
    assert [e['datestring'] for e in entries] == ['6 August 2030, 09:00 - 12:00']


def test_option_without_sessions_uses_option_dates(booking, option):
    option.coursestarttime = aware(2030, 9, 1, 14, 0)
    option.courseendtime = aware(2030, 9, 1, 16, 0)
    option.save()
    details = get_option_details(booking.cmid, option.id)
    assert return_array_of_sessions(details, None, DisplayContext.WEBSITE, True) == [
        {'datestring': '1 September 2030, 14:00 - 16:00', 'customfields': False},
    ]


def test_event_without_session_falls_back_to_option_dates(booking, option, sessions):
    details = get_option_details(booking.cmid, option.id)
    entries = return_array_of_sessions(details, SimpleNamespace(optiondate_id=None))
    assert entries == [{'datestring': '', 'customfields': False}]


# ── Custom fields ─────────────────────────────────────────────────────────────

def test_plain_custom_field(booking, option, sessions):
    SessionCustomField.objects.create(optiondate=sessions[0], cfgname='Room', value='B 1.04')
    details = get_option_details(booking.cmid, option.id)
    entries = return_array_of_sessions(details, None, DisplayContext.WEBSITE, True)
    assert entries[0]['customfields'] == [{'name': 'Room: ', 'value': 'B 1.04'}]
    assert entries[1]['customfields'] == []


def test_custom_fields_left_out_when_not_requested(booking, option, sessions, meeting_field):
    details = get_option_details(booking.cmid, option.id)
    entries = return_array_of_sessions(details, None, DisplayContext.MAIL, False)
    assert entries[0]['customfields'] is False


def _join_link(booking, option, session, field):
    return (
        f"https://courses.example.org/booking/join/?id={booking.cmid}&optionid={option.id}"
        f"&action=join&sessionid={session.id}&fieldid={field.id}"
    )


def test_meeting_field_in_ical_is_plain_link(booking, option, sessions, meeting_field):
    details = get_option_details(booking.cmid, option.id)
    fields = return_array_of_sessions(details, None, DisplayContext.ICAL, True)[0]['customfields']
    assert fields == [{
        'name': None,
        'value': f"ZoomMeeting: {_join_link(booking, option, sessions[0], meeting_field)}",
    }]


def test_meeting_field_in_mail_is_anchor(booking, option, sessions, meeting_field):
    details = get_option_details(booking.cmid, option.id)
    field = return_array_of_sessions(details, None, DisplayContext.MAIL, True)[0]['customfields'][0]
    assert field['name'] == 'ZoomMeeting: '
    assert field['value'].startswith('<a href="https://courses.example.org/booking/join/?id=42&amp;')


def test_meeting_field_in_calendar_is_button(booking, option, sessions, meeting_field):
    details = get_option_details(booking.cmid, option.id)
    field = return_array_of_sessions(details, None, DisplayContext.CALENDAR, True)[0]['customfields'][0]
    assert field['name'] is None
    assert 'class="btn btn-info">ZoomMeeting</a>' in field['value']


def test_meeting_url_never_exposed(booking, option, sessions, meeting_field):
    details = get_option_details(booking.cmid, option.id)
    for context in (DisplayContext.ICAL, DisplayContext.MAIL, DisplayContext.CALENDAR):
        fields = return_array_of_sessions(details, None, context, True)[0]['customfields']
        assert 'zoom.example.com' not in str(fields)


def test_meeting_field_hidden_on_website_for_unbooked_user(booking, option, sessions, meeting_field, user):
    details = get_option_details(booking.cmid, option.id, user=user)
    assert return_array_of_sessions(details, None, DisplayContext.WEBSITE, True)[0]['customfields'] == []


def test_meeting_field_on_website_before_join_window(booking, option, sessions, meeting_field, user, booked):
    details = get_option_details(booking.cmid, option.id, user=user)
    field = return_array_of_sessions(details, None, DisplayContext.WEBSITE, True)[0]['customfields'][0]
    assert field['name'] == 'ZoomMeeting: '
    assert field['value'] == 'The link will be available 15 minutes before the session starts.'


def test_meeting_field_on_website_inside_join_window(booking, option, sessions, meeting_field, user, booked):
    session = sessions[0]
    session.coursestarttime = timezone.now() + timedelta(minutes=5)
    session.courseendtime = timezone.now() + timedelta(minutes=65)
    session.save()
    details = get_option_details(booking.cmid, option.id, user=user)
    first = [e for e in return_array_of_sessions(details, None, DisplayContext.WEBSITE, True) if e['customfields']][0]
    field = first['customfields'][0]
    assert field['name'] is None
    assert 'target="_blank"' in field['value']
    assert '/booking/join/' in field['value']
