import uuid
from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone

from apps.booking.models import AnswerStatus, BookingAnswer

pytestmark = pytest.mark.django_db


def option_url(cmid, optionid):
    return f"{reverse('booking:view')}?id={cmid}&optionid={optionid}&action=showonlyone&whichview=showonlyone"


# ── Option page ───────────────────────────────────────────────────────────────

def test_show_only_one_option(client, booking, option, sessions):
    response = client.get(option_url(booking.cmid, option.id))
    assert response.status_code == 200
    body = response.content.decode()
    assert 'Intro to pandas' in body
    assert '<strong>laptop</strong>' in body
    assert '5 August 2030, 10:00 - 11:30' in body
    assert f'id="description-{option.id}"' in body


def test_booked_user_sees_notice(client, booking, option, user, booked):
    client.force_login(user)
    response = client.get(option_url(booking.cmid, option.id))
    assert 'You are already booked for this option.' in response.content.decode()


def test_listing_renders_one_modal_per_option(client, booking, option):
    second = booking.options.create(text='Advanced pandas')
    response = client.get(reverse('booking:view'), {'id': booking.cmid})
    body = response.content.decode()
    assert response.status_code == 200
    assert f'id="modal-{option.id}"' in body
    assert f'id="modal-{second.id}"' in body


@pytest.mark.parametrize('optionid', [uuid.uuid4(), 'garbage'])
def test_unknown_option_is_404(client, booking, optionid):
    response = client.get(option_url(booking.cmid, optionid))
    assert response.status_code == 404


def test_unknown_booking_is_404(client, db):
    assert client.get(reverse('booking:view'), {'id': 12345}).status_code == 404
    assert client.get(reverse('booking:view'), {'id': 'abc'}).status_code == 404


# ── Join redirect ─────────────────────────────────────────────────────────────

def join_params(booking, option, session, field):
    return {
        'id': booking.cmid, 'optionid': str(option.id), 'action': 'join',
        'sessionid': str(session.id), 'fieldid': str(field.id),
    }


def test_join_redirects_booked_user_inside_window(client, booking, option, sessions, meeting_field, user, booked):
    sessions[0].coursestarttime = timezone.now() + timedelta(minutes=10)
    sessions[0].save()
    client.force_login(user)
    response = client.get(reverse('booking:join'), join_params(booking, option, sessions[0], meeting_field))
    assert response.status_code == 302
    assert response['Location'] == 'https://zoom.example.com/j/123'


def test_join_too_early_goes_back_to_option(client, booking, option, sessions, meeting_field, user, booked):
    client.force_login(user)
    response = client.get(reverse('booking:join'), join_params(booking, option, sessions[0], meeting_field))
    assert response.status_code == 302
    assert response['Location'] == option_url(booking.cmid, option.id)


def test_join_refused_for_unbooked_user(client, booking, option, sessions, meeting_field, user):
    sessions[0].coursestarttime = timezone.now()
    sessions[0].save()
    client.force_login(user)
    response = client.get(reverse('booking:join'), join_params(booking, option, sessions[0], meeting_field))
    assert response['Location'] == option_url(booking.cmid, option.id)


def test_join_unknown_session_is_404(client, booking, option, sessions, meeting_field):
    params = join_params(booking, option, sessions[0], meeting_field)
    params['sessionid'] = str(uuid.uuid4())
    assert client.get(reverse('booking:join'), params).status_code == 404


# ── Calendar & iCal ───────────────────────────────────────────────────────────

def test_calendar_api_lists_one_event_per_session(client, booking, option, sessions):
    response = client.get(reverse('booking:api_calendar', args=[booking.cmid]))
    assert response.status_code == 200
    events = response.json()['events']
    assert len(events) == 2
    assert [e['optiondateid'] for e in events] == [str(s.id) for s in sessions]
    assert 'class="btn btn-primary"' in events[0]['description']
    assert events[0]['timeduration'] == 90 * 60


def test_ics_download(client, booking, option, sessions):
    response = client.get(reverse('booking:option_ics', args=[option.id]))
    assert response.status_code == 200
    assert response['Content-Type'].startswith('text/calendar')
    assert response.content.decode().count('BEGIN:VEVENT') == 2


def test_ics_unknown_option_is_404(client, db):
    assert client.get(reverse('booking:option_ics', args=[uuid.uuid4()])).status_code == 404


# ── Booking ───────────────────────────────────────────────────────────────────

def test_book_requires_login(client, option):
    response = client.post(reverse('booking:book', args=[option.id]))
    assert response.status_code == 302
    assert not BookingAnswer.objects.exists()


def test_book_creates_answer(client, booking, option, user, django_capture_on_commit_callbacks):
    client.force_login(user)
    with django_capture_on_commit_callbacks(execute=True):
        response = client.post(reverse('booking:book', args=[option.id]))
    assert response['Location'] == option_url(booking.cmid, option.id)
    answer = BookingAnswer.objects.get(option=option, user=user)
    assert answer.waitinglist == AnswerStatus.BOOKED
