from datetime import datetime

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.booking.models import (
    AnswerStatus,
    Booking,
    BookingAnswer,
    BookingOption,
    OptionDate,
    SessionCustomField,
)


def aware(*args):
    """Aware datetime in the project time zone."""
    return timezone.make_aware(datetime(*args))


@pytest.fixture
def booking(db):
    return Booking.objects.create(name='Summer School', course_name='Data Science 101', cmid=42)


@pytest.fixture
def option(booking):
    return BookingOption.objects.create(
        booking=booking,
        text='Intro to pandas',
        description='<p>Bring a <strong>laptop</strong>.</p>',
        location='Room 3',
        address='Main Street 1',
        institution='Faculty of Informatics',
        maxanswers=2,
        beforebookedtext='<p>Places are limited.</p>',
        beforecompletedtext='<p>See you there.</p>',
        aftercompletedtext='<p>Thanks for joining.</p>',
    )


@pytest.fixture
def sessions(option):
    """Two sessions, created out of order."""
    second = OptionDate.objects.create(
        option=option, coursestarttime=aware(2030, 8, 6, 9, 0), courseendtime=aware(2030, 8, 6, 12, 0),
    )
    first = OptionDate.objects.create(
        option=option, coursestarttime=aware(2030, 8, 5, 10, 0), courseendtime=aware(2030, 8, 5, 11, 30),
    )
    return [first, second]


@pytest.fixture
def meeting_field(sessions):
    return SessionCustomField.objects.create(
        optiondate=sessions[0], cfgname='ZoomMeeting', value='https://zoom.example.com/j/123',
    )


@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(
        username='anna', email='anna@example.org', password='secret', first_name='Anna',
    )


@pytest.fixture
def other_user(db):
    return get_user_model().objects.create_user(username='ben', email='ben@example.org', password='secret')


@pytest.fixture
def booked(option, user):
    return BookingAnswer.objects.create(option=option, user=user, waitinglist=AnswerStatus.BOOKED)
