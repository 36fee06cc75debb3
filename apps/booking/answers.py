"""
Booking answers — a user books an option or lands on its waiting list.

Public API:
  book_option(option, user) -> BookingAnswer
"""
import logging

from django.db import transaction

from apps.notifications.emails import send_booking_confirmed, send_waiting_list_confirmed

from .exceptions import AlreadyAnsweredError
from .models import AnswerStatus, BookingAnswer, BookingOption

logger = logging.getLogger(__name__)


@transaction.atomic
def book_option(option: BookingOption, user) -> BookingAnswer:
    """
    Book `option` for `user`. Once maxanswers places are taken the answer
    goes on the waiting list (maxanswers 0 means unlimited).
    The matching confirmation mail is sent after commit.
    """
    option = BookingOption.objects.select_for_update().get(pk=option.pk)
    live = option.answers.exclude(waitinglist=AnswerStatus.DELETED)

    if live.filter(user=user).exists():
        raise AlreadyAnsweredError('You already have an answer for this booking option.')

    booked = live.filter(waitinglist=AnswerStatus.BOOKED).count()
    if option.maxanswers and booked >= option.maxanswers:
        status = AnswerStatus.WAITING_LIST
    else:
        status = AnswerStatus.BOOKED

    answer = BookingAnswer.objects.create(option=option, user=user, waitinglist=status)
    logger.info('User %s %s option %s', user.pk,
                'booked' if status == AnswerStatus.BOOKED else 'is waiting for', option.id)

    if status == AnswerStatus.BOOKED:
        transaction.on_commit(lambda: send_booking_confirmed(answer))
    else:
        transaction.on_commit(lambda: send_waiting_list_confirmed(answer))
    return answer
