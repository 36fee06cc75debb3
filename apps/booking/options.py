"""
Option resolver — loads a booking option together with the requesting
user's booking state.

Public API:
  get_option_details(cmid, optionid, user=None) -> BookingOptionDetails
"""
import logging
from dataclasses import dataclass, field

from django.core.exceptions import ValidationError

from .exceptions import OptionNotFoundError
from .formatting import format_text
from .models import AnswerStatus, Booking, BookingAnswer, BookingOption

logger = logging.getLogger(__name__)


@dataclass
class BookingOptionDetails:
    """A fully populated option as seen by one user."""
    cmid: int
    booking: Booking
    option: BookingOption
    sessions: list = field(default_factory=list)
    iambooked: bool = False
    onwaitinglist: bool = False
    completed: bool = False

    @property
    def optionid(self):
        return self.option.id

    def get_option_text(self) -> str:
        """
        Status text for the current booking state:
        completed → aftercompletedtext, booked → beforecompletedtext,
        anything else → beforebookedtext.
        """
        if self.iambooked and self.completed:
            text = self.option.aftercompletedtext
        elif self.iambooked:
            text = self.option.beforecompletedtext
        else:
            text = self.option.beforebookedtext
        return format_text(text)


def _answer_for(option: BookingOption, user):
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    return (
        BookingAnswer.objects
        .filter(option=option, user=user)
        .exclude(waitinglist=AnswerStatus.DELETED)
        .first()
    )


def get_option_details(cmid, optionid, user=None) -> BookingOptionDetails:
    """
    Re-read option `optionid` of the booking placed at course module `cmid`.

    Raises OptionNotFoundError if the option does not exist, is soft-deleted,
    or belongs to another booking.
    """
    try:
        option = (
            BookingOption.objects
            .select_related('booking')
            .get(id=optionid, booking__cmid=cmid, booking__deleted_at__isnull=True)
        )
    except (BookingOption.DoesNotExist, ValidationError, ValueError):
        logger.warning('Booking option %s not found for cm %s', optionid, cmid)
        raise OptionNotFoundError(cmid, optionid)

    answer = _answer_for(option, user)
    return BookingOptionDetails(
        cmid=option.booking.cmid,
        booking=option.booking,
        option=option,
        sessions=list(option.sessions.prefetch_related('customfields').order_by('coursestarttime')),
        iambooked=answer is not None and answer.waitinglist == AnswerStatus.BOOKED,
        onwaitinglist=answer is not None and answer.waitinglist == AnswerStatus.WAITING_LIST,
        completed=answer is not None and answer.completed,
    )
