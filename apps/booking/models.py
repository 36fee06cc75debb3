"""
Booking module models:
  - Booking            : A booking activity placed in a course (identified by cmid)
  - BookingOption      : One bookable offer of a booking
  - OptionDate         : One session (dated occurrence) of an option
  - SessionCustomField : Extra per-session data, e.g. a room note or meeting link
  - BookingAnswer      : A user's booking / waiting list entry for an option
"""
from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from apps.core.models import BaseModel, UUIDModel, TimestampedModel


class DisplayContext(models.IntegerChoices):
    """Surface a booking option description is rendered for."""
    WEBSITE  = 1, 'Website'
    CALENDAR = 2, 'Calendar'
    ICAL     = 3, 'iCal'
    MAIL     = 4, 'Mail'


# ── Booking instance ──────────────────────────────────────────────────────────

class Booking(BaseModel):
    name = models.CharField(max_length=255)
    course_name = models.CharField(max_length=255, blank=True)
    cmid = models.PositiveIntegerField(
        unique=True,
        help_text='Course module id of this booking activity (used in links)',
    )
    intro = models.TextField(blank=True)

    class Meta:
        verbose_name = 'Booking'
        verbose_name_plural = 'Bookings'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} (cm {self.cmid})"


# ── Booking option ────────────────────────────────────────────────────────────

class BookingOption(BaseModel):
    booking = models.ForeignKey(Booking, on_delete=models.CASCADE, related_name='options')
    text = models.CharField(max_length=255, help_text='Title of the option')
    description = models.TextField(blank=True, help_text='HTML description')
    location = models.CharField(max_length=255, blank=True)
    address = models.CharField(max_length=255, blank=True)
    institution = models.CharField(max_length=255, blank=True)

    # Only used when the option has no sessions
    coursestarttime = models.DateTimeField(null=True, blank=True)
    courseendtime = models.DateTimeField(null=True, blank=True)

    maxanswers = models.PositiveIntegerField(
        default=0, validators=[MinValueValidator(0)],
        help_text='Places available (0 = unlimited)',
    )

    # Status texts shown depending on the user's booking state
    beforebookedtext = models.TextField(blank=True)
    beforecompletedtext = models.TextField(blank=True)
    aftercompletedtext = models.TextField(blank=True)

    class Meta:
        verbose_name = 'Booking Option'
        verbose_name_plural = 'Booking Options'
        ordering = ['coursestarttime', 'text']

    def __str__(self):
        return f"{self.text} — {self.booking.name}"

    @property
    def optionid(self):
        """Id used in view links."""
        return self.id


# ── Sessions ──────────────────────────────────────────────────────────────────

class OptionDate(UUIDModel):
    option = models.ForeignKey(BookingOption, on_delete=models.CASCADE, related_name='sessions')
    coursestarttime = models.DateTimeField(db_index=True)
    courseendtime = models.DateTimeField()

    class Meta:
        verbose_name = 'Session'
        verbose_name_plural = 'Sessions'
        ordering = ['coursestarttime']

    def __str__(self):
        return f"{self.option.text}: {self.coursestarttime:%Y-%m-%d %H:%M}"


class SessionCustomField(UUIDModel):
    """Named value attached to a session. Meeting names mark join links."""
    MEETING_FIELDS = ('ZoomMeeting', 'BigBlueButtonMeeting', 'TeamsMeeting')

    optiondate = models.ForeignKey(OptionDate, on_delete=models.CASCADE, related_name='customfields')
    cfgname = models.CharField(max_length=120)
    value = models.TextField(blank=True)

    class Meta:
        verbose_name = 'Session Custom Field'
        verbose_name_plural = 'Session Custom Fields'
        ordering = ['cfgname']

    def __str__(self):
        return f"{self.cfgname}: {self.value}"

    @property
    def is_meeting(self):
        return self.cfgname in self.MEETING_FIELDS


# ── Answers ───────────────────────────────────────────────────────────────────

class AnswerStatus(models.IntegerChoices):
    BOOKED       = 0, 'Booked'
    WAITING_LIST = 1, 'On waiting list'
    RESERVED     = 2, 'Reserved'
    DELETED      = 5, 'Deleted'


class BookingAnswer(UUIDModel, TimestampedModel):
    option = models.ForeignKey(BookingOption, on_delete=models.CASCADE, related_name='answers')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='booking_answers')
    waitinglist = models.PositiveSmallIntegerField(
        choices=AnswerStatus.choices, default=AnswerStatus.BOOKED, db_index=True,
    )
    completed = models.BooleanField(default=False)

    class Meta:
        verbose_name = 'Booking Answer'
        verbose_name_plural = 'Booking Answers'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['option', 'user'],
                condition=~models.Q(waitinglist=5),
                name='uq_live_answer_per_user',
            )
        ]

    def __str__(self):
        return f"{self.user} → {self.option.text} [{self.get_waitinglist_display()}]"
