"""
Email notification service for the booking module.

All functions are synchronous and called directly after a booking answer is
saved. The booking option details ({bookingdetails} in the mail body) are
rendered in mail context, so the option link is a clickable anchor.

Public API:
  send_booking_confirmed(answer)
  send_waiting_list_confirmed(answer)
"""
import html
import logging
from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from apps.booking.descriptions import BookingOptionDescription
from apps.booking.ical import build_option_ics
from apps.booking.models import DisplayContext

logger = logging.getLogger(__name__)


def _booking_context(answer) -> dict:
    """Common template context for all booking emails."""
    option = answer.option
    booking = option.booking
    details = BookingOptionDescription(
        booking, option, None, DisplayContext.MAIL, user=answer.user,
    ).export_for_template()
    bookingdetails = render_to_string('booking/bookingoption_description_mail.html', details.as_dict())
    return {
        'user_name':      answer.user.get_full_name() or answer.user.get_username(),
        'booking_name':   booking.name,
        'course_name':    booking.course_name,
        'option_title':   details.title,
        'bookingdetails': bookingdetails,
        'support_email':  settings.DEFAULT_FROM_EMAIL,
    }


def _send(subject: str, to_email: str, html_template: str, context: dict, attachments=()):
    """Low-level send helper — multipart mail with HTML body and text fallback."""
    if not to_email:
        logger.warning('Email skipped — no email address for user (option %s)', context.get('option_title'))
        return

    try:
        html_body = render_to_string(html_template, context)
        msg = EmailMultiAlternatives(
            subject=subject,
            body=html.unescape(strip_tags(html_body)),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[to_email],
        )
        msg.attach_alternative(html_body, 'text/html')
        for filename, content, mimetype in attachments:
            msg.attach(filename, content, mimetype)
        msg.send(fail_silently=False)
        logger.info('Email "%s" sent to %s', subject, to_email)
    except Exception as exc:
        # Log but never break the booking flow because of mail
        logger.exception('Failed to send email "%s" to %s: %s', subject, to_email, exc)


# ─────────────────────────────────────────────────────────────────────────────
# Public API
# ─────────────────────────────────────────────────────────────────────────────

def send_booking_confirmed(answer):
    """
    Confirmation for a booked answer, with the option's sessions as .ics.
    """
    try:
        ctx = _booking_context(answer)
        ics = build_option_ics(answer.option.booking, answer.option, user=answer.user)
    except Exception:
        logger.exception('Could not prepare booking confirmation for answer %s', answer.pk)
        return

    _send(
        subject=f'Booking confirmation: {ctx["option_title"]}',
        to_email=answer.user.email,
        html_template='emails/booking_confirmed.html',
        context=ctx,
        attachments=[('booking.ics', ics, 'text/calendar')],
    )


def send_waiting_list_confirmed(answer):
    try:
        ctx = _booking_context(answer)
    except Exception:
        logger.exception('Could not prepare waiting list mail for answer %s', answer.pk)
        return

    _send(
        subject=f'You are on the waiting list: {ctx["option_title"]}',
        to_email=answer.user.email,
        html_template='emails/waiting_list_confirmed.html',
        context=ctx,
    )
