"""
Booking module views.

The option page is addressed the same way links in calendars, iCal files and
mails address it:
  /booking/view/?id=<cmid>&optionid=<uuid>&action=showonlyone&whichview=showonlyone
"""
import logging
import uuid

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import Http404, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.translation import gettext as _
from django.views.decorators.http import require_GET, require_POST

from .answers import book_option
from .calendar import build_calendar_entries
from .descriptions import BookingOptionDescription
from .exceptions import BookingError, OptionNotFoundError, SessionNotFoundError
from .ical import build_option_ics
from .models import AnswerStatus, Booking, BookingOption
from .options import get_option_details
from .sessions import join_window_open

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse_cmid(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise Http404('Invalid course module id.')


def _is_uuid(value):
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def _get_booking(cmid):
    return get_object_or_404(Booking, cmid=cmid)


def _option_url(cmid, optionid):
    return (
        f"{reverse('booking:view')}?id={cmid}&optionid={optionid}"
        "&action=showonlyone&whichview=showonlyone"
    )


# ─────────────────────────────────────────────────────────────────────────────
# Website
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
def view_option(request):
    """
    Without `optionid`: all options of the booking, each in its own modal.
    With `optionid` and action=showonlyone: that option only.
    """
    cmid = _parse_cmid(request.GET.get('id'))
    booking = _get_booking(cmid)
    optionid = request.GET.get('optionid')
    showonlyone = request.GET.get('action') == 'showonlyone' or request.GET.get('whichview') == 'showonlyone'

    if optionid and showonlyone:
        options = booking.options.filter(id=optionid) if _is_uuid(optionid) else booking.options.none()
        if not options:
            raise Http404('Booking option not found.')
    else:
        options = booking.options.all()

    descriptions = []
    for option in options:
        try:
            data = BookingOptionDescription(booking, option, user=request.user).export_for_template()
        except OptionNotFoundError:
            raise Http404('Booking option not found.')
        descriptions.append(data.as_dict())

    return render(request, 'booking/view.html', {
        'booking': booking,
        'descriptions': descriptions,
        'showonlyone': bool(optionid and showonlyone),
    })


@require_GET
def join_session(request):
    """
    Redirect a booked user to a session's meeting URL once the join window
    is open. Everyone else goes back to the option page with a message.
    """
    cmid = _parse_cmid(request.GET.get('id'))
    optionid = request.GET.get('optionid')

    try:
        details = get_option_details(cmid, optionid, user=request.user)
        session = next((s for s in details.sessions if str(s.id) == request.GET.get('sessionid')), None)
        if session is None:
            raise SessionNotFoundError('Unknown session.')
        field = next(
            (f for f in session.customfields.all() if str(f.id) == request.GET.get('fieldid')), None,
        )
        if field is None or not field.is_meeting:
            raise SessionNotFoundError('Unknown meeting field.')
    except BookingError as exc:
        logger.info('Join link rejected: %s', exc)
        raise Http404(str(exc))

    back = _option_url(cmid, details.optionid)
    if not details.iambooked:
        messages.error(request, _('Only booked users can join this session.'))
        return redirect(back)
    if not join_window_open(session):
        messages.info(request, _('The session has not started yet. Please come back shortly before it begins.'))
        return redirect(back)

    logger.info('User %s joins %s of option %s', request.user.pk, field.cfgname, details.optionid)
    return redirect(field.value)


# ─────────────────────────────────────────────────────────────────────────────
# Calendar & iCal
# ─────────────────────────────────────────────────────────────────────────────

@require_GET
def api_calendar(request, cmid):
    """JSON calendar entries for all options of a booking."""
    booking = _get_booking(cmid)
    entries = []
    for option in booking.options.all():
        details = get_option_details(booking.cmid, option.id, user=request.user)
        entries.extend(e.as_json() for e in build_calendar_entries(details, user=request.user))
    return JsonResponse({'booking': booking.name, 'events': entries})


@require_GET
def option_ics(request, optionid):
    option = get_object_or_404(BookingOption.objects.select_related('booking'), id=optionid)
    try:
        body = build_option_ics(option.booking, option, user=request.user)
    except OptionNotFoundError:
        raise Http404('Booking option not found.')

    response = HttpResponse(body, content_type='text/calendar; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="booking-option-{option.id}.ics"'
    return response


# ─────────────────────────────────────────────────────────────────────────────
# Booking
# ─────────────────────────────────────────────────────────────────────────────

@login_required
@require_POST
def book(request, optionid):
    option = get_object_or_404(BookingOption.objects.select_related('booking'), id=optionid)
    try:
        answer = book_option(option, request.user)
    except BookingError as exc:
        messages.error(request, str(exc))
    else:
        if answer.waitinglist == AnswerStatus.BOOKED:
            messages.success(request, _('You have booked this option.'))
        else:
            messages.info(request, _('The option is full. You are on the waiting list.'))
    return redirect(_option_url(option.booking.cmid, option.id))
