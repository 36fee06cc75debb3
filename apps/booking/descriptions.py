"""
Booking option description — the view model behind every rendering of a
booking option (website modal, calendar entry, iCal event, mail).

Usage:
    description = BookingOptionDescription(booking, option, user=request.user)
    context = description.export_for_template().as_dict()

The option passed in is only used for its ids; all displayed values are read
from a freshly resolved copy, so callers may hand in partial objects.
"""
from dataclasses import asdict, dataclass, field
from functools import partial
from typing import Any, Optional
from urllib.parse import urlencode

from django.conf import settings
from django.urls import reverse
from django.utils.html import format_html
from django.utils.translation import gettext as _

from .formatting import format_text
from .models import DisplayContext
from .options import get_option_details
from .sessions import return_array_of_sessions


@dataclass(frozen=True)
class RenderModel:
    """Template context of a booking option description."""
    title: Optional[str] = None
    modalcounter: Any = None
    description: str = ''
    statusdescription: str = ''
    location: Optional[str] = None
    address: Optional[str] = None
    institution: Optional[str] = None
    duration: Optional[str] = None          # reserved, never filled
    dates: list = field(default_factory=list)
    booknowbutton: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


class BookingOptionDescription:
    """
    Collects and formats the fields of one booking option for a template.

    Args:
        booking:            Booking the option belongs to (provides `cmid`).
        option:             Option to describe; only `id` and `optionid` are read.
        event:              Calendar event the description is for, if any.
        description_param:  DisplayContext selecting the call to action.
        with_custom_fields: Include session custom fields in `dates`.
        user:               User whose booking state drives the status texts.
        resolver:           Callable (cmid, optionid) -> BookingOptionDetails.
        session_lister:     Callable (details, event, description_param, with_custom_fields) -> list.
        base_url:           Absolute site root for links, defaults to settings.SITE_URL.
    """

    def __init__(self, booking, option, event=None,
                 description_param=DisplayContext.WEBSITE,
                 with_custom_fields=True, *,
                 user=None, resolver=None, session_lister=None, base_url=None):
        resolver = resolver or partial(get_option_details, user=user)
        session_lister = session_lister or return_array_of_sessions
        base_url = settings.SITE_URL if base_url is None else base_url

        details = resolver(booking.cmid, option.id)
        resolved = details.option

        # Straight from the stored option
        self.title = resolved.text
        self.location = resolved.location
        self.address = resolved.address
        self.institution = resolved.institution

        # Several modals can live on one page; the option id keeps them apart
        self.modalcounter = resolved.id

        self.duration = None
        self.description = format_text(resolved.description)
        self.statusdescription = details.get_option_text()

        self.dates = session_lister(details, event, description_param, with_custom_fields)

        # The link keeps the option id as handed in by the caller
        link = self._option_link(base_url, booking.cmid, getattr(option, 'optionid', option.id))

        self.booknowbutton = None
        if description_param == DisplayContext.WEBSITE:
            if details.iambooked:
                self.booknowbutton = _('You are already booked for this option.')
            elif details.onwaitinglist:
                self.booknowbutton = _('You are on the waiting list for this option.')
        elif description_param == DisplayContext.CALENDAR:
            self.booknowbutton = format_html(
                '<a href="{}" class="btn btn-primary">{}</a>', link, _('Go to booking option'),
            )
        elif description_param == DisplayContext.ICAL:
            self.booknowbutton = f"{_('Go to booking option')}: {link}"
        elif description_param == DisplayContext.MAIL:
            self.booknowbutton = format_html(
                '{}: <a href="{}" target="_blank">{}</a>', _('Go to booking option'), link, link,
            )

    @staticmethod
    def _option_link(base_url, cmid, optionid) -> str:
        query = urlencode({
            'id': cmid,
            'optionid': optionid,
            'action': 'showonlyone',
            'whichview': 'showonlyone',
        })
        return f"{base_url}{reverse('booking:view')}?{query}"

    def export_for_template(self, output=None) -> RenderModel:
        return RenderModel(
            title=self.title,
            modalcounter=self.modalcounter,
            description=self.description,
            statusdescription=self.statusdescription,
            location=self.location,
            address=self.address,
            institution=self.institution,
            duration=self.duration,
            dates=list(self.dates),
            booknowbutton=self.booknowbutton,
        )
