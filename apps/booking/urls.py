"""
Booking module URLs.

  /booking/view/?id=<cmid>[&optionid=<uuid>&action=showonlyone]   Option page (website)
  /booking/join/?id&optionid&sessionid&fieldid                     Meeting join redirect
  /booking/api/calendar/<cmid>/                                    Calendar entries (JSON)
  /booking/ics/<uuid:optionid>/                                    iCal download
  /booking/book/<uuid:optionid>/                                   Book (POST)
"""
from django.urls import path
from . import views

app_name = 'booking'

urlpatterns = [
    path('view/',                       views.view_option,  name='view'),
    path('join/',                       views.join_session, name='join'),
    path('api/calendar/<int:cmid>/',    views.api_calendar, name='api_calendar'),
    path('ics/<uuid:optionid>/',        views.option_ics,   name='option_ics'),
    path('book/<uuid:optionid>/',       views.book,         name='book'),
]
