"""
Custom exceptions for the booking module.
Raised by the option resolver and caught in views.py.
"""


class BookingError(Exception):
    """Base exception for all booking module errors."""
    pass


class OptionNotFoundError(BookingError):
    """Raised when no live option matches the given (cmid, optionid) pair."""

    def __init__(self, cmid, optionid):
        self.cmid = cmid
        self.optionid = optionid
        super().__init__(f"Booking option {optionid} not found in course module {cmid}.")


class SessionNotFoundError(BookingError):
    """Raised when a join link refers to a session or field the option does not have."""
    pass


class AlreadyAnsweredError(BookingError):
    """Raised when the user is already booked or waiting for the option."""
    pass
