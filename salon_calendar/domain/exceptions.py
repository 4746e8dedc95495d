class BookingDataError(ValueError):
    """Raised when a booking record violates a data-integrity rule."""
    pass


class MalformedTimeError(BookingDataError):
    """Raised when booking_time does not parse as zero-padded HH:MM."""
    pass


class MalformedDateError(BookingDataError):
    """Raised when booking_date does not parse as YYYY-MM-DD."""
    pass


class UnknownStatusError(BookingDataError):
    """Raised when a status falls outside pending/confirmed/cancelled/completed."""
    pass
