class InvalidTransitionError(ValueError):
    """Raised when a requested status change is not allowed by the transition table."""
    pass


class BookingNotFoundError(LookupError):
    """Raised when a booking id is not present in the current snapshot."""
    pass


class BookingApiError(RuntimeError):
    """Raised when the remote booking API fails (timeouts, network errors, 4xx/5xx)."""
    pass
