class BookingError(Exception):
    """Base class for every error raised by the booking core."""


class InvalidArgument(BookingError, ValueError):
    """Missing or malformed input. A caller bug, never worth retrying."""


class NotFound(BookingError, LookupError):
    """No route or record matched the request."""


class StoreError(BookingError, OSError):
    """A backing file could not be created, read or written."""

    def __init__(self, operation: str, path: str):
        super().__init__(f"Failed to {operation} {path}")
        self.operation = operation
        self.path = path
