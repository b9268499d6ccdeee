from __future__ import annotations


class EventHubError(Exception):
    """
    Base class for errors raised by the persistence layer.
    `status` is the HTTP status the API layer answers with.
    """

    status = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(EventHubError):
    """Malformed or missing input (empty field, bad email, bad date/time)."""

    status = 400


class EventReferenceError(EventHubError):
    """A write references an Event that does not exist."""

    status = 404

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__("Cannot create booking: referenced event does not exist.")


class EventNotFoundError(EventHubError):
    status = 404

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event {event_id} was not found.")


class DuplicateSlugError(EventHubError):
    """Raised when the unique slug index rejects a write."""

    status = 409

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f'An event with slug "{slug}" already exists.')


class ConnectivityError(EventHubError):
    """The document store could not be reached."""

    status = 503
