"""Errors raised by the contact submission pipeline."""


class ContactError(Exception):
    """Base class for contact pipeline errors."""

    status_code = 500
    default_message = "Something went wrong!"

    def __init__(self, message: str | None = None, detail: str | None = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(ContactError):
    """One or more submitted fields failed validation.

    ``errors`` always lists every violated field, never just the first one.
    """

    status_code = 400
    default_message = "Validation errors"

    def __init__(self, errors: list[dict[str, str]], message: str | None = None) -> None:
        self.errors = errors
        super().__init__(message)

    @property
    def fields(self) -> list[str]:
        return [error["field"] for error in self.errors]


class PersistenceError(ContactError):
    """The submission store could not be reached, written or read."""

    status_code = 500
    default_message = "Failed to submit contact form. Please try again later."


class NotificationError(ContactError):
    """The export/notification side channel failed. Never reaches the client."""

    default_message = "Failed to deliver contact notification"


class NotFoundError(ContactError):
    """No route matched the request."""

    status_code = 404
    default_message = "API endpoint not found"
