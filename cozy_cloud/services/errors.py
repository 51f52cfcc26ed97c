"""
Error taxonomy shared by the services and the API layer.
"""


class CozyError(Exception):
    """Base class for failures surfaced to the user as an alert."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(CozyError):
    """Input rejected locally, before any backend call."""


class BackendError(CozyError):
    """The backend answered with an error; message is passed through verbatim."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(CozyError):
    """A requested record does not exist."""
