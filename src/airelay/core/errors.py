"""Error taxonomy for the AI Relay.

Every failure a route handler can produce is one of the classes below.  Each
carries the HTTP status it maps to and a message that is safe to show the
caller.  Provider error detail never ends up in a message; it is logged
server-side where the failure is caught.
"""

from __future__ import annotations


class RelayError(Exception):
    """Base class for all caller-visible failures.

    Attributes:
        message: Text returned to the caller as ``{"error": message}``.
        status_code: HTTP status code for the error response.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingInput(RelayError):
    """A required request field or uploaded file is absent or blank."""

    status_code = 400


class InvalidBody(RelayError):
    """The request body could not be parsed into the endpoint's fields."""

    status_code = 400

    def __init__(self, message: str = "Invalid request body.") -> None:
        super().__init__(message)


class InvalidModel(RelayError):
    """The requested model id is not in the allow-list."""

    status_code = 400

    def __init__(self, allowed: tuple[str, ...]) -> None:
        super().__init__(f"Invalid model. Choose from: {', '.join(allowed)}")
        self.allowed = allowed


class InvalidVideoUrl(RelayError):
    """No YouTube video id could be found in the supplied URL."""

    status_code = 400


class NoTranscript(RelayError):
    """The transcript service returned no segments for the video."""

    status_code = 404


class UpstreamFailure(RelayError):
    """The provider or transcript service call failed."""

    status_code = 500


class InternalFailure(RelayError):
    """An unexpected exception escaped a handler."""

    status_code = 500

    def __init__(self, message: str = "Internal server error.") -> None:
        super().__init__(message)
