"""Typed failures for one alignment attempt.

Every error is terminal for the attempt that raised it: callers show the
message and wait for the user to resubmit.
"""

SCHEMA_ERROR_MESSAGE = "Alignment analysis failed to produce valid data."
TRANSPORT_ERROR_MESSAGE = "Something went wrong during analysis."


class AlignmentError(RuntimeError):
    """Base class for failures surfaced to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(AlignmentError):
    """Raised locally when the input is incomplete. No engine call is made."""


class TransportError(AlignmentError):
    """Raised when the outbound engine call could not complete"""


class SchemaError(AlignmentError):
    """Raised when the engine replied but the reply is not a valid AnalysisResult."""

    def __init__(self, message: str = SCHEMA_ERROR_MESSAGE) -> None:
        super().__init__(message)


class SessionBusyError(AlignmentError):
    """Raised when a session is asked to submit while a request is outstanding."""
