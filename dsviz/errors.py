# errors.py
#
# Failures of a single operation. None of them is fatal to the application:
# the controller turns each one into a status line and leaves all state as is.


class VisualizerError(Exception):
    """Base class of every operation failure."""


class EngineError(VisualizerError):
    """The engine answered with action "error"."""

    def __init__(self, reason, response=None):
        super().__init__(reason)
        self.reason = reason
        self.response = response


class InvalidInputError(VisualizerError):
    """A user-supplied argument was rejected before any engine call."""

    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class MalformedResponseError(VisualizerError):
    """The engine response could not be parsed or does not match the response schema."""

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.cause = cause
