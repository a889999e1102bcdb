class GradeVueError(Exception):
    """Base class for all errors raised by gradevue."""


class MalformedUpstreamData(GradeVueError):
    """
    A field or course in an upstream payload could not be coerced.

    Raised by the field coercion helpers and always caught inside the parser,
    which substitutes a safe default and keeps going.
    """


class UpstreamError(GradeVueError):
    """The upstream StudentVue service could not be reached or returned an error."""


class UpstreamTimeout(UpstreamError):
    """The upstream request exceeded its time bound."""

    def __init__(self, message: str = "The server took too long to respond."):
        super().__init__(message)


class UpstreamAuthFailure(UpstreamError):
    """The upstream service rejected the supplied credentials."""
