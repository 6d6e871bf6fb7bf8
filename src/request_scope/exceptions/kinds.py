"""Built-in exception kinds.  Each one only fixes a code (and maybe a default message)."""

from __future__ import annotations

from request_scope.exceptions.base import ExceptionBase
from request_scope.exceptions.codes import ErrorCode


class ArgumentInvalidException(ExceptionBase):
    """An incorrect argument was passed to a function, method or constructor."""

    code = ErrorCode.ARGUMENT_INVALID.value


class ArgumentOutOfRangeException(ExceptionBase):
    """An argument is outside its allowed range.

    For example a string or list of the wrong length, or a number outside
    its min/max bounds.
    """

    code = ErrorCode.ARGUMENT_OUT_OF_RANGE.value


class ConflictException(ExceptionBase):
    """Conflicting entities, usually a uniqueness clash in storage."""

    code = ErrorCode.CONFLICT.value


class NotFoundException(ExceptionBase):
    """The requested entity does not exist."""

    code = ErrorCode.NOT_FOUND.value
    default_message = "Not found"


class InternalServerErrorException(ExceptionBase):
    """Internal failure that does not fit any other kind."""

    code = ErrorCode.INTERNAL_SERVER_ERROR.value
    default_message = "Internal server error"
