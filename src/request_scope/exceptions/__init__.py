"""Domain exception taxonomy."""

from request_scope.exceptions.base import ExceptionBase, SerializedException
from request_scope.exceptions.codes import (
    ARGUMENT_INVALID,
    ARGUMENT_OUT_OF_RANGE,
    CONFLICT,
    INTERNAL_SERVER_ERROR,
    NOT_FOUND,
    ErrorCode,
)
from request_scope.exceptions.kinds import (
    ArgumentInvalidException,
    ArgumentOutOfRangeException,
    ConflictException,
    InternalServerErrorException,
    NotFoundException,
)

__all__ = [
    "ARGUMENT_INVALID",
    "ARGUMENT_OUT_OF_RANGE",
    "CONFLICT",
    "INTERNAL_SERVER_ERROR",
    "NOT_FOUND",
    "ArgumentInvalidException",
    "ArgumentOutOfRangeException",
    "ConflictException",
    "ErrorCode",
    "ExceptionBase",
    "InternalServerErrorException",
    "NotFoundException",
    "SerializedException",
]
