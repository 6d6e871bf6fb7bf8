"""request_scope — request-scoped context and correlation-aware exceptions.

A context entered with ``RequestContext.store.run`` is visible to every call
below it, across ``await`` points, without being passed as a parameter.
Domain exceptions read the request's correlation id from it when they are
created.
"""

from request_scope.context import AppRequestContext, RequestContext
from request_scope.errors import ContextNotInitializedError
from request_scope.exceptions import (
    ArgumentInvalidException,
    ArgumentOutOfRangeException,
    ConflictException,
    ErrorCode,
    ExceptionBase,
    InternalServerErrorException,
    NotFoundException,
    SerializedException,
)
from request_scope.reporting import report_exception
from request_scope.service import get_context, get_request_id, set_request_id
from request_scope.store import ContextStore

__all__ = [
    "AppRequestContext",
    "ArgumentInvalidException",
    "ArgumentOutOfRangeException",
    "ConflictException",
    "ContextNotInitializedError",
    "ContextStore",
    "ErrorCode",
    "ExceptionBase",
    "InternalServerErrorException",
    "NotFoundException",
    "RequestContext",
    "SerializedException",
    "get_context",
    "get_request_id",
    "report_exception",
    "set_request_id",
]
