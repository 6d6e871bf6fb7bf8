"""Typed accessors for the ambient :class:`AppRequestContext`."""

from __future__ import annotations

from typing import Any

from request_scope.context import AppRequestContext, RequestContext
from request_scope.errors import ContextNotInitializedError


def get_context() -> AppRequestContext[Any, Any]:
    """Return the ambient context narrowed to :class:`AppRequestContext`.

    Raises:
        ContextNotInitializedError: No context is active, or the active one
            is not an ``AppRequestContext``.
    """
    ctx = RequestContext.current_context()
    if ctx is None:
        raise ContextNotInitializedError(
            "No request context is active; wrap request handling in "
            "RequestContext.store.run()",
            expected=AppRequestContext,
        )
    if not isinstance(ctx, AppRequestContext):
        raise ContextNotInitializedError(
            f"Current context is not an instance of {AppRequestContext.__name__} "
            f"(got {type(ctx).__name__})",
            expected=AppRequestContext,
        )
    return ctx


def set_request_id(request_id: str) -> None:
    """Assign the correlation id of the ambient request.

    Called once per request by the boundary layer, before any domain code.
    """
    if not request_id:
        raise ValueError("request_id must be a non-empty string")
    get_context().request_id = request_id


def get_request_id() -> str:
    """Return the correlation id of the ambient request.

    Raises:
        ContextNotInitializedError: Outside a request, or inside one whose
            id has not been assigned yet.
    """
    request_id = get_context().request_id
    if request_id is None:
        raise ContextNotInitializedError(
            "Request id has not been set for the current request; "
            "call set_request_id() at the request boundary",
            expected=AppRequestContext,
        )
    return request_id
