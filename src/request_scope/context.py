"""RequestContext — the per-request object made ambient by the boundary layer."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from request_scope.store import ContextStore

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class RequestContext(Generic[RequestT, ResponseT]):
    """Pairs the inbound request with the outbound response.

    Both references are fixed at creation.  The objects they point to are
    owned by the transport layer and may still be mutated by collaborators
    (e.g. a handler writing headers into ``response``).

    The context is made ambient with ``RequestContext.store.run(ctx, ...)``
    and read back anywhere below that call with :meth:`current_context`.
    """

    store: ClassVar[ContextStore[RequestContext[Any, Any]]] = ContextStore("request_context")

    def __init__(self, request: RequestT, response: ResponseT) -> None:
        self._request = request
        self._response = response

    @property
    def request(self) -> RequestT:
        return self._request

    @property
    def response(self) -> ResponseT:
        return self._response

    @classmethod
    def current_context(cls) -> RequestContext[Any, Any] | None:
        """Return the ambient context, or ``None`` outside a request.

        Works from any depth of the call graph rooted at ``store.run``,
        including after ``await`` suspension points.
        """
        return cls.store.current_context()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(request={self._request!r}, response={self._response!r})"


class AppRequestContext(RequestContext[RequestT, ResponseT]):
    """Application context carrying the request's correlation id.

    Attributes:
        request_id: Correlation id for the request.  ``None`` until the
                    boundary layer assigns it through
                    :func:`request_scope.service.set_request_id`.
    """

    def __init__(self, request: RequestT, response: ResponseT) -> None:
        super().__init__(request, response)
        self.request_id: str | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(request_id={self.request_id!r})"
