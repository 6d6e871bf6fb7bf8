"""ContextStore — ambient, request-scoped values backed by ``contextvars``."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContextStore(Generic[T]):
    """Associates one context object with the dynamic extent of an operation.

    Every call made from inside :meth:`run` (directly, after an ``await``, or
    from a task spawned within it) sees the same object through
    :meth:`current_context` without it being passed around.  Concurrent
    asyncio tasks each carry their own copy of the underlying
    :class:`~contextvars.ContextVar`, so interleaved requests never observe
    each other's context.

    Parameters:
        name: Name of the underlying ``ContextVar`` (shows up in reprs).
    """

    def __init__(self, name: str = "context_store") -> None:
        self._var: ContextVar[T | None] = ContextVar(name, default=None)

    @property
    def name(self) -> str:
        return self._var.name

    # ── scoping ──────────────────────────────────────────────

    @contextmanager
    def scope(self, context: T) -> Iterator[T]:
        """Make *context* ambient until the ``with`` block exits.

        Nested scopes shadow outer ones and restore them on exit, whether
        the block finishes normally or raises.
        """
        token = self._var.set(context)
        logger.debug("Entered %s scope: %r", self.name, context)
        try:
            yield context
        finally:
            self._var.reset(token)
            logger.debug("Exited %s scope: %r", self.name, context)

    async def run(
        self,
        context: T,
        operation: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Call *operation* with *context* ambient for its full extent.

        *operation* may be a coroutine function or a plain callable; an
        awaitable result is awaited inside the scope.  The return value is
        passed through and exceptions propagate unchanged.
        """
        with self.scope(context):
            result = operation(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result

    def run_sync(
        self,
        context: T,
        operation: Callable[..., Any],
        *args: Any,
        **kwargs: Any,
    ) -> Any:
        """Synchronous :meth:`run`.  *operation* must not return an awaitable."""
        with self.scope(context):
            result = operation(*args, **kwargs)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise TypeError(
                    f"run_sync() got an awaitable from {operation!r}; use run() instead"
                )
            return result

    # ── lookup ───────────────────────────────────────────────

    def current_context(self) -> T | None:
        """Return the ambient context, or ``None`` outside any scope."""
        return self._var.get()

    def __repr__(self) -> str:
        return f"ContextStore(name={self.name!r})"
