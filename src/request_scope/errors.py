"""Programmer-error signals raised by the context accessors."""

from __future__ import annotations


class ContextNotInitializedError(RuntimeError):
    """Raised when request-context wiring is missing or wrong.

    Signals a defect in the boundary layer (no ``store.run`` around the
    handler, a context of the wrong type, or a request id that was never
    assigned).  It is deliberately *not* a domain exception: nothing in this
    package catches it, and callers should let it fail the request.
    """

    def __init__(self, message: str, *, expected: type | None = None) -> None:
        self.expected = expected
        super().__init__(message)
