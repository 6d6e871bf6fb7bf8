"""Single reporting point for domain exceptions."""

from __future__ import annotations

import logging

from request_scope.exceptions.base import ExceptionBase, SerializedException

logger = logging.getLogger(__name__)


def report_exception(
    exc: ExceptionBase,
    *,
    log: logging.Logger | None = None,
    include_stack: bool = False,
) -> SerializedException:
    """Log *exc* once and return its serialized record.

    The full record, stack included, goes to the log as
    ``extra={"exception": ...}``.  The returned record has ``stack``
    removed unless *include_stack* is set, so it can be embedded in a
    user-facing response as-is.

    Raises:
        TypeError: *exc* is not a domain exception.
    """
    if not isinstance(exc, ExceptionBase):
        raise TypeError(
            f"report_exception() expects an ExceptionBase, got {type(exc).__name__}"
        )

    record = exc.serialize(include_stack=True)
    (log or logger).error(
        "%s [%s] correlation_id=%s",
        record.message,
        record.code,
        record.correlation_id,
        extra={"exception": record.to_dict()},
    )
    return record if include_stack else record.redacted()
