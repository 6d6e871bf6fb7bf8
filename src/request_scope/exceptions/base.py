"""ExceptionBase — correlation-aware domain exceptions and their wire record."""

from __future__ import annotations

import json
import traceback
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from request_scope import service


class SerializedException(BaseModel):
    """Transport-safe record of an :class:`ExceptionBase`.

    Absent optional fields are left out of every dump.

    Serializes with camelCase keys (``correlationId``) when dumped
    ``by_alias``.  ``stack`` is diagnostic only: call :meth:`redacted`
    before the record reaches an end user.

    Attributes:
        message:        Human-readable message.
        code:           Error code of the exception kind.
        correlation_id: Request id captured when the exception was created.
        stack:          Construction-site stack trace.
        cause:          Flattened string form of the originating error.
        metadata:       Non-sensitive diagnostic key/value data.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    code: str
    correlation_id: str = Field(alias="correlationId")
    stack: str | None = None
    cause: str | None = None
    metadata: dict[str, Any] | None = None

    @model_serializer(mode="wrap")
    def _drop_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}

    def redacted(self) -> SerializedException:
        """Return a copy without ``stack``."""
        return self.model_copy(update={"stack": None})

    def to_dict(self) -> dict[str, Any]:
        """Wire form: camelCase keys, absent optional fields dropped."""
        return self.model_dump(by_alias=True)


class ExceptionBase(Exception):
    """Base class for every domain exception.

    Subclasses are tag-only: they set ``code`` (and optionally
    ``default_message``) and nothing else.  Each code may be claimed by a
    single kind.  Intermediate bases that do not fix a code must be declared
    with ``abstract=True``::

        class PaymentError(ExceptionBase, abstract=True): ...

        class CardDeclinedException(PaymentError):
            code = "CARD_DECLINED"

    The correlation id is read from the ambient request at construction
    time, so an instance can only be created inside
    ``RequestContext.store.run``; elsewhere construction raises
    :class:`~request_scope.errors.ContextNotInitializedError`.

    Parameters:
        message:  Human-readable message.  Falls back to ``default_message``.
        cause:    The error that led to this one.
        metadata: Non-sensitive data to help with debugging.  It ends up in
                  logs, so never put secrets or personal data here.
    """

    code: ClassVar[str]
    default_message: ClassVar[str | None] = None

    _abstract: ClassVar[bool] = True
    _registry: ClassVar[dict[str, type[ExceptionBase]]] = {}

    def __init_subclass__(cls, abstract: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._abstract = abstract
        if abstract:
            return
        code = cls.__dict__.get("code")
        if not isinstance(code, str) or not code:
            raise TypeError(f"{cls.__name__} must define a non-empty string 'code'")
        owner = ExceptionBase._registry.get(code)
        if owner is not None and not _same_definition(owner, cls):
            raise TypeError(
                f"Error code '{code}' is already used by {owner.__qualname__}; "
                f"cannot reuse it for {cls.__qualname__}"
            )
        ExceptionBase._registry[code] = cls

    def __init__(
        self,
        message: str | None = None,
        cause: BaseException | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        if type(self)._abstract:
            raise TypeError(f"{type(self).__name__} is abstract and cannot be instantiated")

        resolved = message if message is not None else type(self).default_message
        if resolved is None:
            raise TypeError(f"{type(self).__name__} requires a message")

        super().__init__(resolved)
        self._message = resolved
        self._cause = cause
        self._metadata: Mapping[str, Any] | None = (
            MappingProxyType(dict(metadata)) if metadata is not None else None
        )
        self._stack = "".join(traceback.format_stack()[:-1])
        self._correlation_id = service.get_request_id()
        if cause is not None:
            self.__cause__ = cause

    # ── read-only fields ─────────────────────────────────────

    @property
    def message(self) -> str:
        return self._message

    @property
    def correlation_id(self) -> str:
        return self._correlation_id

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def metadata(self) -> Mapping[str, Any] | None:
        return self._metadata

    @property
    def stack(self) -> str:
        """Construction-site stack, formatted like a traceback."""
        return f"{type(self).__name__}: {self._message}\n{self._stack}"

    # ── serialization ────────────────────────────────────────

    def serialize(self, include_stack: bool = True) -> SerializedException:
        """Return a plain record safe to log or send over the wire.

        ``cause`` is flattened to a string.  A domain cause is serialized
        recursively (without its stack) and embedded as JSON; any other
        exception becomes ``"TypeName: message"``.
        """
        return SerializedException(
            message=self._message,
            code=self.code,
            correlation_id=self._correlation_id,
            stack=self.stack if include_stack else None,
            cause=_flatten_cause(self._cause),
            metadata=dict(self._metadata) if self._metadata is not None else None,
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # Rebuild from captured fields without reading the ambient request
        state = {
            "message": self._message,
            "cause": self._cause,
            "metadata": dict(self._metadata) if self._metadata is not None else None,
            "stack": self._stack,
            "correlation_id": self._correlation_id,
        }
        return (_restore, (type(self), state))

    @classmethod
    def registered_codes(cls) -> dict[str, type[ExceptionBase]]:
        """Return a snapshot of ``code -> exception kind``."""
        return dict(cls._registry)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self._message!r}, code={self.code!r}, "
            f"correlation_id={self._correlation_id!r})"
        )


def _same_definition(a: type, b: type) -> bool:
    # A re-executed module produces a new class object for the same kind
    return a.__module__ == b.__module__ and a.__qualname__ == b.__qualname__


def _restore(cls: type[ExceptionBase], state: dict[str, Any]) -> ExceptionBase:
    exc = cls.__new__(cls)
    Exception.__init__(exc, state["message"])
    exc._message = state["message"]
    exc._cause = state["cause"]
    metadata = state["metadata"]
    exc._metadata = MappingProxyType(metadata) if metadata is not None else None
    exc._stack = state["stack"]
    exc._correlation_id = state["correlation_id"]
    if exc._cause is not None:
        exc.__cause__ = exc._cause
    return exc


def _flatten_cause(cause: BaseException | None) -> str | None:
    if cause is None:
        return None
    if isinstance(cause, ExceptionBase):
        return json.dumps(cause.serialize(include_stack=False).to_dict(), default=str)
    detail = str(cause)
    return f"{type(cause).__name__}: {detail}" if detail else type(cause).__name__
