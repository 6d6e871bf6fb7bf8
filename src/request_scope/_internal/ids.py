"""Request-id generation abstraction.  Inject a deterministic one in tests."""

from __future__ import annotations

import uuid
from typing import Protocol


class RequestIdGenerator(Protocol):
    """Protocol for minting correlation ids at the request boundary."""

    def new_id(self) -> str: ...


class UuidRequestIdGenerator:
    """Default generator producing random uuid4 hex strings."""

    def new_id(self) -> str:
        return uuid.uuid4().hex
