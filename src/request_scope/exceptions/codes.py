"""Error codes — stable public identifiers, one per exception kind.

Log queries and API clients match on these strings.  Renaming one is a
breaking change; add new members instead.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    ARGUMENT_INVALID = "ARGUMENT_INVALID"
    ARGUMENT_OUT_OF_RANGE = "ARGUMENT_OUT_OF_RANGE"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


ARGUMENT_INVALID = ErrorCode.ARGUMENT_INVALID.value
ARGUMENT_OUT_OF_RANGE = ErrorCode.ARGUMENT_OUT_OF_RANGE.value
CONFLICT = ErrorCode.CONFLICT.value
NOT_FOUND = ErrorCode.NOT_FOUND.value
INTERNAL_SERVER_ERROR = ErrorCode.INTERNAL_SERVER_ERROR.value
