# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output.

These Pydantic models define the JSON contract of
``python -m request_scope.runner``.  The ``error`` field embeds the
serialized exception record unchanged, so its keys are camelCase when the
output is dumped ``by_alias``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from request_scope.exceptions.base import SerializedException


class ReportingConfigSchema(BaseModel):
    """How failures are reported back to the caller.

    Attributes:
        include_stack: Keep ``stack`` in the returned error record.  Leave
                       off for anything user-facing.
    """

    include_stack: bool = False


class RunnerInput(BaseModel):
    """Complete input read from stdin.

    Attributes:
        request: Opaque inbound request representation handed to the handler
        request_id: Correlation id propagated from upstream; a fresh one is
                    generated when omitted
        handler_path: Absolute path to the handler module
        work_dir: Working directory for the handler
        reporting: Error reporting options
    """

    request: Any = None
    request_id: str | None = None
    handler_path: str
    work_dir: str
    reporting: ReportingConfigSchema = Field(default_factory=ReportingConfigSchema)


class RunnerOutput(BaseModel):
    """Complete output written to stdout.

    The runner always outputs valid JSON matching this schema, even on
    errors.

    Attributes:
        success: Whether the handler completed without raising
        request_id: Correlation id the request ran under
        result: Handler return value (on success)
        response: Outbound response representation as left by the handler
        error: Serialized domain exception (on domain failure)
        error_type: Error class name (on failure)
        message: Error message for non-domain failures
    """

    success: bool
    request_id: str = ""
    result: Any = None
    response: dict[str, Any] = Field(default_factory=dict)
    error: SerializedException | None = None
    error_type: str = ""
    message: str = ""
