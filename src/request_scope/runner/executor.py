# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for running handlers inside a request scope.

Plays the boundary layer for one inbound request:
1. Build an AppRequestContext from the input
2. Enter the request scope (RequestContext.store.run)
3. Assign the correlation id before any domain code runs
4. Execute the user handler
5. Report domain failures once and return a structured result
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from request_scope._internal.ids import RequestIdGenerator, UuidRequestIdGenerator
from request_scope.context import AppRequestContext, RequestContext
from request_scope.errors import ContextNotInitializedError
from request_scope.exceptions import ExceptionBase, InternalServerErrorException
from request_scope.reporting import report_exception
from request_scope.service import get_request_id, set_request_id

from .handler import HandlerLoadError, load_handler
from .schema import ReportingConfigSchema, RunnerInput, RunnerOutput

logger = logging.getLogger(__name__)


class Executor:
    """Executes a handler for one request with the request context active.

    Unexpected handler errors are wrapped in
    :class:`InternalServerErrorException` (original attached as ``cause``)
    so every failure leaves as a serialized record carrying the request's
    correlation id.  :class:`ContextNotInitializedError` is a wiring defect
    and is never converted: it propagates out of :meth:`execute`.

    Example:
        executor = Executor()
        output = await executor.execute(input_data)

        # Deterministic ids in tests:
        executor = Executor(id_generator=FixedIds("req-1"))
    """

    def __init__(self, id_generator: RequestIdGenerator | None = None) -> None:
        self._id_generator: RequestIdGenerator = id_generator or UuidRequestIdGenerator()
        self._handlers: dict[Path, Callable[..., Any]] = {}

    async def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Run the handler described by *input_data*.

        Returns:
            RunnerOutput with the handler result, or the serialized error.
        """
        try:
            return await self._execute_internal(input_data)
        except ContextNotInitializedError:
            raise
        except HandlerLoadError as e:
            return RunnerOutput(
                success=False,
                error_type="HandlerLoadError",
                message=str(e),
            )

    async def _execute_internal(self, input_data: RunnerInput) -> RunnerOutput:
        handler = self._get_handler(input_data)
        request_id = input_data.request_id or self._id_generator.new_id()
        ctx: AppRequestContext[Any, dict[str, Any]] = AppRequestContext(input_data.request, {})

        return await RequestContext.store.run(
            ctx,
            self._handle_request,
            ctx,
            handler,
            request_id,
            input_data.reporting,
        )

    def _get_handler(self, input_data: RunnerInput) -> Callable[..., Any]:
        """Return the handler for *input_data*, importing its module only once.

        Re-running a handler module would redefine any exception kinds it
        declares, so modules are cached per resolved path for the lifetime
        of the executor.
        """
        key = Path(input_data.handler_path).resolve()
        handler = self._handlers.get(key)
        if handler is None:
            handler = load_handler(input_data.handler_path, input_data.work_dir)
            self._handlers[key] = handler
        return handler

    async def _handle_request(
        self,
        ctx: AppRequestContext[Any, dict[str, Any]],
        handler: Callable[..., Any],
        request_id: str,
        reporting: ReportingConfigSchema,
    ) -> RunnerOutput:
        set_request_id(request_id)
        logger.debug("Handling request %s", request_id)

        try:
            result = await self._run_handler(handler, ctx)
        except ExceptionBase as exc:
            record = report_exception(exc, include_stack=reporting.include_stack)
            return RunnerOutput(
                success=False,
                request_id=get_request_id(),
                response=ctx.response,
                error=record,
                error_type=type(exc).__name__,
                message=exc.message,
            )

        logger.debug("Request %s completed", request_id)
        return RunnerOutput(
            success=True,
            request_id=get_request_id(),
            result=result,
            response=ctx.response,
        )

    async def _run_handler(
        self,
        handler: Callable[..., Any],
        ctx: AppRequestContext[Any, dict[str, Any]],
    ) -> Any:
        """Call the handler, awaiting it if async.

        Raises:
            ExceptionBase: Raised by the handler, or an
                InternalServerErrorException wrapping any other error.
        """
        try:
            result = handler(ctx.request, ctx.response)
            if inspect.isawaitable(result):
                result = await result
            return result
        except (ExceptionBase, ContextNotInitializedError):
            raise
        except Exception as e:
            raise InternalServerErrorException(cause=e) from e
