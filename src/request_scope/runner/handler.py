# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Dynamic loading of the user's request handler.

A handler module is a plain ``.py`` file defining::

    def handler(request, response): ...        # or ``async def``

The executor calls it inside an active request scope, so the handler (and
anything it calls) can raise domain exceptions without passing the request
context around.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

logger = logging.getLogger(__name__)

HANDLER_MODULE_NAME = "request_handler"
HANDLER_ATTRIBUTE = "handler"


class HandlerLoadError(Exception):
    """Raised when the handler module cannot be imported or has no handler."""


def _validate_path(handler_path: str) -> Path:
    path = Path(handler_path)
    if not path.is_file():
        raise HandlerLoadError(f"Handler module not found: {handler_path}")
    if path.suffix != ".py":
        raise HandlerLoadError(f"Handler module must be a .py file: {handler_path}")
    return path


def load_handler(handler_path: str, work_dir: str) -> Callable[..., Any]:
    """Import *handler_path* and return its ``handler`` callable.

    Args:
        handler_path: Path to the handler module
        work_dir: Directory prepended to ``sys.path`` so the module can
                  import its siblings

    Raises:
        HandlerLoadError: The file is missing, fails to import, or does not
            define a callable ``handler``.
    """
    path = _validate_path(handler_path)

    if work_dir and work_dir not in sys.path:
        sys.path.insert(0, work_dir)

    spec = importlib.util.spec_from_file_location(HANDLER_MODULE_NAME, path)
    if spec is None or spec.loader is None:
        raise HandlerLoadError(f"Cannot build an import spec for: {handler_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[HANDLER_MODULE_NAME] = module
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        raise HandlerLoadError(f"Syntax error in handler module: {e}") from e
    except ImportError as e:
        raise HandlerLoadError(f"Import error in handler module: {e}") from e
    except Exception as e:
        raise HandlerLoadError(f"Handler module failed to import: {e}") from e

    handler = getattr(module, HANDLER_ATTRIBUTE, None)
    if handler is None:
        raise HandlerLoadError(
            f"Handler module must define a '{HANDLER_ATTRIBUTE}' function: {handler_path}"
        )
    if not callable(handler):
        raise HandlerLoadError(f"'{HANDLER_ATTRIBUTE}' is not callable in: {handler_path}")

    logger.debug("Loaded handler from %s", path)
    return cast(Callable[..., Any], handler)
