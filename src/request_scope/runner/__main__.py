# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Entry point for the request-scope runner.

Usage:
    python -m request_scope.runner < input.json > output.json

Reads one request as JSON from stdin, runs the handler inside a request
scope, and writes JSON output to stdout.  Error records use camelCase keys
(``correlationId``).

Exit codes:
    0: Success
    1: Failure (error details in JSON output)
"""

from __future__ import annotations

import asyncio
import logging
import sys

from .executor import Executor
from .schema import RunnerInput, RunnerOutput


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING)

    try:
        input_data = RunnerInput.model_validate_json(sys.stdin.read())
        output = asyncio.run(Executor().execute(input_data))
        print(output.model_dump_json(by_alias=True))
        return 0 if output.success else 1

    except Exception as e:
        # Always emit valid JSON, including for wiring defects
        error_output = RunnerOutput(
            success=False,
            error_type=type(e).__name__,
            message=str(e),
        )
        print(error_output.model_dump_json(by_alias=True))
        return 1


if __name__ == "__main__":
    sys.exit(main())
