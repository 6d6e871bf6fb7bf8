# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule: a minimal request boundary around a user handler.

Usage:
    python -m request_scope.runner < input.json > output.json

Exports:
    Executor: Runs one request inside a request scope
    RunnerInput: Input schema
    RunnerOutput: Output schema
"""

from .executor import Executor
from .handler import HandlerLoadError, load_handler
from .schema import ReportingConfigSchema, RunnerInput, RunnerOutput

__all__ = [
    "Executor",
    "HandlerLoadError",
    "ReportingConfigSchema",
    "RunnerInput",
    "RunnerOutput",
    "load_handler",
]
