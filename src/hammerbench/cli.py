# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Main CLI entry point for hammerbench."""

import logging
import sys
from collections.abc import Callable
from typing import Annotated, TypeVar

from cyclopts import App, Parameter

from hammerbench import __version__
from hammerbench.common.config import CycleOptions, SuiteConfig, TargetOptions
from hammerbench.common.exceptions import ArgumentValidationError, HammerBenchError
from hammerbench.common.logging import setup_rich_logging

logger = logging.getLogger(__name__)

app = App(
    name="hammerbench",
    help="Benchmark PostgreSQL builds with the HammerDB TPC-C workload",
    version=__version__,
    help_on_error=True,
)

ConfigT = TypeVar("ConfigT", bound=TargetOptions)


def _run_or_exit(
    command: str, func: Callable[[ConfigT], object], config: ConfigT
) -> None:
    """Run a command, turning hammerbench errors into exit status 1."""
    setup_rich_logging(verbose=config.verbose)
    try:
        func(config)
    except ArgumentValidationError as e:
        logger.error(str(e))
        app.help_print([command])
        sys.exit(1)
    except HammerBenchError as e:
        logger.error(str(e))
        sys.exit(1)


@app.command(name="run")
def run(config: Annotated[SuiteConfig | None, Parameter(name="*")] = None) -> None:
    """Run every permutation for a number of iterations and print the result summary.

    Loads the configuration file(s) into the environment, benchmarks the base
    server and each preload library, and stops at the first failure.
    """
    from hammerbench.cli_runner import run_suite

    _run_or_exit("run", run_suite, config or SuiteConfig())


@app.command(name="cycle")
def cycle(options: Annotated[CycleOptions | None, Parameter(name="*")] = None) -> None:
    """Run a single build+run cycle with settings from the environment.

    Connection and workload options override the matching environment variables.
    """
    from hammerbench.cli_runner import run_cycle

    _run_or_exit("cycle", run_cycle, options or CycleOptions())
