# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Entry point for running one benchmark cycle in an isolated process.

Usage: python -m hammerbench.orchestrator.subprocess_runner <cycle_config.json>

The exit code is 0 on success and 1 on any benchmark error, which is what the
orchestrator uses to decide whether to abort the suite.
"""

import logging
import sys
from pathlib import Path

import orjson
from pydantic import ValidationError

from hammerbench.common.config import CycleConfig
from hammerbench.common.exceptions import HammerBenchError
from hammerbench.common.logging import setup_rich_logging
from hammerbench.orchestrator.cycle import BenchmarkCycle

logger = logging.getLogger(__name__)


def load_cycle_config(path: Path) -> CycleConfig:
    """Load a cycle configuration written by the orchestrator."""
    return CycleConfig.model_validate(orjson.loads(Path(path).read_bytes()))


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        setup_rich_logging()
        logger.error(
            "Usage: python -m hammerbench.orchestrator.subprocess_runner <cycle_config.json>"
        )
        return 1

    try:
        config = load_cycle_config(Path(argv[0]))
    except (OSError, orjson.JSONDecodeError, ValidationError) as e:
        setup_rich_logging()
        logger.error(f"Unable to load cycle configuration {argv[0]}: {e}")
        return 1

    setup_rich_logging(verbose=config.verbose)
    try:
        BenchmarkCycle(config).run()
    except HammerBenchError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
