# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Load KEY=VALUE configuration files into the process environment.

The files use the same syntax a shell would `source` (optionally prefixed with
`export`). Keys are not validated here: unknown keys are exported as-is so that
every spawned subprocess sees them. The typed view of the keys hammerbench
itself understands is BenchmarkSettings.
"""

import logging
import os
from collections.abc import Mapping, MutableMapping
from pathlib import Path

from dotenv import dotenv_values

from hammerbench.common.enums import BenchmarkType
from hammerbench.common.exceptions import ConfigNotFoundError

logger = logging.getLogger(__name__)

__all__ = [
    "apply_environment",
    "default_benchmark_config_path",
    "load_env_files",
]


def default_benchmark_config_path(
    config_file: Path, benchmark_type: BenchmarkType
) -> Path:
    """Location of the benchmark-specific override file next to the primary file.

    Example: pg.env -> hammerdb/hammerdb.env
    """
    name = str(benchmark_type)
    return Path(config_file).parent / name / f"{name}.env"


def load_env_files(
    primary: Path, secondary: Path | None = None
) -> dict[str, str]:
    """Read the primary and optional secondary configuration files.

    Later files override earlier ones per key. Keys without a value are dropped.

    Raises:
        ConfigNotFoundError: If the primary file does not exist.
    """
    primary = Path(primary)
    if not primary.is_file():
        raise ConfigNotFoundError(primary)

    sources = [primary]
    if secondary is not None:
        secondary = Path(secondary)
        if secondary.is_file():
            sources.append(secondary)
        else:
            logger.debug(f"Benchmark configuration {secondary} not found, skipping")

    merged: dict[str, str] = {}
    for source in sources:
        logger.info(f"Loading configuration from {source}")
        values = dotenv_values(source)
        merged.update({k: v for k, v in values.items() if v is not None})
    return merged


def apply_environment(
    values: Mapping[str, str], environ: MutableMapping[str, str] | None = None
) -> None:
    """Export values into the environment, overriding existing keys."""
    target = os.environ if environ is None else environ
    for key, value in values.items():
        target[key] = value
    logger.debug(f"Exported {len(values)} configuration values")
