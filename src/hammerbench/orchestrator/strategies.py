# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Permutation construction and iteration strategy."""

import logging
import re
from pathlib import Path

from hammerbench.common.config import CycleConfig, SuiteConfig
from hammerbench.orchestrator.models import IterationResult, Permutation

logger = logging.getLogger(__name__)

__all__ = [
    "FixedIterationsStrategy",
    "apply_external_server_policy",
    "build_permutations",
    "preload_server_options",
]


def _sanitize_label(label: str) -> str:
    """Sanitize label to prevent path traversal.

    Args:
        label: Raw label string

    Returns:
        Sanitized label safe for filesystem paths
    """
    sanitized = re.sub(r"[/\\]|\.\.", "", label)
    sanitized = re.sub(r'[<>:"|?*\s]', "", sanitized)
    return sanitized


def preload_server_options(base_options: str, library: str) -> str:
    """Append a shared_preload_libraries setting to the server start options."""
    option = f"-c shared_preload_libraries='{library}'"
    return f"{base_options} {option}" if base_options else option


def build_permutations(
    pg_version: str, base_options: str, preload_libraries: list[str]
) -> list[Permutation]:
    """The base permutation followed by one permutation per preload library."""
    base_label = _sanitize_label(f"PG-{pg_version}")
    permutations = [Permutation(label=base_label, server_options=base_options)]
    for library in preload_libraries:
        permutations.append(
            Permutation(
                label=_sanitize_label(f"{base_label}-{library}"),
                preload_library=library,
                server_options=preload_server_options(base_options, library),
            )
        )
    return permutations


def apply_external_server_policy(config: SuiteConfig) -> SuiteConfig:
    """Adjust a suite that runs against an externally managed server.

    Without --init the server and its data are not ours: repeated iterations over
    the same pre-seeded data are not meaningful and the data directory must never
    be removed. Returns a copy with iterations forced to 1 and removal disabled.
    """
    if config.initialize:
        return config

    logger.warning(
        "No --init given: benchmarking an already running, externally managed "
        f"server. Forcing iterations to 1 (requested {config.iterations}) and "
        "disabling data directory removal."
    )
    return config.model_copy(update={"iterations": 1, "remove_data_dir": False})


class FixedIterationsStrategy:
    """Run the same cycle a fixed number of times per permutation.

    Iterations are labeled "1".."N" and stored flat under the permutation
    directory: <work_dir>/<permutation>/<N>/.

    Attributes:
        num_iterations: Number of iterations per permutation
    """

    def __init__(self, num_iterations: int) -> None:
        if num_iterations < 1:
            raise ValueError(
                f"Invalid iteration count: {num_iterations}. At least 1 iteration is required."
            )
        self.num_iterations = num_iterations

    def should_continue(self, results: list[IterationResult]) -> bool:
        """Continue until we've run num_iterations."""
        return len(results) < self.num_iterations

    def get_run_label(self, run_index: int) -> str:
        """One-based iteration number as a string."""
        return str(run_index + 1)

    def get_run_path(self, base_dir: Path, run_index: int) -> Path:
        """Per-iteration working directory: base_dir/<N>/."""
        return Path(base_dir) / self.get_run_label(run_index)

    def get_next_config(
        self, base_config: CycleConfig, permutation: Permutation, work_dir: Path
    ) -> CycleConfig:
        """Cycle configuration for the next iteration of a permutation."""
        settings = base_config.settings.model_copy(
            update={"pg_initdb_opts": permutation.server_options}
        )
        return base_config.model_copy(
            update={"work_dir": work_dir, "settings": settings}
        )
