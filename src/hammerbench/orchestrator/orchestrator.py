# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Permutation x iteration driver for hammerbench."""

import logging
import sys
from pathlib import Path

import orjson

from hammerbench.common.config import CycleConfig
from hammerbench.common.constants import BANNER_WIDTH, CYCLE_CONFIG_NAME, RESULT_MARKER
from hammerbench.common.exceptions import BenchmarkRunFailedError
from hammerbench.common.process import run_logged
from hammerbench.orchestrator.models import IterationResult, Permutation
from hammerbench.orchestrator.strategies import FixedIterationsStrategy

logger = logging.getLogger(__name__)

__all__ = [
    "BenchmarkOrchestrator",
    "extract_result_lines",
]


def extract_result_lines(log_path: Path) -> list[str]:
    """Lines of a cycle log carrying the HammerDB result marker, in order."""
    try:
        with open(log_path, encoding="utf-8", errors="replace") as f:
            return [line.rstrip("\n") for line in f if RESULT_MARKER in line]
    except FileNotFoundError:
        return []


class BenchmarkOrchestrator:
    """Runs every permutation for a fixed number of iterations.

    Permutations run in order and iterations within a permutation run in order,
    each as a separate cycle process so a crashing cycle cannot take the driver
    down with it. The first failing iteration aborts the whole suite.

    Layout under base_dir:
        <label>/<N>/                              per-iteration working directory
        <benchmark_name>.<label>.<N>.log          combined cycle output
        <benchmark_name>.summary.<label>.log      result lines of all iterations
    """

    def __init__(self, base_dir: Path, benchmark_name: str) -> None:
        self.base_dir = Path(base_dir)
        self.benchmark_name = benchmark_name

    def summary_path(self, permutation: Permutation) -> Path:
        return self.base_dir / f"{self.benchmark_name}.summary.{permutation.label}.log"

    def log_path(self, permutation: Permutation, run_label: str) -> Path:
        return self.base_dir / f"{self.benchmark_name}.{permutation.label}.{run_label}.log"

    def execute(
        self,
        base_config: CycleConfig,
        permutations: list[Permutation],
        strategy: FixedIterationsStrategy,
    ) -> dict[str, list[IterationResult]]:
        """Execute every permutation in order.

        Returns:
            Iteration results keyed by permutation label.

        Raises:
            BenchmarkRunFailedError: On the first failing iteration. Later
                iterations and permutations are not started.
        """
        logger.info(
            f"Starting {len(permutations)} permutation(s) with strategy: "
            f"{strategy.__class__.__name__}"
        )
        results: dict[str, list[IterationResult]] = {}
        for permutation in permutations:
            results[permutation.label] = self.execute_permutation(
                base_config, permutation, strategy
            )
        return results

    def execute_permutation(
        self,
        base_config: CycleConfig,
        permutation: Permutation,
        strategy: FixedIterationsStrategy,
    ) -> list[IterationResult]:
        """Execute all iterations of one permutation and build its summary file."""
        summary_path = self.summary_path(permutation)
        # Stale results from a previous invocation must not leak into the summary.
        summary_path.write_text("", encoding="utf-8")

        permutation_dir = self.base_dir / permutation.label
        results: list[IterationResult] = []
        run_index = 0

        while strategy.should_continue(results):
            run_label = strategy.get_run_label(run_index)
            logger.info("=" * BANNER_WIDTH)
            logger.info(
                f"[{self.benchmark_name}: {permutation.label}] "
                f"Iteration {run_label} of {strategy.num_iterations}"
            )
            logger.info("=" * BANNER_WIDTH)

            iteration_dir = strategy.get_run_path(permutation_dir, run_index)
            iteration_dir.mkdir(parents=True, exist_ok=True)
            log_path = self.log_path(permutation, run_label)
            config = strategy.get_next_config(base_config, permutation, iteration_dir)

            exit_code = self._execute_cycle(config, iteration_dir, log_path)
            if exit_code != 0:
                raise BenchmarkRunFailedError(
                    f"Aborting due to error in [{self.benchmark_name}: "
                    f"{permutation.label}] iteration {run_label} "
                    f"(exit code {exit_code}). See log file [{log_path}] for details.",
                    exit_code=exit_code,
                )

            result = IterationResult(
                permutation=permutation.label,
                iteration=run_index + 1,
                exit_code=exit_code,
                log_path=log_path,
                artifacts_path=iteration_dir,
                result_lines=extract_result_lines(log_path),
            )
            if not result.result_lines:
                logger.warning(
                    f"No '{RESULT_MARKER}' line found in {log_path}"
                )
            self._append_summary(summary_path, result.result_lines)
            results.append(result)
            run_index += 1

        logger.info(
            f"[{self.benchmark_name}: {permutation.label}] "
            f"{len(results)} iteration(s) complete"
        )
        return results

    def _append_summary(self, summary_path: Path, lines: list[str]) -> None:
        with open(summary_path, "a", encoding="utf-8") as f:
            for line in lines:
                f.write(f"{line}\n")

    def _execute_cycle(
        self, config: CycleConfig, iteration_dir: Path, log_path: Path
    ) -> int:
        """Run one cycle in a child process, teeing its output to log_path.

        The resolved config is written into the iteration directory so each
        cycle can be reproduced on its own.
        """
        config_file = iteration_dir / CYCLE_CONFIG_NAME
        with open(config_file, "wb") as f:
            f.write(
                orjson.dumps(config.model_dump(mode="json"), option=orjson.OPT_INDENT_2)
            )

        return run_logged(
            [
                sys.executable,
                "-u",
                "-m",
                "hammerbench.orchestrator.subprocess_runner",
                config_file,
            ],
            log_path=log_path,
        )
