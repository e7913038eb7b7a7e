# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""One build+run benchmark cycle against a single server."""

import logging
from pathlib import Path

from hammerbench.common.config import CycleConfig
from hammerbench.common.enums import ScriptFlavor
from hammerbench.common.exceptions import (
    ArgumentValidationError,
    BenchmarkRunFailedError,
)
from hammerbench.hammerdb import HammerDBRunner, ScriptGenerator, ScriptParameters
from hammerbench.server import PgConfig, PostgresServer

logger = logging.getLogger(__name__)

__all__ = [
    "BenchmarkCycle",
    "format_size",
]


def format_size(num_bytes: int) -> str:
    """Human readable size in the style of `du -sh`, e.g. "1.5G"."""
    size = float(num_bytes)
    for unit in ("", "K", "M", "G", "T"):
        if size < 1024 or unit == "T":
            break
        size /= 1024
    if unit == "":
        return f"{int(size)}"
    return f"{size:.1f}{unit}"


class BenchmarkCycle:
    """Runs the ordered steps of one cycle.

    With `initialize`, the cycle owns the server: initdb, start, the init SQL
    script, the benchmark, then stop. Without it, only the scripts are generated
    and run against an externally managed server, which is never started,
    stopped or removed.
    """

    def __init__(self, config: CycleConfig, pg: PgConfig | None = None) -> None:
        self.config = config
        self.pg = pg if pg is not None else PgConfig(config.pg_config)

    def run(self) -> None:
        """Execute the cycle.

        Raises:
            HammerBenchError: On the first failing step. The server is torn down
                according to its state before the error propagates.
        """
        config = self.config
        settings = config.settings
        work_dir = Path(config.work_dir)

        logger.info(f"Creating script working folder: {work_dir}")
        try:
            work_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ArgumentValidationError(
                f"Unable to create working folder {work_dir}: {e}"
            ) from e

        env = self.pg.build_environment()
        server = PostgresServer(
            self.pg,
            work_dir,
            settings,
            env=env,
            strict_readiness=config.strict_readiness,
        )

        remove_data_dir = config.remove_data_dir
        if remove_data_dir and not config.initialize:
            logger.warning(
                "Ignoring data directory removal: the server is not managed by this run"
            )
            remove_data_dir = False

        generator = ScriptGenerator(work_dir)
        runner = HammerDBRunner(config.hammerdb_dir, env=env)
        params = ScriptParameters.from_settings(settings, config.compat_mode)

        with server.managed(remove_data_dir=remove_data_dir):
            if config.initialize:
                server.initialize()
                server.start()
                server.run_init_script(settings.pg_init_sql)

            if config.build_schema:
                self._run_script(runner, generator.write(params, ScriptFlavor.BUILD_SCHEMA))

            run_script = generator.write(params, ScriptFlavor.RUN)
            if config.initialize:
                logger.info(f"Database size is: {format_size(server.database_size())}")
            self._run_script(runner, run_script)

            if config.initialize:
                server.stop()

    def _run_script(self, runner: HammerDBRunner, script: Path) -> None:
        exit_code = runner.run_script(script)
        if exit_code != 0:
            raise BenchmarkRunFailedError(
                f"{runner.cli_path.name} failed running {script.name} "
                f"with exit code {exit_code}",
                exit_code=exit_code,
            )
