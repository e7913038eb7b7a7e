# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from collections.abc import Mapping
from pathlib import Path

from hammerbench.common.environment import Environment
from hammerbench.common.process import run_logged

logger = logging.getLogger(__name__)

__all__ = [
    "HammerDBRunner",
]


class HammerDBRunner:
    """Runs generated scripts with HammerDB's unattended command line driver."""

    def __init__(
        self, install_dir: Path, env: Mapping[str, str] | None = None
    ) -> None:
        self.install_dir = Path(install_dir).resolve()
        self.env = dict(env) if env is not None else None

    @property
    def cli_path(self) -> Path:
        return self.install_dir / Environment.HAMMERDB.CLI_NAME

    def run_script(self, script: Path) -> int:
        """Run `hammerdbcli auto <script>` from the installation directory.

        The working directory change applies to the child process only. Combined
        stdout/stderr is echoed as it arrives.

        Returns:
            The exit code of hammerdbcli.
        """
        script = Path(script).resolve()
        logger.info(f"Running {script.name} with {self.cli_path}")
        exit_code = run_logged(
            [self.cli_path, "auto", script],
            env=self.env,
            cwd=self.install_dir,
        )
        logger.debug(f"hammerdbcli exited with code {exit_code}")
        return exit_code
