# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Access to the PostgreSQL build under test through its pg_config binary."""

import logging
import os
from collections.abc import Mapping
from functools import cached_property
from pathlib import Path

from hammerbench.common.exceptions import PgConfigError
from hammerbench.common.process import run_captured

logger = logging.getLogger(__name__)

__all__ = [
    "PgConfig",
]


class PgConfig:
    """Wraps a pg_config binary.

    Resolves the binary and library directories of the build and the server
    version, and builds the environment that every PostgreSQL and HammerDB
    subprocess runs with.
    """

    def __init__(self, pg_config: Path) -> None:
        self.path = Path(pg_config)

    def query(self, flag: str) -> str:
        """Run `pg_config <flag>` and return its stripped output.

        Raises:
            PgConfigError: If pg_config cannot be executed or exits non-zero.
        """
        try:
            result = run_captured([self.path, flag])
        except OSError as e:
            raise PgConfigError(f"Unable to execute {self.path}: {e}") from e
        if result.returncode != 0:
            raise PgConfigError(
                f"{self.path} {flag} failed with exit code {result.returncode}: "
                f"{result.stderr.strip()}"
            )
        return result.stdout.strip()

    @cached_property
    def bindir(self) -> Path:
        return Path(self.query("--bindir"))

    @cached_property
    def libdir(self) -> Path:
        return Path(self.query("--libdir"))

    @cached_property
    def version(self) -> str:
        """Server version number, e.g. "16.2" from "PostgreSQL 16.2"."""
        output = self.query("--version")
        parts = output.split()
        if len(parts) < 2:
            raise PgConfigError(f"Unexpected pg_config --version output: {output!r}")
        return parts[1]

    def tool(self, name: str) -> Path:
        """Absolute path of a binary shipped with this build."""
        return self.bindir / name

    def build_environment(
        self, base: Mapping[str, str] | None = None
    ) -> dict[str, str]:
        """Environment for subprocesses of this build.

        The build's bindir and libdir are put in front of PATH and
        LD_LIBRARY_PATH, and the C locale is forced so tool output is stable.
        """
        env = dict(os.environ if base is None else base)
        env["LANG"] = "C"
        env["LC_ALL"] = "C"
        env["PATH"] = _prepend_path(self.bindir, env.get("PATH"))
        env["LD_LIBRARY_PATH"] = _prepend_path(self.libdir, env.get("LD_LIBRARY_PATH"))
        return env


def _prepend_path(entry: Path, current: str | None) -> str:
    if not current:
        return str(entry)
    return f"{entry}{os.pathsep}{current}"
