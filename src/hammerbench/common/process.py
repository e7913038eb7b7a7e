# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Blocking subprocess helpers shared by the server, HammerDB and orchestrator layers."""

import contextlib
import logging
import shlex
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def run_logged(
    args: Sequence[str | Path],
    *,
    log_path: Path | None = None,
    env: Mapping[str, str] | None = None,
    cwd: Path | None = None,
    echo: bool = True,
) -> int:
    """Run a command, streaming its combined stdout/stderr.

    Each output line is echoed to stdout and, when log_path is given, written to
    that file (truncated first), like piping through `tee`. If the caller is
    interrupted while the command runs, the child is terminated before the
    exception propagates.

    Returns:
        The exit code of the command.
    """
    cmd = [str(arg) for arg in args]
    logger.debug(f"Running: {shlex.join(cmd)}")

    with contextlib.ExitStack() as stack:
        log_file = (
            stack.enter_context(open(log_path, "w", encoding="utf-8"))
            if log_path is not None
            else None
        )
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=dict(env) if env is not None else None,
            cwd=cwd,
            text=True,
            errors="replace",
        )
        try:
            for line in proc.stdout:
                if echo:
                    sys.stdout.write(line)
                    sys.stdout.flush()
                if log_file is not None:
                    log_file.write(line)
            return proc.wait()
        except BaseException:
            proc.terminate()
            proc.wait()
            raise
        finally:
            proc.stdout.close()


def run_captured(
    args: Sequence[str | Path],
    *,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess:
    """Run a short command and capture its output without raising on failure."""
    cmd = [str(arg) for arg in args]
    logger.debug(f"Running: {shlex.join(cmd)}")
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        check=False,
        env=dict(env) if env is not None else None,
    )
