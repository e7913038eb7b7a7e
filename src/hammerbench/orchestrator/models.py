# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for permutation and iteration orchestration."""

from pathlib import Path

from pydantic import BaseModel, Field


class Permutation(BaseModel):
    """One configuration variant under test.

    Attributes:
        label: Directory-safe name, e.g. "PG-16.2" or "PG-16.2-pg_stat_statements"
        preload_library: Shared preload library added for this variant, if any
        server_options: Options passed to the server at start time (pg_ctl -o)
    """

    label: str
    preload_library: str | None = None
    server_options: str = ""


class IterationResult(BaseModel):
    """Result of one build+run cycle within a permutation.

    Attributes:
        permutation: Label of the permutation this iteration belongs to
        iteration: One-based iteration number
        exit_code: Exit code of the cycle process
        log_path: Combined output of the cycle
        artifacts_path: Per-iteration working directory
        result_lines: Lines of the log carrying the result marker, in order
    """

    permutation: str
    iteration: int
    exit_code: int
    log_path: Path
    artifacts_path: Path
    result_lines: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == 0
