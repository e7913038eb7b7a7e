# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Final result summary printed after all permutations complete."""

import logging
from pathlib import Path

from rich.console import Console

from hammerbench.common.constants import BANNER_WIDTH

logger = logging.getLogger(__name__)


def find_summary_files(work_dir: Path, benchmark_name: str) -> list[Path]:
    """Summary files of a suite in lexicographic order."""
    return sorted(Path(work_dir).glob(f"{benchmark_name}.summary.*.log"))


def report_summaries(
    work_dir: Path, benchmark_name: str, console: Console | None = None
) -> list[Path]:
    """Print each summary file's path followed by its contents.

    Returns:
        The summary files that were found.
    """
    if console is None:
        console = Console(highlight=False, emoji=False, soft_wrap=True)

    console.print()
    console.print("RESULT SUMMARY", markup=False)
    console.print("=" * BANNER_WIDTH, markup=False)

    summary_files = find_summary_files(work_dir, benchmark_name)
    if not summary_files:
        logger.warning(f"No summary files found in {work_dir} for {benchmark_name}")
        return []

    for path in summary_files:
        console.print(str(path), markup=False)
        try:
            contents = path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Unable to read {path}: {e}")
            continue
        console.print(contents, markup=False, end="")
    return summary_files
