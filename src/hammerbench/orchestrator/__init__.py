# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Permutation and iteration orchestration for hammerbench."""

from hammerbench.orchestrator.cycle import BenchmarkCycle
from hammerbench.orchestrator.models import IterationResult, Permutation
from hammerbench.orchestrator.orchestrator import (
    BenchmarkOrchestrator,
    extract_result_lines,
)
from hammerbench.orchestrator.reporting import find_summary_files, report_summaries
from hammerbench.orchestrator.strategies import (
    FixedIterationsStrategy,
    apply_external_server_policy,
    build_permutations,
)

__all__ = [
    "BenchmarkCycle",
    "BenchmarkOrchestrator",
    "FixedIterationsStrategy",
    "IterationResult",
    "Permutation",
    "apply_external_server_policy",
    "build_permutations",
    "extract_result_lines",
    "find_summary_files",
    "report_summaries",
]
