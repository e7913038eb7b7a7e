# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from hammerbench.hammerdb.runner import HammerDBRunner
from hammerbench.hammerdb.scripts import (
    ScriptGenerator,
    ScriptParameters,
    render_script,
    wait_budget_seconds,
)

__all__ = [
    "HammerDBRunner",
    "ScriptGenerator",
    "ScriptParameters",
    "render_script",
    "wait_budget_seconds",
]
