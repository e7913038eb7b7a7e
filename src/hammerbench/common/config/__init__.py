# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from hammerbench.common.config.base_config import BaseConfig
from hammerbench.common.config.benchmark_settings import BenchmarkSettings
from hammerbench.common.config.cli_parameter import CLIFlag, CLIParameter
from hammerbench.common.config.config_loader import (
    apply_environment,
    default_benchmark_config_path,
    load_env_files,
)
from hammerbench.common.config.groups import Groups
from hammerbench.common.config.user_config import (
    CycleConfig,
    CycleOptions,
    SuiteConfig,
    TargetOptions,
)

__all__ = [
    "BaseConfig",
    "BenchmarkSettings",
    "CLIFlag",
    "CLIParameter",
    "CycleConfig",
    "CycleOptions",
    "Groups",
    "SuiteConfig",
    "TargetOptions",
    "apply_environment",
    "default_benchmark_config_path",
    "load_env_files",
]
