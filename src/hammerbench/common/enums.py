# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from enum import Enum


class CaseInsensitiveStrEnum(str, Enum):
    """String enum that accepts any casing of its values."""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member
        return None


class LifecycleState(CaseInsensitiveStrEnum):
    """States of a PostgreSQL server managed by hammerbench."""

    NOT_STARTED = "not_started"
    INITIALIZED = "initialized"
    RUNNING = "running"
    STOPPED = "stopped"


class ScriptFlavor(CaseInsensitiveStrEnum):
    """Kinds of HammerDB control scripts."""

    BUILD_SCHEMA = "build_schema"
    RUN = "run"


class BenchmarkType(CaseInsensitiveStrEnum):
    """Load-testing tools hammerbench knows how to drive."""

    HAMMERDB = "hammerdb"
