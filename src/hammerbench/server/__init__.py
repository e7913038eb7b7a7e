# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from hammerbench.server.lifecycle import PostgresServer
from hammerbench.server.pg_tools import PgConfig

__all__ = [
    "PgConfig",
    "PostgresServer",
]
