# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group


class Groups:
    """Help panels for the hammerbench CLI, in display order."""

    PATHS = Group.create_ordered("Paths")
    LIFECYCLE = Group.create_ordered("Server Lifecycle")
    SUITE = Group.create_ordered("Benchmark Suite")
    CONNECTION = Group.create_ordered("Connection")
    WORKLOAD = Group.create_ordered("Workload")
    OUTPUT = Group.create_ordered("Output")
