# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group, Parameter


def CLIParameter(  # noqa: N802
    *,
    name: tuple[str, ...],
    group: Group | None = None,
    **kwargs,
) -> Parameter:
    """Build a cyclopts Parameter with the defaults used by every hammerbench option.

    Environment variables are documented separately, so they are hidden from the
    option help.
    """
    return Parameter(name=name, group=group, show_env_var=False, **kwargs)


def CLIFlag(  # noqa: N802
    *,
    name: tuple[str, ...],
    group: Group | None = None,
    **kwargs,
) -> Parameter:
    """Build a boolean switch without the automatic --no-* negative form."""
    return CLIParameter(name=name, group=group, negative="", **kwargs)
