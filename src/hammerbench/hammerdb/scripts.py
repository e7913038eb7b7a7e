# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""HammerDB control script generation.

Both script flavors share one configuration header rendered from
ScriptParameters; only the trailer differs. The Tcl dialect is treated as
opaque text: values are substituted, never parsed.
"""

import logging
from pathlib import Path

from pydantic import Field

from hammerbench.common.config import BaseConfig, BenchmarkSettings
from hammerbench.common.constants import (
    BUILD_SCHEMA_SCRIPT_NAME,
    RUN_SCRIPT_NAME,
    SECONDS_PER_MINUTE,
    WAIT_BUFFER_SECONDS,
)
from hammerbench.common.enums import ScriptFlavor
from hammerbench.common.exceptions import ScriptWriteFailedError

logger = logging.getLogger(__name__)

__all__ = [
    "ScriptGenerator",
    "ScriptParameters",
    "render_script",
    "wait_budget_seconds",
]

SCRIPT_NAMES = {
    ScriptFlavor.BUILD_SCHEMA: BUILD_SCHEMA_SCRIPT_NAME,
    ScriptFlavor.RUN: RUN_SCRIPT_NAME,
}


class ScriptParameters(BaseConfig):
    """Values substituted into the HammerDB scripts."""

    host: str
    port: int
    dbase: str
    default_dbase: str
    user: str
    superuser: str
    build_virtual_users: int = Field(ge=1)
    warehouses: int = Field(ge=1)
    rampup: int = Field(ge=0)
    duration: int = Field(ge=0)
    virtual_users: int = Field(ge=1)
    compat_mode: bool = False

    @classmethod
    def from_settings(
        cls, settings: BenchmarkSettings, compat_mode: bool = False
    ) -> "ScriptParameters":
        return cls(
            host=settings.pghost,
            port=settings.pgport,
            dbase=settings.pg_dbase,
            default_dbase=settings.pg_defaultdbase,
            user=settings.pg_user,
            superuser=settings.pg_superuser,
            build_virtual_users=settings.pg_num_vu,
            warehouses=settings.pg_count_ware,
            rampup=settings.pg_rampup,
            duration=settings.pg_duration,
            virtual_users=settings.pg_vu,
            compat_mode=compat_mode,
        )


def wait_budget_seconds(duration_minutes: int) -> int:
    """Seconds the run script waits for the virtual users.

    The benchmark duration plus a fixed buffer so that hammerdbcli's own timers
    complete before the script returns. Ramp-up is not part of the budget.
    """
    if duration_minutes < 0:
        raise ValueError(f"Duration must be non-negative, got {duration_minutes}")
    return duration_minutes * SECONDS_PER_MINUTE + WAIT_BUFFER_SECONDS


def _render_header(params: ScriptParameters) -> str:
    lines = [
        "#!/bin/tclsh",
        "",
        'puts "SETTING CONFIGURATION"',
        "",
        "dbset db pg",
        f"diset connection pg_host {params.host}",
        f"diset connection pg_port {params.port}",
        "",
        f"diset tpcc pg_dbase {params.dbase}",
        f"diset tpcc pg_defaultdbase {params.default_dbase}",
        f"diset tpcc pg_user {params.user}",
        f"diset tpcc pg_superuser {params.superuser}",
        f"diset tpcc pg_num_vu {params.build_virtual_users}",
        f"diset tpcc pg_count_ware {params.warehouses}",
    ]
    if params.compat_mode:
        lines.append("diset tpcc pg_oracompat true")
    return "\n".join(lines) + "\n"


def _render_build_trailer(params: ScriptParameters) -> str:
    return "\n".join(
        [
            "print dict",
            "",
            "buildschema",
            "waittocomplete",
            "",
            'puts "BUILD SCHEMA COMPLETE"',
            "quit",
        ]
    ) + "\n"


def _render_run_trailer(params: ScriptParameters) -> str:
    wait = wait_budget_seconds(params.duration)
    return "\n".join(
        [
            "diset tpcc pg_driver timed",
            f"diset tpcc pg_rampup {params.rampup}",
            f"diset tpcc pg_duration {params.duration}",
            "diset tpcc pg_vacuum true",
            "vuset logtotemp 1",
            "",
            "loadscript",
            f"vuset vu {params.virtual_users}",
            "",
            "print dict",
            "",
            'puts "BENCHMARK STARTED"',
            "vucreate",
            "vurun",
            f"runtimer {wait}",
            "vudestroy",
            f"after {wait}",
            'puts "BENCHMARK COMPLETE"',
        ]
    ) + "\n"


_TRAILERS = {
    ScriptFlavor.BUILD_SCHEMA: _render_build_trailer,
    ScriptFlavor.RUN: _render_run_trailer,
}


def render_script(params: ScriptParameters, flavor: ScriptFlavor) -> str:
    """Render the full text of a control script of the given flavor."""
    return _render_header(params) + "\n" + _TRAILERS[flavor](params)


class ScriptGenerator:
    """Writes control scripts into a working directory.

    Scripts are truncated and rewritten on every call, so regenerating in the
    same directory always yields the same content.
    """

    def __init__(self, work_dir: Path) -> None:
        self.work_dir = Path(work_dir)

    def path_for(self, flavor: ScriptFlavor) -> Path:
        return self.work_dir / SCRIPT_NAMES[flavor]

    def write(self, params: ScriptParameters, flavor: ScriptFlavor) -> Path:
        """Render and write a script.

        Raises:
            ScriptWriteFailedError: If the file cannot be written.
        """
        path = self.path_for(flavor)
        label = "build schema" if flavor == ScriptFlavor.BUILD_SCHEMA else "benchmark"
        logger.info(f"Creating {label} script: {path}")
        try:
            path.write_text(render_script(params, flavor), encoding="utf-8")
        except OSError as e:
            raise ScriptWriteFailedError(f"Unable to write {path}: {e}") from e
        return path
