# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated, Any, ClassVar

from pydantic import Field, field_validator

from hammerbench.common.config.base_config import BaseConfig
from hammerbench.common.config.benchmark_settings import BenchmarkSettings
from hammerbench.common.config.cli_parameter import CLIFlag, CLIParameter
from hammerbench.common.config.groups import Groups
from hammerbench.common.enums import BenchmarkType
from hammerbench.common.exceptions import ArgumentValidationError


class TargetOptions(BaseConfig):
    """Options shared by the `run` and `cycle` commands."""

    pg_config: Annotated[
        Path | None,
        Field(
            description="Path to the pg_config binary of the PostgreSQL build under test. "
            "Its --bindir provides initdb, pg_ctl, pg_isready, psql and createuser.",
        ),
        CLIParameter(name=("--pg-config", "-C"), group=Groups.PATHS),
    ] = None

    hammerdb_dir: Annotated[
        Path | None,
        Field(description="HammerDB installation directory containing hammerdbcli."),
        CLIParameter(name=("--hammerdb-dir", "-x"), group=Groups.PATHS),
    ] = None

    work_dir: Annotated[
        Path | None,
        Field(
            description="Working folder where the data directory, generated scripts "
            "and log files are created.",
        ),
        CLIParameter(name=("--work-dir", "-t"), group=Groups.PATHS),
    ] = None

    init_sql: Annotated[
        Path | None,
        Field(
            description="SQL script to run against the default database after the "
            "server is initialized and started. Overrides PG_INIT_SQL.",
        ),
        CLIParameter(name=("--init-sql", "-r"), group=Groups.PATHS),
    ] = None

    initialize: Annotated[
        bool,
        Field(
            description="Initialize a fresh data directory, start the server before the "
            "benchmark and stop it afterwards. Without it, the benchmark runs against "
            "an already running, externally managed server.",
        ),
        CLIFlag(name=("--init", "-i"), group=Groups.LIFECYCLE),
    ] = False

    build_schema: Annotated[
        bool,
        Field(description="Build the TPC-C schema before running the benchmark."),
        CLIFlag(name=("--build-schema", "-S"), group=Groups.LIFECYCLE),
    ] = False

    remove_data_dir: Annotated[
        bool,
        Field(
            description="Remove the data directory on exit. Saves space across "
            "iterations while keeping the logs. Only honored together with --init.",
        ),
        CLIFlag(name=("--remove-data-dir", "-z"), group=Groups.LIFECYCLE),
    ] = False

    strict_readiness: Annotated[
        bool,
        Field(
            description="Fail when pg_isready cannot confirm the server is accepting "
            "connections. By default a warning is logged and the benchmark proceeds.",
        ),
        CLIFlag(name=("--strict-readiness",), group=Groups.LIFECYCLE),
    ] = False

    compat_mode: Annotated[
        bool,
        Field(
            description="Enable HammerDB's Oracle compatibility mode (pg_oracompat) "
            "for EDB Postgres Advanced Server.",
        ),
        CLIFlag(name=("--compat",), group=Groups.WORKLOAD),
    ] = False

    verbose: Annotated[
        bool,
        Field(description="Enable debug logging."),
        CLIFlag(name=("--verbose",), group=Groups.OUTPUT),
    ] = False

    def validate_paths(self) -> None:
        """Check that the required paths exist before anything is run.

        Raises:
            ArgumentValidationError: If a required path is missing or of the wrong kind.
        """
        if self.pg_config is None or not self.pg_config.is_file():
            raise ArgumentValidationError(
                "pg_config pathname is required. See usage for details"
            )
        if self.hammerdb_dir is None or not self.hammerdb_dir.is_dir():
            raise ArgumentValidationError(
                "Incorrect path for hammerdb installation. See usage for details"
            )
        if self.work_dir is None or not self.work_dir.is_dir():
            raise ArgumentValidationError(
                "Script working directory for the script is required. See usage for details"
            )


class SuiteConfig(TargetOptions):
    """Configuration of the `run` command: permutations x iterations."""

    benchmark_type: Annotated[
        BenchmarkType,
        Field(description="Type of benchmark to run."),
        CLIParameter(name=("--benchmark-type", "-b"), group=Groups.SUITE),
    ] = BenchmarkType.HAMMERDB

    benchmark_name: Annotated[
        str,
        Field(
            min_length=1,
            description="Benchmark name used to prefix log and summary files.",
        ),
        CLIParameter(name=("--benchmark-name", "-n"), group=Groups.SUITE),
    ] = "tpcc"

    iterations: Annotated[
        int,
        Field(
            ge=1,
            description="Number of build+run cycles per permutation. Forced to 1 "
            "without --init.",
        ),
        CLIParameter(name=("--iterations",), group=Groups.SUITE),
    ] = 3

    preload_libraries: Annotated[
        list[str],
        Field(
            description="Shared preload library to benchmark in addition to the base "
            "run. Repeat the option or pass a comma-separated list for several.",
        ),
        CLIParameter(name=("--preload-library", "-l"), group=Groups.SUITE),
    ] = []

    config_file: Annotated[
        Path,
        Field(description="PostgreSQL and TPC-C configuration file (KEY=VALUE)."),
        CLIParameter(name=("--config-file", "-e"), group=Groups.PATHS),
    ] = Path("pg.env")

    benchmark_config: Annotated[
        Path | None,
        Field(
            description="Benchmark-specific override file. Defaults to "
            "<config dir>/<benchmark type>/<benchmark type>.env when present.",
        ),
        CLIParameter(name=("--benchmark-config",), group=Groups.PATHS),
    ] = None

    @field_validator("preload_libraries", mode="before")
    @classmethod
    def parse_library_list(cls, v: Any) -> Any:
        """Split comma-separated values and drop blanks and duplicates."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if isinstance(v, list | tuple):
            libraries: list[str] = []
            for item in v:
                for part in str(item).split(","):
                    part = part.strip()
                    if part and part not in libraries:
                        libraries.append(part)
            return libraries
        return v


class CycleOptions(TargetOptions):
    """Configuration of the `cycle` command: one lifecycle-level build+run cycle.

    Connection and workload options default to None, meaning the value comes from
    the environment (see BenchmarkSettings).
    """

    host: Annotated[
        str | None,
        Field(description="Server host. Overrides PGHOST."),
        CLIParameter(name=("--host", "-H"), group=Groups.CONNECTION),
    ] = None

    port: Annotated[
        int | None,
        Field(ge=1, le=65535, description="Server port. Overrides PGPORT."),
        CLIParameter(name=("--port", "-p"), group=Groups.CONNECTION),
    ] = None

    dbase: Annotated[
        str | None,
        Field(description="Benchmarking database. Overrides PG_DBASE."),
        CLIParameter(name=("--dbase", "-b"), group=Groups.CONNECTION),
    ] = None

    default_dbase: Annotated[
        str | None,
        Field(description="Default database. Overrides PG_DEFAULTDBASE."),
        CLIParameter(name=("--default-dbase", "-d"), group=Groups.CONNECTION),
    ] = None

    superuser: Annotated[
        str | None,
        Field(description="Superuser. Overrides PG_SUPERUSER."),
        CLIParameter(name=("--superuser", "-s"), group=Groups.CONNECTION),
    ] = None

    user: Annotated[
        str | None,
        Field(description="Benchmark user. Overrides PG_USER."),
        CLIParameter(name=("--user", "-v"), group=Groups.CONNECTION),
    ] = None

    warehouses: Annotated[
        int | None,
        Field(ge=1, description="Number of warehouses. Overrides PG_COUNT_WARE."),
        CLIParameter(name=("--warehouses", "-w"), group=Groups.WORKLOAD),
    ] = None

    duration: Annotated[
        int | None,
        Field(ge=0, description="Benchmark duration in minutes. Overrides PG_DURATION."),
        CLIParameter(name=("--duration", "-D"), group=Groups.WORKLOAD),
    ] = None

    rampup: Annotated[
        int | None,
        Field(ge=0, description="Ramp-up time in minutes. Overrides PG_RAMPUP."),
        CLIParameter(name=("--rampup",), group=Groups.WORKLOAD),
    ] = None

    build_virtual_users: Annotated[
        int | None,
        Field(ge=1, description="Users for the schema build. Overrides PG_NUM_VU."),
        CLIParameter(name=("--build-virtual-users", "-u"), group=Groups.WORKLOAD),
    ] = None

    virtual_users: Annotated[
        int | None,
        Field(ge=1, description="Users for benchmarking. Overrides PG_VU."),
        CLIParameter(name=("--virtual-users", "-U"), group=Groups.WORKLOAD),
    ] = None

    server_options: Annotated[
        str | None,
        Field(
            description="Options passed to the server at start time (pg_ctl -o). "
            "Overrides PG_INITDB_OPTS.",
        ),
        CLIParameter(name=("--server-options",), group=Groups.LIFECYCLE),
    ] = None

    _SETTING_KEYS: ClassVar[dict[str, str]] = {
        "host": "pghost",
        "port": "pgport",
        "dbase": "pg_dbase",
        "default_dbase": "pg_defaultdbase",
        "superuser": "pg_superuser",
        "user": "pg_user",
        "warehouses": "pg_count_ware",
        "duration": "pg_duration",
        "rampup": "pg_rampup",
        "build_virtual_users": "pg_num_vu",
        "virtual_users": "pg_vu",
        "server_options": "pg_initdb_opts",
        "init_sql": "pg_init_sql",
    }

    def setting_overrides(self) -> dict[str, Any]:
        """Settings explicitly given on the command line, keyed by setting name."""
        return {
            setting: getattr(self, option)
            for option, setting in self._SETTING_KEYS.items()
            if getattr(self, option) is not None
        }


class CycleConfig(BaseConfig):
    """Fully resolved configuration of one build+run cycle.

    This is what a single iteration executes. It is serialized to JSON to hand it
    to the isolated cycle process.
    """

    pg_config: Path
    hammerdb_dir: Path
    work_dir: Path
    initialize: bool = False
    build_schema: bool = False
    remove_data_dir: bool = False
    strict_readiness: bool = False
    compat_mode: bool = False
    verbose: bool = False
    settings: BenchmarkSettings = Field(default_factory=BenchmarkSettings)
