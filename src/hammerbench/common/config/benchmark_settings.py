# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Typed view of the PostgreSQL and TPC-C tunables.

Field names are the configuration keys themselves (case-insensitive), so a
`pg.env` line such as `PG_COUNT_WARE=50` sets `pg_count_ware`.
"""

from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BenchmarkSettings(BaseSettings):
    """Connection, role and workload settings shared by the server and HammerDB."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    pghost: str = Field(default="localhost", description="Server host")
    pgport: int = Field(default=5432, ge=1, le=65535, description="Server port")

    pg_dbase: str = Field(default="tpcc", description="Benchmarking database")
    pg_defaultdbase: str = Field(
        default="postgres", description="Bootstrap database used for admin queries"
    )
    pg_superuser: str = Field(default="postgres", description="Superuser role")
    pg_user: str = Field(default="tpcc", description="Benchmark user role")

    pg_count_ware: int = Field(default=20, ge=1, description="Number of warehouses")
    pg_duration: int = Field(
        default=5, ge=0, description="Benchmark duration in minutes"
    )
    pg_rampup: int = Field(default=2, ge=0, description="Ramp-up time in minutes")
    pg_num_vu: int = Field(
        default=20, ge=1, description="Virtual users for the schema build"
    )
    pg_vu: int = Field(default=20, ge=1, description="Virtual users for the benchmark run")

    pg_initdb_opts: str = Field(
        default="",
        validation_alias=AliasChoices("pg_initdb_opts", "pg_initdb_opts_base"),
        description="Options passed to the server at start time (pg_ctl -o). "
        "PG_INITDB_OPTS takes precedence over PG_INITDB_OPTS_BASE when both are set, "
        "so a PG_INITDB_OPTS exported in the calling shell overrides the base value "
        "from pg.env.",
    )
    pg_init_sql: Path | None = Field(
        default=None, description="SQL script to run after initdb"
    )

    @field_validator("pg_init_sql", mode="before")
    @classmethod
    def _empty_path_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v
