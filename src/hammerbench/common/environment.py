# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Process-level tunables read from HAMMERBENCH_* environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _ServerSettings(BaseSettings):
    """Timing and mode settings for the managed PostgreSQL server."""

    model_config = SettingsConfigDict(env_prefix="HAMMERBENCH_SERVER_")

    READY_POLL_ATTEMPTS: int = Field(
        default=30,
        ge=1,
        description="Number of pg_isready checks before readiness is declared unconfirmed",
    )
    READY_POLL_INTERVAL: float = Field(
        default=5.0,
        gt=0,
        description="Seconds between the starts of pg_isready checks (also the check timeout)",
    )
    RESTART_DELAY: float = Field(
        default=30.0,
        ge=0,
        description="Seconds to wait between stop and start on restart",
    )
    STOP_MODE: str = Field(
        default="immediate",
        description="pg_ctl shutdown mode used when stopping the server",
    )


class _HammerDBSettings(BaseSettings):
    """Settings for invoking HammerDB."""

    model_config = SettingsConfigDict(env_prefix="HAMMERBENCH_HAMMERDB_")

    CLI_NAME: str = Field(
        default="hammerdbcli",
        description="Name of the HammerDB command line driver inside the install directory",
    )


class _Environment(BaseSettings):
    SERVER: _ServerSettings = Field(default_factory=_ServerSettings)
    HAMMERDB: _HammerDBSettings = Field(default_factory=_HammerDBSettings)


Environment = _Environment()
