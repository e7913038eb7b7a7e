# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for hammerbench unit tests."""

import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from hammerbench.common.config import BenchmarkSettings, CycleConfig
from hammerbench.server import PgConfig

SETTINGS_KEYS = (
    "PGHOST",
    "PGPORT",
    "PG_DBASE",
    "PG_DEFAULTDBASE",
    "PG_SUPERUSER",
    "PG_USER",
    "PG_COUNT_WARE",
    "PG_DURATION",
    "PG_RAMPUP",
    "PG_NUM_VU",
    "PG_VU",
    "PG_INITDB_OPTS",
    "PG_INITDB_OPTS_BASE",
    "PG_INIT_SQL",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Start each test without benchmark settings in the environment.

    Configuration loading exports into os.environ directly, so the whole
    environment is restored afterwards.
    """
    saved = dict(os.environ)
    for key in SETTINGS_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def fake_pg() -> Mock:
    """A PgConfig that never executes pg_config."""
    pg = Mock(spec=PgConfig)
    pg.path = Path("/opt/pg/bin/pg_config")
    pg.bindir = Path("/opt/pg/bin")
    pg.libdir = Path("/opt/pg/lib")
    pg.version = "16.2"
    pg.tool.side_effect = lambda name: Path("/opt/pg/bin") / name
    pg.build_environment.return_value = {"PATH": "/opt/pg/bin", "LANG": "C"}
    return pg


@pytest.fixture
def settings() -> BenchmarkSettings:
    return BenchmarkSettings()


@pytest.fixture
def cycle_config(tmp_path: Path, settings: BenchmarkSettings) -> CycleConfig:
    """A cycle that owns its server, rooted in a temporary working directory."""
    hammerdb_dir = tmp_path / "hammerdb"
    hammerdb_dir.mkdir()
    return CycleConfig(
        pg_config=Path("/opt/pg/bin/pg_config"),
        hammerdb_dir=hammerdb_dir,
        work_dir=tmp_path / "work",
        initialize=True,
        settings=settings,
    )
