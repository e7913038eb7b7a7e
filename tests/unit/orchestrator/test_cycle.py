# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for BenchmarkCycle step ordering."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from hammerbench.common.exceptions import BenchmarkRunFailedError
from hammerbench.orchestrator.cycle import BenchmarkCycle, format_size

CYCLE = "hammerbench.orchestrator.cycle"
LIFECYCLE_METHODS = {"initialize", "start", "run_init_script", "stop", "managed"}


@pytest.fixture
def mock_server_cls():
    with patch(f"{CYCLE}.PostgresServer") as mock_cls:
        mock_cls.return_value.database_size.return_value = 4096
        yield mock_cls


@pytest.fixture
def mock_runner_cls():
    with patch(f"{CYCLE}.HammerDBRunner") as mock_cls:
        mock_cls.return_value.run_script.return_value = 0
        yield mock_cls


def _lifecycle_calls(server) -> list[str]:
    return [name for name, _, _ in server.method_calls if name in LIFECYCLE_METHODS]


def _scripts_run(runner) -> list[str]:
    return [Path(c.args[0]).name for c in runner.run_script.call_args_list]


class TestBenchmarkCycle:
    def test_owned_server_full_cycle(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        config = cycle_config.model_copy(update={"build_schema": True})

        BenchmarkCycle(config, pg=fake_pg).run()

        server = mock_server_cls.return_value
        assert _lifecycle_calls(server) == [
            "managed",
            "initialize",
            "start",
            "run_init_script",
            "stop",
        ]
        server.managed.assert_called_once_with(remove_data_dir=False)
        server.run_init_script.assert_called_once_with(None)
        assert _scripts_run(mock_runner_cls.return_value) == [
            "pg_tpcc_schemabuild.tcl",
            "pg_tpcc_benchmark.tcl",
        ]

    def test_server_and_runner_share_build_environment(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        BenchmarkCycle(cycle_config, pg=fake_pg).run()

        env = fake_pg.build_environment.return_value
        assert mock_server_cls.call_args.kwargs["env"] == env
        assert mock_runner_cls.call_args.kwargs["env"] == env

    def test_without_build_schema_only_runs_benchmark(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        BenchmarkCycle(cycle_config, pg=fake_pg).run()

        assert _scripts_run(mock_runner_cls.return_value) == ["pg_tpcc_benchmark.tcl"]
        assert (cycle_config.work_dir / "pg_tpcc_benchmark.tcl").is_file()
        assert not (cycle_config.work_dir / "pg_tpcc_schemabuild.tcl").exists()

    def test_external_server_is_never_touched(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls, caplog
    ):
        config = cycle_config.model_copy(
            update={"initialize": False, "remove_data_dir": True, "build_schema": True}
        )

        with caplog.at_level(logging.WARNING):
            BenchmarkCycle(config, pg=fake_pg).run()

        server = mock_server_cls.return_value
        assert _lifecycle_calls(server) == ["managed"]
        server.managed.assert_called_once_with(remove_data_dir=False)
        server.database_size.assert_not_called()
        assert "Ignoring data directory removal" in caplog.text
        assert len(mock_runner_cls.return_value.run_script.call_args_list) == 2

    def test_remove_data_dir_with_initialize(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        config = cycle_config.model_copy(update={"remove_data_dir": True})

        BenchmarkCycle(config, pg=fake_pg).run()

        mock_server_cls.return_value.managed.assert_called_once_with(remove_data_dir=True)

    def test_init_sql_from_settings(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls, tmp_path
    ):
        init_sql = tmp_path / "init.sql"
        settings = cycle_config.settings.model_copy(update={"pg_init_sql": init_sql})
        config = cycle_config.model_copy(update={"settings": settings})

        BenchmarkCycle(config, pg=fake_pg).run()

        mock_server_cls.return_value.run_init_script.assert_called_once_with(init_sql)

    def test_failed_benchmark_raises_before_stop(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        mock_runner_cls.return_value.run_script.return_value = 3

        with pytest.raises(BenchmarkRunFailedError) as exc_info:
            BenchmarkCycle(cycle_config, pg=fake_pg).run()

        assert exc_info.value.exit_code == 3
        # Stopping is left to the managed() teardown.
        mock_server_cls.return_value.stop.assert_not_called()

    def test_failed_schema_build_skips_benchmark(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        mock_runner_cls.return_value.run_script.return_value = 1
        config = cycle_config.model_copy(update={"build_schema": True})

        with pytest.raises(BenchmarkRunFailedError, match="pg_tpcc_schemabuild.tcl"):
            BenchmarkCycle(config, pg=fake_pg).run()

        assert _scripts_run(mock_runner_cls.return_value) == ["pg_tpcc_schemabuild.tcl"]

    def test_compat_mode_reaches_scripts(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        config = cycle_config.model_copy(update={"compat_mode": True})

        BenchmarkCycle(config, pg=fake_pg).run()

        script = (cycle_config.work_dir / "pg_tpcc_benchmark.tcl").read_text()
        assert "diset tpcc pg_oracompat true" in script

    def test_creates_work_dir(
        self, cycle_config, fake_pg, mock_server_cls, mock_runner_cls
    ):
        assert not cycle_config.work_dir.exists()

        BenchmarkCycle(cycle_config, pg=fake_pg).run()

        assert cycle_config.work_dir.is_dir()


@pytest.mark.parametrize(
    "num_bytes,expected",
    [
        (0, "0"),
        (512, "512"),
        (2048, "2.0K"),
        (int(1.5 * 1024**3), "1.5G"),
    ],
)
def test_format_size(num_bytes, expected):
    assert format_size(num_bytes) == expected
