# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import os
from pathlib import Path
from unittest.mock import patch

from hammerbench.common.environment import Environment
from hammerbench.hammerdb import HammerDBRunner

RUN_LOGGED = "hammerbench.hammerdb.runner.run_logged"


class TestHammerDBRunner:
    def test_runs_auto_from_install_dir(self, tmp_path):
        runner = HammerDBRunner(tmp_path, env={"PATH": "/opt/pg/bin"})
        script = tmp_path / "work" / "pg_tpcc_benchmark.tcl"

        with patch(RUN_LOGGED, return_value=0) as mock_run:
            assert runner.run_script(script) == 0

        args = mock_run.call_args.args[0]
        assert args == [tmp_path.resolve() / "hammerdbcli", "auto", script.resolve()]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path.resolve()
        assert mock_run.call_args.kwargs["env"] == {"PATH": "/opt/pg/bin"}

    def test_returns_exit_code(self, tmp_path):
        with patch(RUN_LOGGED, return_value=2):
            assert HammerDBRunner(tmp_path).run_script(tmp_path / "x.tcl") == 2

    def test_relative_paths_are_resolved(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "hammerdb").mkdir()
        runner = HammerDBRunner(Path("hammerdb"))

        with patch(RUN_LOGGED, return_value=0) as mock_run:
            runner.run_script(Path("pg_tpcc_benchmark.tcl"))

        cli, _, script = mock_run.call_args.args[0]
        assert cli.is_absolute()
        assert script == tmp_path.resolve() / "pg_tpcc_benchmark.tcl"

    def test_cli_name_is_configurable(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Environment.HAMMERDB, "CLI_NAME", "hammerdbcli.sh")

        assert HammerDBRunner(tmp_path).cli_path.name == "hammerdbcli.sh"

    def test_does_not_change_parent_cwd(self, tmp_path):
        cwd = os.getcwd()
        with patch(RUN_LOGGED, return_value=0):
            HammerDBRunner(tmp_path).run_script(tmp_path / "x.tcl")

        assert os.getcwd() == cwd
