# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for HammerDB control script generation."""

from unittest.mock import patch

import pytest

from hammerbench.common.config import BenchmarkSettings
from hammerbench.common.enums import ScriptFlavor
from hammerbench.common.exceptions import ScriptWriteFailedError
from hammerbench.hammerdb import (
    ScriptGenerator,
    ScriptParameters,
    render_script,
    wait_budget_seconds,
)


@pytest.fixture
def params() -> ScriptParameters:
    return ScriptParameters.from_settings(
        BenchmarkSettings(
            pghost="db1",
            pgport=5433,
            pg_dbase="tpcc",
            pg_defaultdbase="postgres",
            pg_user="tpcc",
            pg_superuser="admin",
            pg_count_ware=50,
            pg_num_vu=8,
            pg_vu=16,
            pg_rampup=2,
            pg_duration=5,
        )
    )


class TestWaitBudget:
    @pytest.mark.parametrize(
        "duration,expected",
        [
            (0, 180),
            (5, 480),
            (10, 780),
        ],
    )
    def test_duration_plus_buffer(self, duration, expected):
        assert wait_budget_seconds(duration) == expected

    def test_negative_duration(self):
        with pytest.raises(ValueError):
            wait_budget_seconds(-1)


class TestRenderScript:
    def test_header_is_shared(self, params):
        build = render_script(params, ScriptFlavor.BUILD_SCHEMA)
        run = render_script(params, ScriptFlavor.RUN)

        for line in (
            "dbset db pg",
            "diset connection pg_host db1",
            "diset connection pg_port 5433",
            "diset tpcc pg_superuser admin",
            "diset tpcc pg_num_vu 8",
            "diset tpcc pg_count_ware 50",
        ):
            assert line in build.splitlines()
            assert line in run.splitlines()

    def test_build_schema_trailer(self, params):
        lines = render_script(params, ScriptFlavor.BUILD_SCHEMA).splitlines()

        assert lines.index("buildschema") < lines.index("waittocomplete")
        assert "vurun" not in lines

    def test_run_trailer_uses_wait_budget(self, params):
        lines = render_script(params, ScriptFlavor.RUN).splitlines()

        assert "runtimer 480" in lines
        assert "after 480" in lines
        assert "diset tpcc pg_duration 5" in lines
        assert "diset tpcc pg_rampup 2" in lines
        assert "vuset vu 16" in lines
        assert lines.index("vucreate") < lines.index("vurun") < lines.index("vudestroy")
        assert "buildschema" not in lines

    def test_rampup_not_in_wait_budget(self, params):
        longer_rampup = params.model_copy(update={"rampup": 30})

        assert "runtimer 480" in render_script(longer_rampup, ScriptFlavor.RUN)

    @pytest.mark.parametrize("flavor", list(ScriptFlavor))
    def test_compat_mode(self, params, flavor):
        assert "pg_oracompat" not in render_script(params, flavor)

        compat = params.model_copy(update={"compat_mode": True})
        assert "diset tpcc pg_oracompat true" in render_script(compat, flavor)


class TestScriptGenerator:
    def test_writes_fixed_file_names(self, params, tmp_path):
        generator = ScriptGenerator(tmp_path)

        build = generator.write(params, ScriptFlavor.BUILD_SCHEMA)
        run = generator.write(params, ScriptFlavor.RUN)

        assert build == tmp_path / "pg_tpcc_schemabuild.tcl"
        assert run == tmp_path / "pg_tpcc_benchmark.tcl"

    def test_regeneration_is_idempotent(self, params, tmp_path):
        generator = ScriptGenerator(tmp_path)

        first = generator.write(params, ScriptFlavor.RUN).read_text()
        second = generator.write(params, ScriptFlavor.RUN).read_text()

        assert first == second

    def test_rewrite_truncates(self, params, tmp_path):
        generator = ScriptGenerator(tmp_path)
        path = generator.path_for(ScriptFlavor.RUN)
        path.write_text("stale\n" * 1000)

        generator.write(params, ScriptFlavor.RUN)

        assert "stale" not in path.read_text()
        assert path.read_text() == render_script(params, ScriptFlavor.RUN)

    def test_write_failure(self, params, tmp_path):
        generator = ScriptGenerator(tmp_path / "missing")

        with pytest.raises(ScriptWriteFailedError):
            generator.write(params, ScriptFlavor.RUN)

    def test_oserror_is_wrapped(self, params, tmp_path):
        with (
            patch("pathlib.Path.write_text", side_effect=PermissionError("denied")),
            pytest.raises(ScriptWriteFailedError, match="denied"),
        ):
            ScriptGenerator(tmp_path).write(params, ScriptFlavor.BUILD_SCHEMA)
