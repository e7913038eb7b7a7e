# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import logging
from pathlib import Path

from pydantic import ValidationError

from hammerbench.common.config import (
    BenchmarkSettings,
    CycleConfig,
    CycleOptions,
    SuiteConfig,
    TargetOptions,
    apply_environment,
    default_benchmark_config_path,
    load_env_files,
)
from hammerbench.common.constants import BANNER_WIDTH
from hammerbench.common.exceptions import InvalidSettingsError
from hammerbench.common.signals import raise_on_termination_signals
from hammerbench.orchestrator import (
    BenchmarkCycle,
    BenchmarkOrchestrator,
    FixedIterationsStrategy,
    IterationResult,
    apply_external_server_policy,
    build_permutations,
    report_summaries,
)
from hammerbench.server import PgConfig

logger = logging.getLogger(__name__)


def _cycle_config(
    options: TargetOptions, settings: BenchmarkSettings, work_dir: Path
) -> CycleConfig:
    return CycleConfig(
        pg_config=options.pg_config.resolve(),
        hammerdb_dir=options.hammerdb_dir.resolve(),
        work_dir=work_dir.resolve(),
        initialize=options.initialize,
        build_schema=options.build_schema,
        remove_data_dir=options.remove_data_dir,
        strict_readiness=options.strict_readiness,
        compat_mode=options.compat_mode,
        verbose=options.verbose,
        settings=settings,
    )


def _settings_from_environment() -> BenchmarkSettings:
    """Read BenchmarkSettings from the environment.

    Raises:
        InvalidSettingsError: If a known key holds an invalid value.
    """
    try:
        return BenchmarkSettings()
    except ValidationError as e:
        problems = "; ".join(
            f"{str(err['loc'][0]).upper()}={err['input']!r}: {err['msg']}"
            if err["loc"]
            else err["msg"]
            for err in e.errors()
        )
        raise InvalidSettingsError(f"Invalid configuration value: {problems}") from e


def load_settings(config: SuiteConfig) -> BenchmarkSettings:
    """Export the configuration files into the environment and read them back typed.

    The benchmark-specific file overrides the primary one. An explicit --init-sql
    overrides PG_INIT_SQL.
    """
    secondary = config.benchmark_config or default_benchmark_config_path(
        config.config_file, config.benchmark_type
    )
    apply_environment(load_env_files(config.config_file, secondary))

    settings = _settings_from_environment()
    if config.init_sql is not None:
        settings = settings.model_copy(update={"pg_init_sql": config.init_sql})
    return settings


def run_suite(config: SuiteConfig) -> dict[str, list[IterationResult]]:
    """Run every permutation for the configured number of iterations.

    Raises:
        HammerBenchError: On invalid arguments, a missing configuration file or the
            first failing iteration.
    """
    config.validate_paths()
    settings = load_settings(config)
    config = apply_external_server_policy(config)

    pg = PgConfig(config.pg_config)
    logger.info(f"PostgreSQL Version [{pg.version}]")

    permutations = build_permutations(
        pg.version, settings.pg_initdb_opts, config.preload_libraries
    )
    base_config = _cycle_config(config, settings, config.work_dir)

    logger.info("=" * BANNER_WIDTH)
    logger.info(f"Starting {config.benchmark_type} benchmark [{config.benchmark_name}]")
    logger.info(f"  Permutations: {', '.join(p.label for p in permutations)}")
    logger.info(f"  Iterations per permutation: {config.iterations}")
    logger.info(f"  Initialize server: {config.initialize}")
    logger.info(f"  Build schema: {config.build_schema}")
    logger.info(f"  Working directory: {base_config.work_dir}")
    logger.info("=" * BANNER_WIDTH)

    orchestrator = BenchmarkOrchestrator(base_config.work_dir, config.benchmark_name)
    strategy = FixedIterationsStrategy(config.iterations)
    with raise_on_termination_signals():
        results = orchestrator.execute(base_config, permutations, strategy)

    logger.info("Benchmarking completed!")
    report_summaries(base_config.work_dir, config.benchmark_name)
    return results


def run_cycle(options: CycleOptions) -> None:
    """Run one build+run cycle with settings from the environment and the CLI.

    Raises:
        HammerBenchError: On invalid arguments or the first failing step.
    """
    options.validate_paths()
    settings = _settings_from_environment().model_copy(
        update=options.setting_overrides()
    )
    BenchmarkCycle(_cycle_config(options, settings, options.work_dir)).run()
