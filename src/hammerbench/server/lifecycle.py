# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Lifecycle controller for a PostgreSQL server owned by a benchmark cycle.

The controller tracks an explicit LifecycleState:

    NOT_STARTED -> INITIALIZED -> RUNNING <-> STOPPED

Every operation checks its allowed source states before touching any
subprocess, and `managed()` guarantees a single state-aware teardown on normal
exit, on error and on termination signals.
"""

import contextlib
import logging
import shlex
import shutil
import time
from collections.abc import Iterator, Mapping
from pathlib import Path

from hammerbench.common.config import BenchmarkSettings
from hammerbench.common.constants import (
    DATA_DIR_NAME,
    INIT_SQL_LOG_NAME,
    INITDB_LOG_NAME,
    SERVER_LOG_NAME,
)
from hammerbench.common.enums import LifecycleState
from hammerbench.common.environment import Environment
from hammerbench.common.exceptions import (
    InitializationFailedError,
    InitScriptFailedError,
    LifecycleStateError,
    ServerStartFailedError,
    ServerStartUnconfirmedError,
    StopFailedError,
)
from hammerbench.common.process import run_captured, run_logged
from hammerbench.common.signals import raise_on_termination_signals
from hammerbench.server.pg_tools import PgConfig

logger = logging.getLogger(__name__)

__all__ = [
    "PostgresServer",
]


class PostgresServer:
    """Initializes, starts and stops one PostgreSQL data directory.

    The data directory is `<work_dir>/data.tpcc`; the server log, initdb log and
    init SQL log are written next to it.
    """

    def __init__(
        self,
        pg: PgConfig,
        work_dir: Path,
        settings: BenchmarkSettings,
        env: Mapping[str, str] | None = None,
        strict_readiness: bool = False,
    ) -> None:
        self.pg = pg
        self.work_dir = Path(work_dir)
        self.settings = settings
        self.env = dict(env) if env is not None else None
        self.strict_readiness = strict_readiness
        self._state = LifecycleState.NOT_STARTED
        self._stop_failed = False

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == LifecycleState.RUNNING

    @property
    def data_dir(self) -> Path:
        return self.work_dir / DATA_DIR_NAME

    @property
    def server_log(self) -> Path:
        return self.work_dir / SERVER_LOG_NAME

    def _require_state(self, operation: str, *allowed: LifecycleState) -> None:
        if self._state not in allowed:
            raise LifecycleStateError(operation, self._state, allowed)

    def _connection_args(self) -> list[str]:
        return ["-h", self.settings.pghost, "-p", str(self.settings.pgport)]

    def initialize(self) -> None:
        """Run initdb against a fresh data directory.

        Raises:
            InitializationFailedError: If initdb exits non-zero. The initdb log is kept.
        """
        self._require_state("initialize", LifecycleState.NOT_STARTED)

        log_path = self.work_dir / INITDB_LOG_NAME
        exit_code = run_logged(
            [self.pg.tool("initdb"), "-D", self.data_dir],
            log_path=log_path,
            env=self.env,
        )
        if exit_code != 0:
            raise InitializationFailedError(
                f"initdb failed. See log file [{log_path}] for details."
            )
        self._state = LifecycleState.INITIALIZED

    def start(self) -> None:
        """Start the server in the background and wait for it to accept connections.

        Readiness is polled with pg_isready. If it cannot be confirmed, a warning is
        logged and the benchmark proceeds, unless strict readiness is enabled.
        Afterwards the superuser role is created if it does not exist yet.

        Raises:
            ServerStartFailedError: If pg_ctl start exits non-zero.
            ServerStartUnconfirmedError: If readiness is unconfirmed in strict mode.
        """
        self._require_state(
            "start", LifecycleState.INITIALIZED, LifecycleState.STOPPED
        )

        cmd = [self.pg.tool("pg_ctl"), "-D", self.data_dir, "-l", self.server_log]
        if self.settings.pg_initdb_opts:
            cmd += ["-o", self.settings.pg_initdb_opts]
        cmd.append("start")
        logger.info(f"Starting server as: {shlex.join(str(c) for c in cmd)}")

        exit_code = run_logged(cmd, env=self.env)
        if exit_code != 0:
            raise ServerStartFailedError(
                f"pg_ctl start failed. See log file {self.server_log} for details."
            )

        # From here on teardown must stop the server.
        self._state = LifecycleState.RUNNING

        if not self.wait_until_ready():
            message = (
                "Unable to verify the server is accepting connections. "
                f"See log file {self.server_log} for details."
            )
            if self.strict_readiness:
                raise ServerStartUnconfirmedError(message)
            logger.warning(message)

        self.ensure_superuser()

    def wait_until_ready(self) -> bool:
        """Poll pg_isready until it succeeds or the attempt budget is exhausted.

        Checks start one interval apart and each waits at most one interval, so
        the poll is bounded by about attempts x interval.
        """
        attempts = Environment.SERVER.READY_POLL_ATTEMPTS
        interval = Environment.SERVER.READY_POLL_INTERVAL
        ready_check = [
            self.pg.tool("pg_isready"),
            "-q",
            *self._connection_args(),
            "-t",
            str(max(1, int(interval))),
        ]

        logger.info("Waiting for server to be ready to accept connections...")
        for attempt in range(1, attempts + 1):
            started = time.monotonic()
            if run_captured(ready_check, env=self.env).returncode == 0:
                logger.info("Server is ready")
                return True
            logger.debug(f"Server not ready (attempt {attempt}/{attempts})")
            remaining = interval - (time.monotonic() - started)
            if attempt < attempts and remaining > 0:
                time.sleep(remaining)

        return False

    def ensure_superuser(self) -> None:
        """Create the configured superuser role unless it already exists."""
        role = self.settings.pg_superuser
        query = f"SELECT count(0) FROM pg_roles WHERE rolname='{role}'"
        result = run_captured(
            [
                self.pg.tool("psql"),
                *self._connection_args(),
                "-d",
                self.settings.pg_defaultdbase,
                "-tAc",
                query,
            ],
            env=self.env,
        )
        if result.returncode != 0:
            logger.warning(
                f"Unable to check for role {role}: {result.stderr.strip()}"
            )
            return

        try:
            count = int(result.stdout.strip() or 0)
        except ValueError:
            logger.warning(f"Unexpected output checking for role {role}: {result.stdout!r}")
            return

        if count == 0:
            logger.info(f"Creating superuser {role}")
            created = run_captured(
                [self.pg.tool("createuser"), *self._connection_args(), "-d", "-s", role],
                env=self.env,
            )
            if created.returncode != 0:
                logger.warning(
                    f"createuser {role} failed: {created.stderr.strip()}"
                )

    def run_init_script(self, path: Path | None) -> None:
        """Execute the post-initialize SQL script against the default database.

        Does nothing when no path is configured.

        Raises:
            InitScriptFailedError: If the file is missing or psql exits non-zero.
        """
        if path is None:
            return
        self._require_state("run init script on", LifecycleState.RUNNING)

        path = Path(path)
        if not path.is_file():
            raise InitScriptFailedError(f"SQL script file does not exist: {path}")

        log_path = self.work_dir / INIT_SQL_LOG_NAME
        logger.info(f"Running SQL script: {path}")
        exit_code = run_logged(
            [
                self.pg.tool("psql"),
                *self._connection_args(),
                "-U",
                self.settings.pg_superuser,
                "-d",
                self.settings.pg_defaultdbase,
                "-v",
                "ON_ERROR_STOP=1",
                "-f",
                path,
            ],
            log_path=log_path,
            env=self.env,
        )
        if exit_code != 0:
            raise InitScriptFailedError(
                f"SQL script execution failed. See log file [{log_path}] for details."
            )
        logger.info("SQL script executed successfully.")

    def stop(self) -> None:
        """Stop the server without waiting for clients (immediate mode).

        Raises:
            StopFailedError: If pg_ctl stop exits non-zero. The state stays RUNNING
                and the failure is final: teardown neither retries the stop nor
                touches the data directory.
        """
        self._require_state("stop", LifecycleState.RUNNING)

        exit_code = run_logged(
            [
                self.pg.tool("pg_ctl"),
                "-D",
                self.data_dir,
                "-l",
                self.server_log,
                "-m",
                Environment.SERVER.STOP_MODE,
                "stop",
            ],
            env=self.env,
        )
        if exit_code != 0:
            self._stop_failed = True
            raise StopFailedError(
                f"pg_ctl stop failed. See log file [{self.server_log}] for details."
            )
        self._state = LifecycleState.STOPPED

    def restart(self) -> None:
        """Stop, wait for the configured restart delay, and start again."""
        self.stop()
        delay = Environment.SERVER.RESTART_DELAY
        logger.info(f"Waiting {delay}s before restarting the server")
        time.sleep(delay)
        self.start()

    def remove_data_dir(self) -> None:
        logger.info(f"Removing data directory {self.data_dir}")
        shutil.rmtree(self.data_dir, ignore_errors=True)

    def database_size(self) -> int:
        """Total size in bytes of the files under the data directory."""
        if not self.data_dir.is_dir():
            return 0
        total = 0
        for path in self.data_dir.rglob("*"):
            # The running server may remove temporary files while we walk.
            with contextlib.suppress(FileNotFoundError):
                if path.is_file():
                    total += path.stat().st_size
        return total

    def teardown(self, remove_data_dir: bool = False) -> None:
        """Stop the server if it is running, then optionally remove the data directory.

        A failed stop raises StopFailedError before the data directory is touched.
        After a failed stop nothing is done at all.
        """
        if self._stop_failed:
            logger.warning(
                f"Skipping cleanup after failed stop. Data directory kept: {self.data_dir}"
            )
            return
        if self.is_running:
            self.stop()
        if remove_data_dir:
            self.remove_data_dir()

    @contextlib.contextmanager
    def managed(self, remove_data_dir: bool = False) -> Iterator["PostgresServer"]:
        """Scope in which the server may be started.

        On exit (including termination signals), teardown() runs exactly once
        against the current state.
        """
        with raise_on_termination_signals():
            try:
                yield self
            finally:
                self.teardown(remove_data_dir=remove_data_dir)
