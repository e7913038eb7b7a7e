# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by hammerbench.

Every fatal condition is a HammerBenchError so the CLI can report it and exit
with status 1 without a traceback.
"""

from pathlib import Path

from hammerbench.common.enums import LifecycleState


class HammerBenchError(Exception):
    """Base class for all hammerbench errors."""


class ConfigNotFoundError(HammerBenchError):
    """The primary configuration file does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Configuration file does not exist: {path}. See usage for details"
        )
        self.path = path


class ArgumentValidationError(HammerBenchError):
    """A required path or flag is missing or invalid."""


class InvalidSettingsError(HammerBenchError):
    """A configuration key holds a value of the wrong type or out of range."""


class PgConfigError(HammerBenchError):
    """pg_config could not be queried."""


class InitializationFailedError(HammerBenchError):
    """initdb exited with a non-zero status."""


class ServerStartFailedError(HammerBenchError):
    """pg_ctl start exited with a non-zero status."""


class ServerStartUnconfirmedError(HammerBenchError):
    """The server did not report ready within the polling budget."""


class InitScriptFailedError(HammerBenchError):
    """The post-initialize SQL script is missing or failed."""


class ScriptWriteFailedError(HammerBenchError):
    """A HammerDB control script could not be written."""


class BenchmarkRunFailedError(HammerBenchError):
    """hammerdbcli or a benchmark cycle exited with a non-zero status."""

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class StopFailedError(HammerBenchError):
    """pg_ctl stop failed. Cleanup is skipped to keep data and logs."""


class LifecycleStateError(HammerBenchError):
    """A lifecycle operation was requested from a state that does not allow it."""

    def __init__(
        self,
        operation: str,
        state: LifecycleState,
        allowed: tuple[LifecycleState, ...],
    ) -> None:
        allowed_names = ", ".join(s.name for s in allowed)
        super().__init__(
            f"Cannot {operation} server in state {state.name} "
            f"(allowed from: {allowed_names})"
        )
        self.operation = operation
        self.state = state


class BenchmarkInterruptedError(HammerBenchError):
    """The process received a termination signal."""

    def __init__(self, signal_name: str) -> None:
        super().__init__(f"Interrupted by {signal_name}")
        self.signal_name = signal_name
