# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import contextlib
import logging
import signal
from collections.abc import Iterator

from hammerbench.common.exceptions import BenchmarkInterruptedError

logger = logging.getLogger(__name__)

TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM, signal.SIGHUP)


def _raise_interrupted(signum: int, frame) -> None:
    name = signal.Signals(signum).name
    logger.warning(f"Received {name}, tearing down")
    raise BenchmarkInterruptedError(name)


@contextlib.contextmanager
def raise_on_termination_signals() -> Iterator[None]:
    """Turn termination signals into BenchmarkInterruptedError for the enclosed block.

    The exception unwinds through any enclosing context managers so their
    teardown runs before the process exits. Previous handlers are restored on
    exit.
    """
    previous = {}
    for sig in TERMINATION_SIGNALS:
        previous[sig] = signal.signal(sig, _raise_interrupted)
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
