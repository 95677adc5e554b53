# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared state between the signal handlers and the run supervisor.

The signal handler context only ever flips ``cancel_requested``; it never performs
I/O or remote calls. Each field is a single attribute assignment, which is atomic
under the interpreter, so no locks are taken on either side.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

logger = logging.getLogger(__name__)

__all__ = [
    "CancellationPhase",
    "CancellationState",
]


class CancellationPhase(str, Enum):
    DISARMED = "disarmed"
    ARMED = "armed"
    CANCEL_REQUESTED = "cancel_requested"


class CancellationState:
    """Cooperative cancellation flags for one process.

    ``armed`` is true only while a diagnostic is in flight on the engine.
    ``cancel_requested`` starts false and, once set by a signal delivered while
    armed, stays set for the rest of the process.

    ``hostname`` and ``executable_path`` identify the engine a signal-triggered
    abort has to reach. They are bound for the duration of one CLI invocation.
    """

    def __init__(self) -> None:
        self.armed = False
        self.cancel_requested = False
        self.hostname = ""
        self.executable_path = ""

    @property
    def phase(self) -> CancellationPhase:
        if self.cancel_requested:
            return CancellationPhase.CANCEL_REQUESTED
        if self.armed:
            return CancellationPhase.ARMED
        return CancellationPhase.DISARMED

    def arm(self) -> None:
        self.armed = True

    def disarm(self) -> None:
        self.armed = False

    def request_cancellation(self) -> bool:
        """Request cancellation of the in-flight run.

        Safe to call from a signal handler.

        Returns:
            True if a run was armed and the request was recorded, False otherwise.
        """
        if not self.armed:
            return False
        self.cancel_requested = True
        return True

    @contextmanager
    def bound_to_host(self, hostname: str, executable_path: str = "") -> Iterator[None]:
        """Bind the engine hostname and executable path while runs are in progress."""
        self.hostname = hostname
        self.executable_path = executable_path
        logger.debug(f"Bound cancellation state to host '{hostname}'")
        try:
            yield
        finally:
            self.hostname = ""
            self.executable_path = ""
