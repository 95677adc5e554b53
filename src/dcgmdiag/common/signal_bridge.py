# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Bridge from termination signals to the cooperative cancellation flag."""

from __future__ import annotations

import logging
import signal
from types import FrameType
from typing import Any

from dcgmdiag.common.cancellation import CancellationState

logger = logging.getLogger(__name__)

__all__ = [
    "TERMINATION_SIGNALS",
    "SignalBridge",
    "installed_bridge",
]

TERMINATION_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name)
    for name in ("SIGHUP", "SIGINT", "SIGQUIT", "SIGTERM")
    if hasattr(signal, name)
)

# The bridge whose handlers are registered with the process, if any.
_installed_bridge: SignalBridge | None = None


def installed_bridge() -> SignalBridge | None:
    return _installed_bridge


class SignalBridge:
    """Installs termination signal handlers that request cancellation of a diagnostic.

    While the cancellation state is armed, a delivered signal only sets the
    cancellation flag; the supervisor's poll loop does the abort. Outside that
    window the handler previously registered for the signal still fires.

    Handlers are registered at most once per process. Installing a second bridge
    while one is active re-binds the active bridge to the new cancellation state
    instead of stacking another set of handlers on top of it.

    Python runs signal handlers on the main thread between bytecodes, so chaining
    to the previous handler from inside the handler is not reentrant.
    """

    def __init__(
        self,
        state: CancellationState,
        signals: tuple[signal.Signals, ...] = TERMINATION_SIGNALS,
    ) -> None:
        self.state = state
        self.signals = signals
        self._previous_handlers: dict[int, Any] = {}

    @property
    def installed(self) -> bool:
        return _installed_bridge is self

    def install(self) -> None:
        """Install the handlers. Calling this more than once has no effect."""
        global _installed_bridge
        if _installed_bridge is not None:
            if _installed_bridge is not self:
                _installed_bridge.state = self.state
                logger.debug(
                    "Signal handlers already installed; bound them to the new "
                    "cancellation state"
                )
            return

        _installed_bridge = self
        for signum in self.signals:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)
        logger.debug(
            f"Installed diagnostic signal handlers for {[s.name for s in self.signals]}"
        )

    def uninstall(self) -> None:
        """Restore the handlers that were registered before ``install``."""
        global _installed_bridge
        if not self.installed:
            return
        for signum, previous in self._previous_handlers.items():
            signal.signal(signum, previous if previous is not None else signal.SIG_DFL)
        self._previous_handlers.clear()
        _installed_bridge = None

    def _handle_signal(self, signum: int, frame: FrameType | None) -> None:
        if self.state.request_cancellation():
            return
        self._run_previous_handler(signum, frame)

    def _run_previous_handler(self, signum: int, frame: FrameType | None) -> None:
        previous = self._previous_handlers.get(signum)
        if previous is None or previous == signal.SIG_DFL:
            # Let the default disposition act, then take the signal back over if
            # the process survived it.
            signal.signal(signum, signal.SIG_DFL)
            try:
                signal.raise_signal(signum)
            finally:
                signal.signal(signum, self._handle_signal)
        elif previous != signal.SIG_IGN and callable(previous):
            previous(signum, frame)
