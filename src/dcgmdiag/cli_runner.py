# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import sys
from typing import TYPE_CHECKING

from dcgmdiag.common.config import DiagConfig
from dcgmdiag.common.exceptions import InvalidRunConfigError, ReplayFileError

if TYPE_CHECKING:
    from rich.console import Console

    from dcgmdiag.engine.protocols import DiagEngineProtocol


def create_engine(config: DiagConfig) -> "DiagEngineProtocol":
    """Create the engine the diagnostic is dispatched to.

    Raises:
        InvalidRunConfigError: If no engine can be reached with the given options.
        ReplayFileError: If the recorded response file does not exist.
    """
    from dcgmdiag.engine.replay import ReplayDiagEngine

    if config.replay_file is None:
        raise InvalidRunConfigError(
            f"Unable to reach a host engine at '{config.host}': no transport is "
            f"available. Use --replay to run against a recorded diagnostic response."
        )
    if not config.replay_file.is_file():
        raise ReplayFileError(
            f"Recorded diagnostic response '{config.replay_file}' does not exist"
        )
    return ReplayDiagEngine(config.replay_file)


def run_diagnostic(config: DiagConfig, console: "Console | None" = None) -> int:
    """Run the diagnostic described by ``config``.

    Returns:
        The process exit status: the diagnostic return code truncated to an
        unsigned byte.
    """
    import logging

    from rich.console import Console

    from dcgmdiag.common.cancellation import CancellationState
    from dcgmdiag.common.logging import setup_rich_logging
    from dcgmdiag.common.signal_bridge import SignalBridge
    from dcgmdiag.diag.error_priority import ErrorPriorityTable
    from dcgmdiag.diag.supervisor import RunSupervisor
    from dcgmdiag.orchestrator import DiagOrchestrator

    setup_rich_logging(config.log_level)
    logger = logging.getLogger(__name__)

    request = config.to_run_request()
    engine = create_engine(config)

    if console is None:
        console = Console(markup=False, highlight=False, emoji=False, soft_wrap=True)

    state = CancellationState()
    SignalBridge(state).install()

    supervisor = RunSupervisor(
        engine=engine,
        state=state,
        priority_lookup=ErrorPriorityTable(),
        console=console,
    )
    orchestrator = DiagOrchestrator(supervisor, console)

    logger.info(
        f"Starting diagnostic for group {request.group_id} on '{config.host}' "
        f"({request.total_iterations} iteration(s))"
    )
    with state.bound_to_host(config.host, sys.argv[0]):
        result = orchestrator.run(request)

    logger.debug(f"Diagnostic finished with return code {result.value}")
    return result.exit_status
