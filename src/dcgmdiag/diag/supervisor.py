# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Supervision of a single diagnostic run on the remote engine."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from dcgmdiag import __version__
from dcgmdiag.common.cancellation import CancellationState
from dcgmdiag.common.constants import POLL_INTERVAL_SECONDS
from dcgmdiag.common.enums import ReturnCode
from dcgmdiag.common.exceptions import EngineTransportError
from dcgmdiag.common.models import DiagResponse, RunRequest
from dcgmdiag.diag.classifier import derive_gpu_ids, get_failure_result
from dcgmdiag.exporters.diag_console_exporter import DiagConsoleExporter
from dcgmdiag.exporters.diag_exporter_config import DiagExporterConfig
from dcgmdiag.exporters.diag_json_exporter import (
    DiagJsonExporter,
    build_failure_document,
)

if TYPE_CHECKING:
    from rich.console import Console

    from dcgmdiag.engine.protocols import (
        DiagEngineProtocol,
        ErrorPriorityLookupProtocol,
    )

logger = logging.getLogger(__name__)

__all__ = [
    "RemoteDiagExecutor",
    "RunOutcome",
    "RunSupervisor",
]

# Engine rejections that get a fixed message and are never retried.
REJECTION_MESSAGES: dict[ReturnCode, str] = {
    ReturnCode.GROUP_INCOMPATIBLE: "Error: Diagnostic can only be performed on a homogeneous group of GPUs.",
    ReturnCode.NOT_SUPPORTED: "Error: Diagnostic could not be run because the Tesla recommended driver is not being used.",
    ReturnCode.PAUSED: "Error: Diagnostic could not be run while DCGM is paused.",
}

STOP_FAILED_MESSAGE = "\nError: Could not stop the launched diagnostic."


@dataclass(slots=True)
class RunOutcome:
    """Result of supervising one diagnostic run.

    Attributes:
        return_code: Externally observed outcome of the run
        response: Response record (empty when the run never completed)
        gpu_ids: GPU working set the report covered
        document: Structured report fragment, in JSON output mode only
        message: The failure message shown to the user, if the run failed
    """

    return_code: ReturnCode
    response: DiagResponse
    gpu_ids: list[int] = field(default_factory=list)
    document: dict[str, Any] | None = None
    message: str | None = None


class RemoteDiagExecutor:
    """Runs the blocking engine call on a background thread.

    The thread is a daemon: after ``stop`` the supervisor stops reading its
    result and the process does not wait for the engine call to return.
    """

    def __init__(self, engine: DiagEngineProtocol, request: RunRequest) -> None:
        self._engine = engine
        self._request = request
        self._result = ReturnCode.OK
        self._response = DiagResponse.initialized()
        self._exited = threading.Event()
        self._lock = threading.Lock()
        self._stopped = False
        self._thread = threading.Thread(
            target=self._run, name="remote-diag-executor", daemon=True
        )

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        response: DiagResponse | None = None
        try:
            result, response = self._engine.start_run(self._request)
        except EngineTransportError as e:
            logger.error(f"Diagnostic request did not reach the host engine: {e}")
            result = e.return_code
        except Exception:
            logger.exception("Unexpected error while running the diagnostic")
            result = ReturnCode.GENERIC_ERROR

        with self._lock:
            if self._stopped:
                logger.debug(
                    f"Discarding result {result.value} of an abandoned diagnostic run"
                )
            else:
                self._result = result
                if response is not None:
                    self._response = response
        self._exited.set()

    def has_exited(self) -> bool:
        return self._exited.is_set()

    def stop(self) -> None:
        """Abandon the engine call.

        The run is reported as killed with an empty response, and whatever the
        engine returns afterwards is discarded.
        """
        with self._lock:
            self._stopped = True
            self._result = ReturnCode.NVVS_KILLED
            self._response = DiagResponse.initialized()

    @property
    def result(self) -> ReturnCode:
        return self._result

    @property
    def response(self) -> DiagResponse:
        return self._response


class RunSupervisor:
    """Owns the lifecycle of one diagnostic invocation on the remote engine.

    ``execute`` dispatches the run, polls until it completes or a signal requests
    cancellation, reconciles the engine's return code, emits the report and
    returns the overall outcome (which a failing test result can turn into
    ``NVVS_ERROR`` or ``NVVS_ISOLATE_ERROR`` even when the engine returned OK).

    Text reports and failure messages are printed to ``console`` right away. In
    JSON mode the document is returned on the outcome so the caller can decide
    whether to print it alone or fold it into a multi-iteration document.
    """

    def __init__(
        self,
        engine: DiagEngineProtocol,
        state: CancellationState,
        priority_lookup: ErrorPriorityLookupProtocol,
        console: Console,
        poll_interval: float | None = None,
    ) -> None:
        self.engine = engine
        self.state = state
        self.priority_lookup = priority_lookup
        self.console = console
        self.poll_interval = (
            POLL_INTERVAL_SECONDS if poll_interval is None else poll_interval
        )

    def execute(self, request: RunRequest) -> RunOutcome:
        """Run the diagnostic once and report on it.

        Args:
            request: Request to dispatch to the engine

        Returns:
            RunOutcome with the overall return code and the report fragment
        """
        result, response = self.execute_on_server(request)

        if result in REJECTION_MESSAGES:
            return self._failure(request, result, response, REJECTION_MESSAGES[result])

        if result != ReturnCode.OK:
            if response.has_system_error:
                message = response.system_error.msg
            else:
                message = (
                    f"Error: Unable to complete diagnostic for group {request.group_id}. "
                    f"Return: ({result.value}) {result.error_string()}."
                )
            if result == ReturnCode.TIMEOUT:
                message += self._stop_after_timeout()
            return self._failure(request, result, response, message)

        # An engine-side error despite a successful call only fails text mode runs.
        if not request.json_output and response.has_system_error:
            return self._failure(
                request,
                ReturnCode.NVVS_ERROR,
                response,
                f"Error: {response.system_error.msg}\n",
                logged_code=result,
            )

        gpu_ids = derive_gpu_ids(request, response)
        exporter_config = DiagExporterConfig(
            response=response, gpu_ids=gpu_ids, request=request
        )

        document = None
        if request.json_output:
            document = DiagJsonExporter(exporter_config).build_document()
        else:
            DiagConsoleExporter(exporter_config).export(self.console)

        result = get_failure_result(response, self.priority_lookup)
        if result != ReturnCode.OK:
            logger.warning(
                f"Diagnostic for group {request.group_id} reported failures: "
                f"{result.error_string()}"
            )
        return RunOutcome(
            return_code=result,
            response=response,
            gpu_ids=gpu_ids,
            document=document,
        )

    def execute_on_server(self, request: RunRequest) -> tuple[ReturnCode, DiagResponse]:
        """Dispatch the run and poll it until completion or cancellation.

        Cancellation is honored only while this call is in flight. On
        cancellation one abort request is sent and the dispatch is abandoned.
        """
        executor = RemoteDiagExecutor(self.engine, request)
        self.state.arm()
        try:
            executor.start()
            while True:
                if self.state.cancel_requested:
                    logger.warning("Signal received; aborting the running diagnostic")
                    self._abort()
                    executor.stop()
                    return executor.result, executor.response
                if executor.has_exited():
                    return executor.result, executor.response
                time.sleep(self.poll_interval)
        finally:
            self.state.disarm()

    def _abort(self) -> None:
        try:
            result = self.engine.abort_run(self.state.hostname)
        except Exception:
            logger.exception(
                f"Error requesting abort of the diagnostic on '{self.state.hostname}'"
            )
            return
        if result != ReturnCode.OK:
            logger.error(
                f"Could not abort the diagnostic on '{self.state.hostname}'. Return: {result.value}"
            )

    def _stop_after_timeout(self) -> str:
        """Ask the engine to stop a timed-out run; returns text to append to the message."""
        try:
            result = self.engine.stop_run()
        except Exception:
            logger.exception("Error stopping the launched diagnostic")
            return STOP_FAILED_MESSAGE
        if result != ReturnCode.OK:
            logger.error(
                f"There was an error stopping the launched diagnostic. Return: {result.value}"
            )
            return STOP_FAILED_MESSAGE
        return ""

    def _failure(
        self,
        request: RunRequest,
        result: ReturnCode,
        response: DiagResponse,
        message: str,
        logged_code: ReturnCode | None = None,
    ) -> RunOutcome:
        logged_code = result if logged_code is None else logged_code
        if logged_code != ReturnCode.OK:
            logger.error(
                f"Error in diagnostic for group with ID: {request.group_id}. "
                f"Return: {logged_code.value} '{message}'"
            )

        document = None
        if request.json_output:
            document = build_failure_document(message, __version__)
        else:
            self.console.print(
                message, markup=False, highlight=False, emoji=False, soft_wrap=True
            )
        return RunOutcome(
            return_code=result, response=response, document=document, message=message
        )
