# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for dcgm-diag tests."""

import io
import threading
from collections.abc import Callable
from unittest.mock import patch

import pytest
from rich.console import Console

from dcgmdiag.common.cancellation import CancellationState
from dcgmdiag.common.constants import SOFTWARE_TEST_COUNT
from dcgmdiag.common.enums import DiagResult, PerGpuTest, ReturnCode, SoftwareTest
from dcgmdiag.common.models import (
    DiagErrorDetail,
    DiagResponse,
    DiagTestResult,
    RunRequest,
)
from dcgmdiag.diag.error_priority import ErrorPriorityTable

CellSpec = DiagResult | DiagTestResult


def make_cell(
    status: DiagResult,
    *messages: str,
    info: str = "",
    code: int = 0,
    gpu_id: int = -1,
) -> DiagTestResult:
    """Create a result cell with one error entry per message."""
    return DiagTestResult(
        status=status,
        errors=[DiagErrorDetail(msg=msg, code=code, gpu_id=gpu_id) for msg in messages],
        info=info,
    )


def _as_cell(spec: CellSpec) -> DiagTestResult:
    return spec if isinstance(spec, DiagTestResult) else DiagTestResult(status=spec)


def make_response(
    gpus: dict[int, dict[PerGpuTest, CellSpec]] | None = None,
    level_one: dict[SoftwareTest, CellSpec] | None = None,
    **fields,
) -> DiagResponse:
    """Create a response with the given per-GPU and level-one cells.

    GPU slots listed in ``gpus`` get their id written; ``gpu_count`` defaults to
    the number of listed slots.
    """
    response = DiagResponse.initialized()
    gpus = gpus or {}
    response.gpu_count = fields.pop("gpu_count", len(gpus))
    for gpu_id, tests in gpus.items():
        slot = response.per_gpu_responses[gpu_id]
        slot.gpu_id = gpu_id
        for test, spec in tests.items():
            slot.results[test.slot] = _as_cell(spec)
    if level_one:
        response.level_one_test_count = SOFTWARE_TEST_COUNT
        for test, spec in level_one.items():
            response.level_one_results[test] = _as_cell(spec)
    for name, value in fields.items():
        setattr(response, name, value)
    return response


class FakeDiagEngine:
    """In-memory engine that records the calls the supervisor makes.

    ``on_start`` runs inside the dispatch thread before the result is returned,
    which lets a test act while the run is in flight.
    """

    def __init__(
        self,
        return_code: ReturnCode = ReturnCode.OK,
        response: DiagResponse | None = None,
        stop_result: ReturnCode = ReturnCode.OK,
        abort_result: ReturnCode = ReturnCode.OK,
        error: Exception | None = None,
        on_start: Callable[[], None] | None = None,
    ) -> None:
        self.return_code = return_code
        self.response = response if response is not None else make_response()
        self.stop_result = stop_result
        self.abort_result = abort_result
        self.error = error
        self.on_start = on_start
        self.requests: list[RunRequest] = []
        self.stop_calls = 0
        self.abort_calls: list[str] = []
        self.release = threading.Event()
        self.finished = threading.Event()

    def start_run(self, request: RunRequest) -> tuple[ReturnCode, DiagResponse]:
        self.requests.append(request)
        try:
            if self.on_start is not None:
                self.on_start()
            if self.error is not None:
                raise self.error
            return self.return_code, self.response
        finally:
            self.finished.set()

    def stop_run(self) -> ReturnCode:
        self.stop_calls += 1
        return self.stop_result

    def abort_run(self, hostname: str) -> ReturnCode:
        self.abort_calls.append(hostname)
        return self.abort_result


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    """Console that writes plain text into ``console_output``."""
    return Console(
        file=console_output,
        width=200,
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
        color_system=None,
    )


@pytest.fixture
def cancellation_state() -> CancellationState:
    return CancellationState()


@pytest.fixture
def priority_table() -> ErrorPriorityTable:
    return ErrorPriorityTable()


@pytest.fixture
def fast_poll():
    """Shrink the supervisor poll interval so tests do not sleep for long."""
    with patch("dcgmdiag.diag.supervisor.POLL_INTERVAL_SECONDS", 0.001):
        yield
