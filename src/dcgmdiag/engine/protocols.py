# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dcgmdiag.common.enums import ErrorPriority, ReturnCode
    from dcgmdiag.common.models import DiagResponse, RunRequest


@runtime_checkable
class DiagEngineProtocol(Protocol):
    """Protocol for the remote engine that executes diagnostic runs.

    ``start_run`` blocks until the engine finishes and may raise
    ``EngineTransportError`` when the call could not reach the engine.
    """

    def start_run(self, request: RunRequest) -> tuple[ReturnCode, DiagResponse]: ...

    def stop_run(self) -> ReturnCode: ...

    def abort_run(self, hostname: str) -> ReturnCode: ...


@runtime_checkable
class ErrorPriorityLookupProtocol(Protocol):
    """Protocol for resolving an engine error code to its priority tier."""

    def get_priority(self, code: int) -> ErrorPriority: ...
