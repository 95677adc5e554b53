# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for iterative diagnostic runs."""

from typing import Any

from pydantic import BaseModel

from dcgmdiag.common.enums import ReturnCode


class IterationResult(BaseModel):
    """Result from executing a single diagnostic iteration.

    Attributes:
        label: Label identifying this iteration (e.g., "iteration_0001")
        iteration: Zero-based index of the iteration
        return_code: Overall outcome of the iteration
        document: Structured report fragment (JSON output mode only)
        error: Failure message if the run itself failed
    """

    label: str
    iteration: int
    return_code: ReturnCode
    document: dict[str, Any] | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.return_code == ReturnCode.OK
