# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Configuration for diagnostic report exporters."""

from dataclasses import dataclass

from dcgmdiag.common.models import DiagResponse, RunRequest


@dataclass(slots=True)
class DiagExporterConfig:
    """Configuration for diagnostic report exporters.

    Attributes:
        response: Completed diagnostic response to report on
        gpu_ids: GPU working set the report covers
        request: Request the response was produced for (verbosity, test selectors)
    """

    response: DiagResponse
    gpu_ids: list[int]
    request: RunRequest
