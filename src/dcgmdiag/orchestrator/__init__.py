# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Repeated diagnostic runs with stop-on-first-failure semantics."""

from dcgmdiag.orchestrator.models import IterationResult
from dcgmdiag.orchestrator.orchestrator import DiagOrchestrator
from dcgmdiag.orchestrator.strategies import (
    FixedIterationsStrategy,
    IterationStrategy,
)

__all__ = [
    "DiagOrchestrator",
    "FixedIterationsStrategy",
    "IterationResult",
    "IterationStrategy",
]
