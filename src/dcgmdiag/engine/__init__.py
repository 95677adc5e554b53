# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Interfaces to the remote diagnostic engine."""

from dcgmdiag.engine.protocols import DiagEngineProtocol, ErrorPriorityLookupProtocol
from dcgmdiag.engine.replay import ReplayDiagEngine

__all__ = [
    "DiagEngineProtocol",
    "ErrorPriorityLookupProtocol",
    "ReplayDiagEngine",
]
