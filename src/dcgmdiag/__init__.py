# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""dcgm-diag - GPU diagnostic run orchestrator and report renderer."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dcgm-diag")
except PackageNotFoundError:
    __version__ = "unknown"
