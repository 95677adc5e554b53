# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Text and JSON report exporters for diagnostic responses."""

from dcgmdiag.exporters.diag_base_exporter import DiagBaseExporter
from dcgmdiag.exporters.diag_console_exporter import DiagConsoleExporter
from dcgmdiag.exporters.diag_exporter_config import DiagExporterConfig
from dcgmdiag.exporters.diag_json_exporter import (
    DiagJsonExporter,
    build_failure_document,
    dumps_document,
)

__all__ = [
    "DiagBaseExporter",
    "DiagConsoleExporter",
    "DiagExporterConfig",
    "DiagJsonExporter",
    "build_failure_document",
    "dumps_document",
]
