# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Base class for diagnostic report exporters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from dcgmdiag.exporters.diag_exporter_config import DiagExporterConfig

if TYPE_CHECKING:
    from rich.console import Console


class DiagBaseExporter(ABC):
    """Renders one diagnostic response into a report.

    Subclasses only build the report text; printing goes through ``export``.
    """

    def __init__(self, config: DiagExporterConfig) -> None:
        self._config = config
        self._response = config.response
        self._gpu_ids = config.gpu_ids
        self._request = config.request

    @abstractmethod
    def _generate_content(self) -> str:
        """Return the full report as a string."""

    def export(self, console: Console) -> None:
        """Print the report verbatim (no markup, highlighting or wrapping)."""
        console.print(
            self._generate_content(),
            end="",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )
