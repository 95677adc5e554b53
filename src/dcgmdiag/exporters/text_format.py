# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Fixed-width layout primitives of the text diagnostic report."""

from dcgmdiag.common.constants import INFO_COLUMN_WIDTH
from dcgmdiag.common.enums import DiagCategory

__all__ = [
    "DIAG_FOOTER",
    "DIAG_HEADER",
    "DIAG_METADATA",
    "SECTION_BANNERS",
    "format_gpu_list",
    "format_row",
    "format_verbose_rows",
    "format_wrapped_row",
    "sanitize",
    "wrap_message",
]

DIAG_HEADER = (
    "+---------------------------+------------------------------------------------+\n"
    "| Diagnostic                | Result                                         |\n"
    "+===========================+================================================+\n"
)
DIAG_FOOTER = "+---------------------------+------------------------------------------------+\n"
DIAG_METADATA = "|-----  Metadata  ----------+------------------------------------------------|\n"

SECTION_BANNERS: dict[DiagCategory, str] = {
    DiagCategory.DEPLOYMENT: "|-----  Deployment  --------+------------------------------------------------|\n",
    DiagCategory.INTEGRATION: "+-----  Integration  -------+------------------------------------------------+\n",
    DiagCategory.HARDWARE: "+-----  Hardware  ----------+------------------------------------------------+\n",
    DiagCategory.STRESS: "+-----  Stress  ------------+------------------------------------------------+\n",
}

NAME_COLUMN_WIDTH = 25
VALUE_FIELD_WIDTH = 46

# Log preamble delimiter written by the engine in front of user-facing text.
PREAMBLE_DELIMITER = "***"
WHITESPACE = " \t\n\r\f"


def format_row(name: str, info: str) -> str:
    return f"| {name:<{NAME_COLUMN_WIDTH}} | {info:<{VALUE_FIELD_WIDTH}} |\n"


def sanitize(message: str) -> str:
    """Strip the engine's log preamble and surrounding whitespace from a message.

    Everything up to and including the last ``***`` is dropped.
    """
    _, delimiter, tail = message.rpartition(PREAMBLE_DELIMITER)
    if delimiter:
        message = tail
    return message.strip(WHITESPACE)


def wrap_message(message: str, width: int = INFO_COLUMN_WIDTH) -> list[str]:
    """Split ``message`` into ``width``-sized slices; joining them gives it back."""
    return [message[pos : pos + width] for pos in range(0, len(message), width)]


def format_verbose_rows(label: str, message: str) -> str:
    """Rows for one detail message; only the first row carries the label."""
    return "".join(
        format_row(label if index == 0 else "", chunk)
        for index, chunk in enumerate(wrap_message(message))
    )


def format_wrapped_row(name: str, info: str) -> str:
    """A row whose value may overflow the value column; an empty value still gets a row."""
    return format_verbose_rows(name, info) or format_row(name, info)


def format_gpu_list(prefix: str, gpu_ids: list[int]) -> str:
    """Format a bucket summary such as ``Fail - GPUs: 1, 2   ``."""
    plural = "s" if len(gpu_ids) != 1 else ""
    return f"{prefix} - GPU{plural}: " + ", ".join(str(g) for g in gpu_ids) + "   "
