# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Logging setup for the command line tool.

Standard output carries only the diagnostic report, so log records are rendered
by rich on standard error.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "setup_rich_logging",
]

_LOG_FORMAT = "%(message)s"


def setup_rich_logging(level: str | int = logging.WARNING) -> RichHandler:
    """Route the root logger through a ``RichHandler`` on standard error.

    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Log level name or number for the root logger

    Returns:
        The installed handler
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="[%X]"))
    root.addHandler(handler)
    root.setLevel(level)
    return handler
