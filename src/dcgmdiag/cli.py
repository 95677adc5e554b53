# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Command line interface for dcgm-diag."""

import sys
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from dcgmdiag import __version__
from dcgmdiag.common.config import DiagConfig
from dcgmdiag.common.exceptions import DiagError

app = App(
    name="dcgmdiag",
    help="Run DCGM diagnostics on a group of GPUs and report the results.",
    version=__version__,
)


@app.command
def run(config: Annotated[DiagConfig, Parameter(name="*")]) -> None:
    """Run the diagnostic and exit with its return code.

    Args:
        config: Diagnostic run options
    """
    from dcgmdiag.cli_runner import run_diagnostic

    try:
        status = run_diagnostic(config)
    except DiagError as e:
        Console(stderr=True).print(f"Error: {e}", markup=False, highlight=False)
        sys.exit(1)
    sys.exit(status)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
