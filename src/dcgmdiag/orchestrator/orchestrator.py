# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Iteration controller for repeated diagnostic runs."""

import logging
from typing import Any

from rich.console import Console

from dcgmdiag.common.enums import ReturnCode
from dcgmdiag.common.models import RunRequest
from dcgmdiag.diag.supervisor import RunSupervisor
from dcgmdiag.exporters.diag_json_exporter import (
    ITERATIONS,
    RESULT,
    WARNING,
    dumps_document,
)
from dcgmdiag.orchestrator.models import IterationResult
from dcgmdiag.orchestrator.strategies import (
    FixedIterationsStrategy,
    IterationStrategy,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DiagOrchestrator",
]


class DiagOrchestrator:
    """Runs the diagnostic once or repeatedly through a ``RunSupervisor``.

    The strategy decides:
    - What request to run next
    - When to stop (based on results so far)
    - How to label iterations

    Text output is printed as it happens. In JSON mode one document is printed
    at the end: the single run's document, or the iterations document that
    collects every iteration's fragment with the overall result.
    """

    def __init__(self, supervisor: RunSupervisor, console: Console) -> None:
        self.supervisor = supervisor
        self.console = console

    def run(self, request: RunRequest) -> ReturnCode:
        """Run the diagnostic as many times as the request asks for.

        Args:
            request: Request built from the command line

        Returns:
            OK if every iteration passed, otherwise the first failing code
        """
        if request.total_iterations <= 1:
            outcome = self.supervisor.execute(request)
            if outcome.document is not None:
                self._print_document(outcome.document)
            return outcome.return_code

        results = self.execute(
            request, FixedIterationsStrategy(request.total_iterations)
        )
        overall = next(
            (result.return_code for result in results if not result.success),
            ReturnCode.OK,
        )

        if request.json_output:
            self._print_document(self.build_iterations_document(results, overall))
        elif overall == ReturnCode.OK:
            self._print(
                f"Passed all {request.total_iterations} runs of the diagnostic\n"
            )
        else:
            self._print(
                "Aborting the iterative runs of the diagnostic due to failure: "
                f"{overall.error_string()}\n"
            )
        return overall

    def execute(
        self, base_request: RunRequest, strategy: IterationStrategy
    ) -> list[IterationResult]:
        """Execute iterations based on strategy.

        Args:
            base_request: Request built from the command line
            strategy: Iteration strategy that decides what to run

        Returns:
            List of IterationResult, one per iteration executed
        """
        results: list[IterationResult] = []
        run_index = 0

        logger.info(
            f"Starting iterative diagnostic with strategy: {strategy.__class__.__name__}"
        )

        while strategy.should_continue(results):
            request = strategy.get_next_request(base_request, results)
            label = strategy.get_run_label(run_index)

            if not request.json_output:
                self._print(
                    f"\nRunning iteration {run_index + 1} of "
                    f"{request.total_iterations}...\n"
                )
            logger.info(f"[{run_index + 1}] Executing {label}...")

            outcome = self.supervisor.execute(request)
            result = IterationResult(
                label=label,
                iteration=run_index,
                return_code=outcome.return_code,
                document=outcome.document,
                error=outcome.message,
            )
            results.append(result)

            if result.success:
                logger.info(f"[{run_index + 1}] {label} completed successfully")
            else:
                logger.error(
                    f"[{run_index + 1}] {label} failed: {result.return_code.error_string()}"
                )

            run_index += 1

        successful = sum(1 for r in results if r.success)
        logger.info(f"Iterations complete: {successful}/{len(results)} successful")
        return results

    @staticmethod
    def build_iterations_document(
        results: list[IterationResult], overall: ReturnCode
    ) -> dict[str, Any]:
        """Collect iteration fragments and the overall verdict into one document."""
        document: dict[str, Any] = {
            ITERATIONS: [r.document for r in results if r.document is not None]
        }
        if overall == ReturnCode.OK:
            document[RESULT] = "Pass"
        else:
            document[RESULT] = "Fail"
            document[WARNING] = overall.error_string()
        return document

    def _print_document(self, document: dict[str, Any]) -> None:
        self._print(dumps_document(document))

    def _print(self, text: str) -> None:
        self.console.print(
            text, end="", markup=False, highlight=False, emoji=False, soft_wrap=True
        )
