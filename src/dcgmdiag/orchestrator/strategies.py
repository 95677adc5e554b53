# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Iteration strategies for repeated diagnostic runs."""

import logging
from abc import ABC, abstractmethod

from dcgmdiag.common.models import RunRequest
from dcgmdiag.orchestrator.models import IterationResult

logger = logging.getLogger(__name__)

__all__ = [
    "FixedIterationsStrategy",
    "IterationStrategy",
]


class IterationStrategy(ABC):
    """Base class for iteration strategies.

    Strategies decide:
    1. What request to run next (based on results so far)
    2. Whether to continue or stop
    3. How to label iterations
    """

    @abstractmethod
    def should_continue(self, results: list[IterationResult]) -> bool:
        """Decide whether to run another iteration.

        Args:
            results: Results from iterations executed so far

        Returns:
            True if should run another iteration, False to stop
        """
        pass

    @abstractmethod
    def get_next_request(
        self, base_request: RunRequest, results: list[IterationResult]
    ) -> RunRequest:
        """Generate the request for the next iteration.

        Args:
            base_request: Request built from the command line
            results: Results from iterations executed so far

        Returns:
            Request for next iteration
        """
        pass

    @abstractmethod
    def get_run_label(self, run_index: int) -> str:
        """Generate label for the iteration at the given zero-based index."""
        pass


class FixedIterationsStrategy(IterationStrategy):
    """Run the same request a fixed number of times, stopping at the first failure.

    Iterations share the remote engine, so they always run one after another.

    Attributes:
        num_iterations: Number of iterations to run
    """

    def __init__(self, num_iterations: int) -> None:
        if num_iterations < 1:
            raise ValueError(
                f"Invalid iteration count: {num_iterations}. "
                f"The diagnostic must run at least once."
            )
        self.num_iterations = num_iterations

    def should_continue(self, results: list[IterationResult]) -> bool:
        """Continue until num_iterations ran or one of them failed."""
        if results and not results[-1].success:
            return False
        return len(results) < self.num_iterations

    def get_next_request(
        self, base_request: RunRequest, results: list[IterationResult]
    ) -> RunRequest:
        """Stamp the iteration index and total onto a copy of the base request."""
        return base_request.model_copy(
            update={
                "current_iteration": len(results),
                "total_iterations": self.num_iterations,
            }
        )

    def get_run_label(self, run_index: int) -> str:
        """Generate zero-padded label: iteration_0001, iteration_0002, etc."""
        return f"iteration_{run_index + 1:04d}"
