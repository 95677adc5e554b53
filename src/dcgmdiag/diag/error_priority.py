# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Error code to priority tier lookup."""

from collections.abc import Mapping

from dcgmdiag.common.enums import ErrorPriority

__all__ = [
    "DEFAULT_ERROR_PRIORITIES",
    "ErrorPriorityTable",
]

# Engine error codes whose presence means the GPU has to be pulled from the pool.
DEFAULT_ERROR_PRIORITIES: dict[int, ErrorPriority] = {
    4: ErrorPriority.ISOLATE,  # volatile double-bit ECC error
    6: ErrorPriority.ISOLATE,  # pending page retirements
    7: ErrorPriority.ISOLATE,  # retired pages limit
    8: ErrorPriority.ISOLATE,  # retired pages from double-bit errors
    9: ErrorPriority.ISOLATE,  # corrupt inforom
}


class ErrorPriorityTable:
    """Static mapping of error codes to priority tiers.

    Codes missing from the table resolve to ``default``.
    """

    def __init__(
        self,
        priorities: Mapping[int, ErrorPriority] | None = None,
        default: ErrorPriority = ErrorPriority.MONITOR,
    ) -> None:
        self._priorities = dict(
            DEFAULT_ERROR_PRIORITIES if priorities is None else priorities
        )
        self._default = default

    def get_priority(self, code: int) -> ErrorPriority:
        return self._priorities.get(code, self._default)
