# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Classification of diagnostic results.

Pure functions over a ``DiagResponse``: overall pass/fail triage, per-test GPU
bucketing, and recovery of the set of GPUs that took part in a run.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dcgmdiag.common.constants import MAX_NUM_DEVICES
from dcgmdiag.common.enums import DiagResult, ErrorPriority, PerGpuTest, ReturnCode

if TYPE_CHECKING:
    from dcgmdiag.common.models import DiagResponse, DiagTestResult, RunRequest
    from dcgmdiag.engine.protocols import ErrorPriorityLookupProtocol

__all__ = [
    "GpuBuckets",
    "bucket_gpus",
    "derive_gpu_ids",
    "get_failure_result",
    "parse_gpu_list",
    "plugin_ran",
    "populate_gpu_list",
]


@dataclass(slots=True)
class GpuBuckets:
    """GPU ids of one test grouped by status. Each GPU is in exactly one bucket."""

    passed: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    warned: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.passed) + len(self.failed) + len(self.warned) + len(self.skipped)

    def all_in(self, bucket: list[int]) -> bool:
        """Whether every GPU landed in ``bucket`` (false for an empty GPU set)."""
        return self.total > 0 and len(bucket) == self.total


def _cell_failure(
    result: DiagTestResult, priority_lookup: ErrorPriorityLookupProtocol
) -> ReturnCode | None:
    if result.status != DiagResult.FAIL:
        return None
    for error in result.errors:
        if priority_lookup.get_priority(error.code) == ErrorPriority.ISOLATE:
            return ReturnCode.NVVS_ISOLATE_ERROR
    return ReturnCode.NVVS_ERROR


def get_failure_result(
    response: DiagResponse, priority_lookup: ErrorPriorityLookupProtocol
) -> ReturnCode:
    """Collapse every result in ``response`` into one overall return code.

    Every failing cell counts, in the level-one results and in all per-GPU slots
    (results are written by GPU index, so every slot is searched). An error that
    resolves to the isolate tier returns ``NVVS_ISOLATE_ERROR`` immediately;
    otherwise any failure yields ``NVVS_ERROR`` once the whole response is scanned.
    """
    overall = ReturnCode.OK
    cells: Iterable[DiagTestResult] = (
        *response.active_level_one_results,
        *(result for slot in response.per_gpu_responses for result in slot.results),
    )
    for result in cells:
        failure = _cell_failure(result, priority_lookup)
        if failure == ReturnCode.NVVS_ISOLATE_ERROR:
            return failure
        if failure is not None:
            overall = failure
    return overall


def bucket_gpus(
    response: DiagResponse, gpu_ids: Sequence[int], test: PerGpuTest
) -> GpuBuckets:
    """Partition ``gpu_ids`` by their status for ``test``.

    Cells that did not run count as skipped so the four buckets always cover
    the whole GPU set.
    """
    buckets = GpuBuckets()
    for gpu_id in gpu_ids:
        status = response.per_gpu_responses[gpu_id].result_for(test).status
        if status == DiagResult.PASS:
            buckets.passed.append(gpu_id)
        elif status == DiagResult.FAIL:
            buckets.failed.append(gpu_id)
        elif status == DiagResult.WARN:
            buckets.warned.append(gpu_id)
        else:
            buckets.skipped.append(gpu_id)
    return buckets


def plugin_ran(response: DiagResponse, gpu_ids: Sequence[int], test: PerGpuTest) -> bool:
    """Whether at least one GPU in ``gpu_ids`` has a result for ``test``."""
    return any(
        response.per_gpu_responses[gpu_id].result_for(test).status
        != DiagResult.NOT_RUN
        for gpu_id in gpu_ids
    )


def parse_gpu_list(gpu_list: str) -> list[int]:
    """Parse a comma-separated GPU index filter such as ``"0,1,3"``."""
    return [int(token) for token in gpu_list.split(",") if token.strip()]


def populate_gpu_list(response: DiagResponse) -> list[int]:
    """Recover the GPUs that ran when no explicit filter was given.

    A slot qualifies when the engine overwrote its sentinel id and at least one
    test ran on it. At most ``gpu_count`` slots are selected.
    """
    gpu_ids: list[int] = []
    for index in range(MAX_NUM_DEVICES):
        if len(gpu_ids) >= response.gpu_count:
            break
        slot = response.per_gpu_responses[index]
        if slot.is_populated and slot.ran_any_test():
            gpu_ids.append(index)
    return gpu_ids


def derive_gpu_ids(request: RunRequest, response: DiagResponse) -> list[int]:
    """Return the GPU working set for rendering ``response``."""
    if request.gpu_list:
        return parse_gpu_list(request.gpu_list)
    return populate_gpu_list(response)
