# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Data models for diagnostic run requests and engine responses.

The response models keep the fixed-capacity shape of the engine's wire record:
every list is padded to its capacity, and unpopulated per-GPU slots carry the
``UNUSED_GPU_ID`` sentinel until the engine writes a real GPU id into them.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dcgmdiag.common.constants import (
    BLANK_STRING,
    DIAG_RESPONSE_VERSION,
    MAX_ERRORS,
    MAX_NUM_DEVICES,
    PER_GPU_TEST_COUNT,
    SOFTWARE_TEST_COUNT,
    UNUSED_GPU_ID,
)
from dcgmdiag.common.enums import DiagResult, PerGpuTest


class RunRequest(BaseModel):
    """Immutable description of one diagnostic invocation.

    Attributes:
        group_id: Identifier of the GPU group to run on
        gpu_list: Comma-separated GPU index filter; empty means "whole group"
        test_names: Test-name selectors (e.g. "1", "memory", "context_create")
        parameters: Parameter overrides in ``test_name.attr_name=attr_value`` form
        config_file_contents: Contents of a diagnostic config file, if one was given
        total_iterations: Number of iterations of the whole invocation
        current_iteration: Zero-based index of the iteration this request is for
        verbose: Show detail rows even for passing tests
        json_output: Emit a structured document instead of the text report
    """

    model_config = ConfigDict(frozen=True)

    group_id: int = 0
    gpu_list: str = ""
    test_names: tuple[str, ...] = ()
    parameters: tuple[str, ...] = ()
    config_file_contents: str | None = None
    total_iterations: int = Field(default=1, ge=1)
    current_iteration: int = Field(default=0, ge=0)
    verbose: bool = False
    json_output: bool = False

    @property
    def primary_test_name(self) -> str:
        return self.test_names[0] if self.test_names else ""


class DiagErrorDetail(BaseModel):
    """One structured error attached to a test result."""

    msg: str = ""
    code: int = 0
    category: int = 0
    severity: int = 0
    gpu_id: int = -1

    @property
    def is_set(self) -> bool:
        return self.msg != ""


class DiagTestResult(BaseModel):
    """One (GPU, test) cell: a status plus up to ``MAX_ERRORS`` errors."""

    status: DiagResult = DiagResult.NOT_RUN
    errors: list[DiagErrorDetail] = Field(default_factory=list, max_length=MAX_ERRORS)
    info: str = ""

    @property
    def set_errors(self) -> list[DiagErrorDetail]:
        return [error for error in self.errors if error.is_set]


def _empty_results(count: int) -> list[DiagTestResult]:
    return [DiagTestResult() for _ in range(count)]


class PerGpuResponse(BaseModel):
    """Results of every per-GPU test for one GPU slot."""

    gpu_id: int = UNUSED_GPU_ID
    hw_diagnostic_return: int = 0
    results: list[DiagTestResult] = Field(
        default_factory=lambda: _empty_results(PER_GPU_TEST_COUNT),
        max_length=PER_GPU_TEST_COUNT,
    )

    @model_validator(mode="after")
    def pad_results(self) -> "PerGpuResponse":
        missing = PER_GPU_TEST_COUNT - len(self.results)
        if missing > 0:
            self.results.extend(_empty_results(missing))
        return self

    @property
    def is_populated(self) -> bool:
        """Whether the engine overwrote the unused-slot sentinel."""
        return self.gpu_id != UNUSED_GPU_ID

    def result_for(self, test: PerGpuTest) -> DiagTestResult:
        return self.results[test.slot]

    def ran_any_test(self) -> bool:
        return any(result.status != DiagResult.NOT_RUN for result in self.results)


class DiagResponse(BaseModel):
    """Fixed-capacity result record returned by the diagnostic engine.

    Attributes:
        version: Response record version negotiated with the engine
        dcgm_version: Version string of the engine that ran the diagnostic
        driver_version: Detected driver version
        gpu_count: Number of per-GPU slots the engine populated
        dev_ids: PCI device ids of the detected GPUs
        dev_serials: Serial numbers by GPU slot, ``BLANK_STRING`` when unknown
        level_one_test_count: Number of meaningful level-one results
        level_one_results: Software/environment checks, indexed by ``SoftwareTest``
        per_gpu_responses: Per-GPU result slots, indexed by GPU id
        system_error: Engine-level error, ``msg`` is empty when there is none
    """

    version: int = DIAG_RESPONSE_VERSION
    dcgm_version: str = ""
    driver_version: str = ""
    gpu_count: int = Field(default=0, ge=0, le=MAX_NUM_DEVICES)
    dev_ids: list[str] = Field(default_factory=list, max_length=MAX_NUM_DEVICES)
    dev_serials: list[str] = Field(
        default_factory=lambda: [BLANK_STRING] * MAX_NUM_DEVICES,
        max_length=MAX_NUM_DEVICES,
    )
    level_one_test_count: int = Field(default=0, ge=0, le=SOFTWARE_TEST_COUNT)
    level_one_results: list[DiagTestResult] = Field(
        default_factory=lambda: _empty_results(SOFTWARE_TEST_COUNT),
        max_length=SOFTWARE_TEST_COUNT,
    )
    per_gpu_responses: list[PerGpuResponse] = Field(
        default_factory=lambda: [PerGpuResponse() for _ in range(MAX_NUM_DEVICES)],
        max_length=MAX_NUM_DEVICES,
    )
    system_error: DiagErrorDetail = Field(default_factory=DiagErrorDetail)

    @model_validator(mode="after")
    def pad_to_capacity(self) -> "DiagResponse":
        """Pad partially recorded responses back to the engine's fixed shape."""
        missing_serials = MAX_NUM_DEVICES - len(self.dev_serials)
        if missing_serials > 0:
            self.dev_serials.extend([BLANK_STRING] * missing_serials)

        missing_level_one = SOFTWARE_TEST_COUNT - len(self.level_one_results)
        if missing_level_one > 0:
            self.level_one_results.extend(_empty_results(missing_level_one))

        missing_slots = MAX_NUM_DEVICES - len(self.per_gpu_responses)
        if missing_slots > 0:
            self.per_gpu_responses.extend(
                PerGpuResponse() for _ in range(missing_slots)
            )
        return self

    @classmethod
    def initialized(cls) -> "DiagResponse":
        """Return an empty response with every per-GPU slot marked unused."""
        return cls()

    @property
    def active_level_one_results(self) -> list[DiagTestResult]:
        return self.level_one_results[: self.level_one_test_count]

    @property
    def has_system_error(self) -> bool:
        return self.system_error.is_set
