# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the request and response data models."""

import pytest
from pydantic import ValidationError

from dcgmdiag.common.constants import (
    BLANK_STRING,
    MAX_ERRORS,
    MAX_NUM_DEVICES,
    PER_GPU_TEST_COUNT,
    SOFTWARE_TEST_COUNT,
    UNUSED_GPU_ID,
)
from dcgmdiag.common.enums import DiagResult, PerGpuTest
from dcgmdiag.common.models import (
    DiagErrorDetail,
    DiagResponse,
    DiagTestResult,
    PerGpuResponse,
    RunRequest,
)


class TestRunRequest:
    """Tests for RunRequest."""

    def test_defaults(self):
        request = RunRequest()
        assert request.group_id == 0
        assert request.gpu_list == ""
        assert request.total_iterations == 1
        assert request.current_iteration == 0
        assert request.verbose is False
        assert request.json_output is False
        assert request.primary_test_name == ""

    def test_is_frozen(self):
        request = RunRequest(group_id=3)
        with pytest.raises(ValidationError):
            request.group_id = 4

    def test_model_copy_stamps_iteration(self):
        request = RunRequest(test_names=("1",))
        stamped = request.model_copy(update={"current_iteration": 2, "total_iterations": 5})
        assert stamped.current_iteration == 2
        assert stamped.total_iterations == 5
        assert request.current_iteration == 0

    @pytest.mark.parametrize("total", [0, -1])
    def test_rejects_non_positive_iterations(self, total):
        with pytest.raises(ValidationError):
            RunRequest(total_iterations=total)

    def test_primary_test_name_is_first_selector(self):
        request = RunRequest(test_names=("context_create", "memory"))
        assert request.primary_test_name == "context_create"


class TestDiagTestResult:
    """Tests for DiagTestResult."""

    def test_defaults_to_not_run(self):
        assert DiagTestResult().status == DiagResult.NOT_RUN

    def test_set_errors_skips_empty_entries(self):
        result = DiagTestResult(
            status=DiagResult.FAIL,
            errors=[DiagErrorDetail(), DiagErrorDetail(msg="boom", code=4)],
        )
        assert [e.msg for e in result.set_errors] == ["boom"]

    def test_rejects_more_than_max_errors(self):
        with pytest.raises(ValidationError):
            DiagTestResult(errors=[DiagErrorDetail(msg="e")] * (MAX_ERRORS + 1))


class TestPerGpuResponse:
    """Tests for PerGpuResponse."""

    def test_default_slot_is_unused(self):
        slot = PerGpuResponse()
        assert slot.gpu_id == UNUSED_GPU_ID
        assert not slot.is_populated
        assert len(slot.results) == PER_GPU_TEST_COUNT
        assert not slot.ran_any_test()

    def test_short_results_are_padded(self):
        slot = PerGpuResponse(gpu_id=0, results=[DiagTestResult(status=DiagResult.PASS)])
        assert len(slot.results) == PER_GPU_TEST_COUNT
        assert slot.results[0].status == DiagResult.PASS
        assert slot.results[-1].status == DiagResult.NOT_RUN
        assert slot.ran_any_test()

    def test_context_create_reads_memory_slot(self):
        slot = PerGpuResponse(gpu_id=0, results=[DiagTestResult(status=DiagResult.FAIL)])
        assert slot.result_for(PerGpuTest.CONTEXT_CREATE) is slot.results[0]
        assert slot.result_for(PerGpuTest.MEMORY) is slot.results[0]


class TestDiagResponse:
    """Tests for DiagResponse."""

    def test_initialized_has_fixed_shape(self):
        response = DiagResponse.initialized()
        assert len(response.per_gpu_responses) == MAX_NUM_DEVICES
        assert all(not slot.is_populated for slot in response.per_gpu_responses)
        assert len(response.level_one_results) == SOFTWARE_TEST_COUNT
        assert response.dev_serials == [BLANK_STRING] * MAX_NUM_DEVICES
        assert response.active_level_one_results == []
        assert not response.has_system_error

    def test_partial_document_is_padded(self):
        response = DiagResponse.model_validate(
            {
                "gpu_count": 1,
                "dev_serials": ["SN-0"],
                "level_one_test_count": 2,
                "level_one_results": [{"status": 0}],
                "per_gpu_responses": [{"gpu_id": 0, "results": [{"status": 3}]}],
            }
        )
        assert len(response.per_gpu_responses) == MAX_NUM_DEVICES
        assert response.per_gpu_responses[0].results[0].status == DiagResult.FAIL
        assert response.per_gpu_responses[1].gpu_id == UNUSED_GPU_ID
        assert response.dev_serials[0] == "SN-0"
        assert response.dev_serials[1] == BLANK_STRING
        assert len(response.active_level_one_results) == 2
        assert response.active_level_one_results[1].status == DiagResult.NOT_RUN

    @pytest.mark.parametrize(
        "field,value",
        [
            ("gpu_count", MAX_NUM_DEVICES + 1),
            ("gpu_count", -1),
            ("level_one_test_count", SOFTWARE_TEST_COUNT + 1),
            ("per_gpu_responses", [{}] * (MAX_NUM_DEVICES + 1)),
        ],
    )
    def test_rejects_values_beyond_capacity(self, field, value):
        with pytest.raises(ValidationError):
            DiagResponse.model_validate({field: value})

    def test_system_error_detection(self):
        response = DiagResponse(system_error=DiagErrorDetail(msg="engine failed"))
        assert response.has_system_error
