# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for result classification and GPU set derivation."""

import pytest
from conftest import make_cell, make_response

from dcgmdiag.common.enums import (
    DiagResult,
    ErrorPriority,
    PerGpuTest,
    ReturnCode,
    SoftwareTest,
)
from dcgmdiag.common.models import RunRequest
from dcgmdiag.diag.classifier import (
    GpuBuckets,
    bucket_gpus,
    derive_gpu_ids,
    get_failure_result,
    parse_gpu_list,
    plugin_ran,
    populate_gpu_list,
)
from dcgmdiag.diag.error_priority import ErrorPriorityTable

ISOLATE_CODE = 4
MONITOR_CODE = 100


@pytest.fixture
def two_gpu_response():
    """GPU 0 passes everything, GPU 1 fails the memory test with a monitor-tier code."""

    def _make(code: int = MONITOR_CODE):
        return make_response(
            {
                0: {
                    PerGpuTest.MEMORY: DiagResult.PASS,
                    PerGpuTest.PCI: DiagResult.PASS,
                },
                1: {
                    PerGpuTest.MEMORY: make_cell(DiagResult.FAIL, "ecc error", code=code),
                    PerGpuTest.PCI: DiagResult.PASS,
                },
            }
        )

    return _make


class TestGetFailureResult:
    """Tests for get_failure_result."""

    def test_all_pass_is_ok(self, priority_table):
        response = make_response({0: {PerGpuTest.MEMORY: DiagResult.PASS}})
        assert get_failure_result(response, priority_table) == ReturnCode.OK

    def test_warn_and_skip_are_not_failures(self, priority_table):
        response = make_response(
            {
                0: {
                    PerGpuTest.MEMORY: make_cell(DiagResult.WARN, "slow", code=ISOLATE_CODE),
                    PerGpuTest.PCI: DiagResult.SKIP,
                }
            }
        )
        assert get_failure_result(response, priority_table) == ReturnCode.OK

    def test_ordinary_failure_is_nvvs_error(self, priority_table, two_gpu_response):
        response = two_gpu_response()
        assert get_failure_result(response, priority_table) == ReturnCode.NVVS_ERROR

    def test_isolate_failure_is_isolate_error(self, priority_table, two_gpu_response):
        response = two_gpu_response(ISOLATE_CODE)
        assert (
            get_failure_result(response, priority_table)
            == ReturnCode.NVVS_ISOLATE_ERROR
        )

    def test_isolate_wins_over_earlier_ordinary_failure(self, priority_table):
        response = make_response(
            {
                0: {PerGpuTest.MEMORY: make_cell(DiagResult.FAIL, "a", code=MONITOR_CODE)},
                5: {PerGpuTest.EUD_TEST: make_cell(DiagResult.FAIL, "b", code=ISOLATE_CODE)},
            }
        )
        assert (
            get_failure_result(response, priority_table)
            == ReturnCode.NVVS_ISOLATE_ERROR
        )

    def test_failure_without_errors_is_nvvs_error(self, priority_table):
        response = make_response({0: {PerGpuTest.PCI: DiagResult.FAIL}})
        assert get_failure_result(response, priority_table) == ReturnCode.NVVS_ERROR

    def test_level_one_failures_count(self, priority_table):
        response = make_response(
            level_one={
                SoftwareTest.INFOROM: make_cell(
                    DiagResult.FAIL, "corrupt inforom", code=ISOLATE_CODE
                )
            }
        )
        assert (
            get_failure_result(response, priority_table)
            == ReturnCode.NVVS_ISOLATE_ERROR
        )

    def test_level_one_results_beyond_count_are_ignored(self, priority_table):
        response = make_response(
            level_one={SoftwareTest.INFOROM: make_cell(DiagResult.FAIL, "x")}
        )
        response.level_one_test_count = SoftwareTest.INFOROM
        assert get_failure_result(response, priority_table) == ReturnCode.OK

    def test_custom_priority_lookup(self):
        table = ErrorPriorityTable(priorities={MONITOR_CODE: ErrorPriority.ISOLATE})
        response = make_response(
            {0: {PerGpuTest.PCI: make_cell(DiagResult.FAIL, "x", code=MONITOR_CODE)}}
        )
        assert get_failure_result(response, table) == ReturnCode.NVVS_ISOLATE_ERROR


class TestBucketGpus:
    """Tests for bucket_gpus."""

    def test_mixed_scenario(self, two_gpu_response):
        buckets = bucket_gpus(two_gpu_response(), [0, 1], PerGpuTest.MEMORY)
        assert buckets == GpuBuckets(passed=[0], failed=[1])

    def test_not_run_counts_as_skipped(self):
        response = make_response(
            {0: {PerGpuTest.PCI: DiagResult.PASS}, 1: {PerGpuTest.MEMORY: DiagResult.PASS}}
        )
        buckets = bucket_gpus(response, [0, 1], PerGpuTest.PCI)
        assert buckets.passed == [0]
        assert buckets.skipped == [1]

    def test_all_in(self):
        buckets = GpuBuckets(warned=[2, 3])
        assert buckets.total == 2
        assert buckets.all_in(buckets.warned)
        assert not buckets.all_in(buckets.passed)

    def test_all_in_is_false_for_empty_set(self):
        buckets = GpuBuckets()
        assert not buckets.all_in(buckets.passed)

    def test_plugin_ran(self, two_gpu_response):
        response = two_gpu_response()
        assert plugin_ran(response, [0, 1], PerGpuTest.MEMORY)
        assert not plugin_ran(response, [0, 1], PerGpuTest.SM_STRESS)
        assert not plugin_ran(response, [], PerGpuTest.MEMORY)


class TestGpuSetDerivation:
    """Tests for parse_gpu_list, populate_gpu_list and derive_gpu_ids."""

    @pytest.mark.parametrize(
        "gpu_list,expected", [("", []), ("0", [0]), ("0,2,3", [0, 2, 3])]
    )
    def test_parse_gpu_list(self, gpu_list, expected):
        assert parse_gpu_list(gpu_list) == expected

    def test_populate_selects_slots_that_ran(self):
        response = make_response(
            {1: {PerGpuTest.MEMORY: DiagResult.PASS}, 4: {PerGpuTest.PCI: DiagResult.FAIL}}
        )
        assert populate_gpu_list(response) == [1, 4]

    def test_populate_skips_slot_without_results(self):
        response = make_response({0: {PerGpuTest.MEMORY: DiagResult.PASS}}, gpu_count=2)
        response.per_gpu_responses[1].gpu_id = 1
        assert populate_gpu_list(response) == [0]

    def test_populate_is_bounded_by_gpu_count(self):
        response = make_response(
            {i: {PerGpuTest.MEMORY: DiagResult.PASS} for i in range(4)}, gpu_count=2
        )
        assert populate_gpu_list(response) == [0, 1]

    def test_only_level_one_tests_gives_empty_set(self):
        response = make_response(
            level_one={SoftwareTest.DENYLIST: DiagResult.PASS}, gpu_count=2
        )
        assert derive_gpu_ids(RunRequest(), response) == []

    def test_explicit_filter_wins(self):
        response = make_response({0: {PerGpuTest.MEMORY: DiagResult.PASS}})
        request = RunRequest(gpu_list="2,3")
        assert derive_gpu_ids(request, response) == [2, 3]
