# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Structured (JSON) report of a diagnostic response."""

from typing import Any

import orjson

from dcgmdiag.common.constants import BLANK_STRING
from dcgmdiag.common.enums import DiagCategory, DiagResult, SoftwareTest
from dcgmdiag.common.models import DiagErrorDetail, DiagTestResult
from dcgmdiag.diag.plugins import (
    CATEGORY_ORDER,
    plugin_display_name,
    plugins_in_category,
    software_test_display_name,
)
from dcgmdiag.exporters.diag_base_exporter import DiagBaseExporter

__all__ = [
    "DiagJsonExporter",
    "build_failure_document",
    "dumps_document",
]

DIAG_NAME = "DCGM Diagnostic"
VERSION = "version"
DRIVER_VERSION = "Driver Version Detected"
GPU_SERIALS = "GPU Device Serials"
GPU_DEV_IDS = "GPU Device IDs"
HEADERS = "test_categories"
HEADER = "category"
TESTS = "tests"
TEST_NAME = "name"
RESULTS = "results"
GPU_ID = "gpu_id"
STATUS = "status"
INFO = "info"
WARNINGS = "warnings"
WARNING = "warning"
ERROR_ID = "error_id"
ERROR_CATEGORY = "error_category"
ERROR_SEVERITY = "error_severity"
RUNTIME_ERROR = "runtime_error"
ITERATIONS = "iterations"
RESULT = "result"


def dumps_document(document: dict[str, Any]) -> str:
    return orjson.dumps(document, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n"


def build_failure_document(message: str, tool_version: str) -> dict[str, Any]:
    """Document reported in place of results when the run itself failed."""
    return {DIAG_NAME: {VERSION: tool_version, RUNTIME_ERROR: message}}


def _warning_entry(error: DiagErrorDetail) -> dict[str, Any]:
    return {
        WARNING: error.msg,
        ERROR_ID: error.code,
        ERROR_CATEGORY: error.category,
        ERROR_SEVERITY: error.severity,
    }


class DiagJsonExporter(DiagBaseExporter):
    """Exports a diagnostic response as a nested JSON document.

    Output structure:
    {
        "version": "...",
        "Driver Version Detected": "...",
        "GPU Device Serials": {"0": "..."},
        "GPU Device IDs": ["..."],
        "DCGM Diagnostic": {
            "test_categories": [
                {"category": "Deployment", "tests": [...]},
                {"category": "Integration", "tests": [...]},
                ...
            ]
        }
    }

    Deployment is always first. Integration, Hardware and Stress are present only
    when at least one of their tests ran on at least one GPU of the set, and a
    test lists only the GPUs that ran it.
    """

    def build_document(self) -> dict[str, Any]:
        response = self._response
        categories = [self._build_deployment()]
        categories.extend(self._build_gpu_categories())

        return {
            VERSION: response.dcgm_version,
            DRIVER_VERSION: response.driver_version,
            GPU_SERIALS: {
                str(index): serial
                for index, serial in enumerate(response.dev_serials)
                if serial and serial != BLANK_STRING
            },
            GPU_DEV_IDS: response.dev_ids[: response.gpu_count],
            DIAG_NAME: {HEADERS: categories},
        }

    def _generate_content(self) -> str:
        return dumps_document(self.build_document())

    def _result_entry(self, result: DiagTestResult) -> dict[str, Any]:
        entry: dict[str, Any] = {
            STATUS: result.status.display,
            WARNINGS: [_warning_entry(error) for error in result.set_errors],
        }
        if result.info:
            entry[INFO] = result.info
        return entry

    def _build_deployment(self) -> dict[str, Any]:
        tests = []
        for index, result in enumerate(self._response.active_level_one_results):
            # The CUDA runtime library check is retired and never runs; leaving it
            # out keeps the tests array free of placeholder entries.
            if (
                index == SoftwareTest.CUDA_RUNTIME_LIBRARY
                and result.status == DiagResult.NOT_RUN
            ):
                continue
            entry = self._result_entry(result)
            errors = result.set_errors
            if errors:
                entry[GPU_ID] = errors[-1].gpu_id
            tests.append(
                {TEST_NAME: software_test_display_name(index), RESULTS: [entry]}
            )
        return {HEADER: DiagCategory.DEPLOYMENT.value, TESTS: tests}

    def _build_gpu_categories(self) -> list[dict[str, Any]]:
        categories = []
        for category in CATEGORY_ORDER:
            tests = []
            for info in plugins_in_category(category):
                results = []
                for gpu_id in self._gpu_ids:
                    result = self._response.per_gpu_responses[gpu_id].result_for(
                        info.test
                    )
                    if result.status == DiagResult.NOT_RUN:
                        continue
                    results.append({GPU_ID: str(gpu_id), **self._result_entry(result)})
                if results:
                    tests.append(
                        {
                            TEST_NAME: plugin_display_name(
                                info.test, self._request.primary_test_name
                            ),
                            RESULTS: results,
                        }
                    )
            if tests:
                categories.append({HEADER: category.value, TESTS: tests})
        return categories
