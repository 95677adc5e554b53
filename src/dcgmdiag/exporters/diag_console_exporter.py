# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Fixed-width text report of a diagnostic response."""

from dcgmdiag.common.enums import DiagCategory, DiagResult, PerGpuTest
from dcgmdiag.diag.classifier import GpuBuckets, bucket_gpus, plugin_ran
from dcgmdiag.diag.plugins import (
    CATEGORY_ORDER,
    plugin_display_name,
    plugins_in_category,
    software_test_display_name,
)
from dcgmdiag.exporters.diag_base_exporter import DiagBaseExporter
from dcgmdiag.exporters.text_format import (
    DIAG_FOOTER,
    DIAG_HEADER,
    DIAG_METADATA,
    SECTION_BANNERS,
    format_gpu_list,
    format_row,
    format_verbose_rows,
    format_wrapped_row,
    sanitize,
)

SUCCESS_BANNER = "Successfully ran diagnostic for group.\n"


class DiagConsoleExporter(DiagBaseExporter):
    """Exports a diagnostic response as the two-column text report.

    Layout:
    - Metadata: engine version, driver version, device ids
    - Deployment: level-one checks with their errors and info
    - Integration, Hardware, Stress: per-GPU tests, only when GPUs ran

    A per-GPU test whose GPUs all share a status is shown as one "<Status> - All"
    row; otherwise one row per status lists the GPU ids. Detail rows (warnings,
    info) follow for all-fail/all-skip/all-warn tests and for the non-passing
    GPUs of mixed tests; passing GPUs only get details in verbose mode.
    """

    def _generate_content(self) -> str:
        parts = [SUCCESS_BANNER, DIAG_HEADER]
        parts.append(self._format_metadata())
        parts.append(self._format_deployment())

        if self._gpu_ids:
            for category in CATEGORY_ORDER:
                parts.append(SECTION_BANNERS[category])
                for info in plugins_in_category(category):
                    parts.append(self._format_gpu_results(info.test))

        parts.append(DIAG_FOOTER)
        return "".join(parts)

    def _format_metadata(self) -> str:
        response = self._response
        dev_ids = ",".join(response.dev_ids[: response.gpu_count])
        return (
            DIAG_METADATA
            + format_wrapped_row("DCGM Version", response.dcgm_version)
            + format_wrapped_row("Driver Version Detected", response.driver_version)
            + format_wrapped_row("GPU Device IDs Detected", dev_ids)
        )

    def _format_deployment(self) -> str:
        parts = [SECTION_BANNERS[DiagCategory.DEPLOYMENT]]
        for index, result in enumerate(self._response.active_level_one_results):
            if result.status == DiagResult.NOT_RUN:
                continue
            parts.append(
                format_row(software_test_display_name(index), result.status.display)
            )
            for error in result.set_errors:
                parts.append(format_verbose_rows("Error", sanitize(error.msg)))
            if result.info:
                parts.append(format_verbose_rows("Info", sanitize(result.info)))
        return "".join(parts)

    def _format_gpu_results(self, test: PerGpuTest) -> str:
        if not plugin_ran(self._response, self._gpu_ids, test):
            return ""

        buckets = bucket_gpus(self._response, self._gpu_ids, test)
        # The hardware diagnostic is hidden entirely when it skipped everywhere.
        if test is PerGpuTest.DIAGNOSTIC and buckets.all_in(buckets.skipped):
            return ""

        name = plugin_display_name(test, self._request.primary_test_name)

        if buckets.all_in(buckets.passed):
            return format_row(name, "Pass - All") + self._format_details(
                test, buckets.passed, force=False
            )
        for label, bucket in (
            ("Skip", buckets.skipped),
            ("Fail", buckets.failed),
            ("Warn", buckets.warned),
        ):
            if buckets.all_in(bucket):
                rows = format_row(name, f"{label} - All") + self._format_details(
                    test, bucket, force=True
                )
                if label == "Warn" and test is PerGpuTest.DIAGNOSTIC:
                    rows += self._format_diagnostic_code()
                return rows

        return self._format_mixed(name, test, buckets)

    def _format_mixed(self, name: str, test: PerGpuTest, buckets: GpuBuckets) -> str:
        parts: list[str] = []
        for label, bucket in (
            ("Pass", buckets.passed),
            ("Fail", buckets.failed),
            ("Warn", buckets.warned),
            ("Skip", buckets.skipped),
        ):
            if bucket:
                parts.append(
                    format_wrapped_row(
                        "" if parts else name, format_gpu_list(label, bucket)
                    )
                )
        non_passing = [g for g in self._gpu_ids if g not in buckets.passed]
        parts.append(self._format_details(test, non_passing, force=True))
        return "".join(parts)

    def _format_details(self, test: PerGpuTest, gpu_ids: list[int], force: bool) -> str:
        if self._request.verbose:
            gpu_ids = list(self._gpu_ids)
        elif not force:
            return ""

        results = [
            self._response.per_gpu_responses[gpu_id].result_for(test)
            for gpu_id in gpu_ids
        ]
        parts = [
            format_verbose_rows("Warning", sanitize(error.msg))
            for result in results
            for error in result.set_errors
        ]
        parts.extend(
            format_verbose_rows("Info", sanitize(result.info))
            for result in results
            if result.info
        )
        return "".join(parts)

    def _format_diagnostic_code(self) -> str:
        first = self._response.per_gpu_responses[self._gpu_ids[0]]
        return format_row("", f"  Code: ({first.hw_diagnostic_return:012d})")
