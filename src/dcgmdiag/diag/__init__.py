# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Diagnostic result classification and test catalog.

The run supervisor lives in ``dcgmdiag.diag.supervisor`` and is imported from there.
"""

from dcgmdiag.diag.classifier import (
    GpuBuckets,
    bucket_gpus,
    derive_gpu_ids,
    get_failure_result,
    parse_gpu_list,
)
from dcgmdiag.diag.error_priority import (
    DEFAULT_ERROR_PRIORITIES,
    ErrorPriorityTable,
)
from dcgmdiag.diag.plugins import (
    PLUGIN_TABLE,
    PluginInfo,
    plugin_display_name,
    plugins_in_category,
    software_test_display_name,
)

__all__ = [
    "DEFAULT_ERROR_PRIORITIES",
    "ErrorPriorityTable",
    "GpuBuckets",
    "PLUGIN_TABLE",
    "PluginInfo",
    "bucket_gpus",
    "derive_gpu_ids",
    "get_failure_result",
    "parse_gpu_list",
    "plugin_display_name",
    "plugins_in_category",
    "software_test_display_name",
]
