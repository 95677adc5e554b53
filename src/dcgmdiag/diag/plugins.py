# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Display names and report categories of the diagnostic tests.

This is the only place test indices are mapped to names and categories. Both the
text and the JSON exporters read it, so the two reports always group and label
tests the same way.
"""

from dataclasses import dataclass

from dcgmdiag.common.constants import CONTEXT_CREATE_PLUGIN_NAME
from dcgmdiag.common.enums import DiagCategory, PerGpuTest, SoftwareTest

__all__ = [
    "PLUGIN_TABLE",
    "PluginInfo",
    "SOFTWARE_TEST_NAMES",
    "plugin_display_name",
    "plugins_in_category",
    "software_test_display_name",
]


@dataclass(frozen=True, slots=True)
class PluginInfo:
    """A per-GPU test as it appears in reports."""

    test: PerGpuTest
    display_name: str
    category: DiagCategory


# Ordered by test index; reports list tests within a category in this order.
PLUGIN_TABLE: dict[PerGpuTest, PluginInfo] = {
    info.test: info
    for info in (
        PluginInfo(PerGpuTest.MEMORY, "GPU Memory", DiagCategory.HARDWARE),
        PluginInfo(PerGpuTest.DIAGNOSTIC, "Diagnostic", DiagCategory.HARDWARE),
        PluginInfo(PerGpuTest.PCI, "PCIe", DiagCategory.INTEGRATION),
        PluginInfo(PerGpuTest.SM_STRESS, "SM Stress", DiagCategory.STRESS),
        PluginInfo(PerGpuTest.TARGETED_STRESS, "Targeted Stress", DiagCategory.STRESS),
        PluginInfo(PerGpuTest.TARGETED_POWER, "Targeted Power", DiagCategory.STRESS),
        PluginInfo(PerGpuTest.MEMORY_BANDWIDTH, "Memory Bandwidth", DiagCategory.STRESS),
        PluginInfo(PerGpuTest.MEMTEST, "Memtest", DiagCategory.STRESS),
        PluginInfo(PerGpuTest.PULSE_TEST, "Pulse Test", DiagCategory.HARDWARE),
        PluginInfo(PerGpuTest.EUD_TEST, "EUD Test", DiagCategory.STRESS),
    )
}

CONTEXT_CREATE_DISPLAY_NAME = "Context Create"

# Must follow the order of SoftwareTest.
SOFTWARE_TEST_NAMES: dict[SoftwareTest, str] = {
    SoftwareTest.DENYLIST: "Denylist",
    SoftwareTest.NVML_LIBRARY: "NVML Library",
    SoftwareTest.CUDA_MAIN_LIBRARY: "CUDA Main Library",
    SoftwareTest.CUDA_RUNTIME_LIBRARY: "CUDA Toolkit Library",
    SoftwareTest.PERMISSIONS: "Permissions and OS Blocks",
    SoftwareTest.PERSISTENCE_MODE: "Persistence Mode",
    SoftwareTest.ENVIRONMENT: "Environment Variables",
    SoftwareTest.PAGE_RETIREMENT: "Page Retirement/Row Remap",
    SoftwareTest.GRAPHICS_PROCESSES: "Graphics Processes",
    SoftwareTest.INFOROM: "Inforom",
}

CATEGORY_ORDER: tuple[DiagCategory, ...] = (
    DiagCategory.INTEGRATION,
    DiagCategory.HARDWARE,
    DiagCategory.STRESS,
)


def runs_context_create(primary_test_name: str) -> bool:
    return primary_test_name.lower() == CONTEXT_CREATE_PLUGIN_NAME


def plugin_display_name(test: PerGpuTest, primary_test_name: str = "") -> str:
    """Return the display name of a per-GPU test, or "" for unused indices.

    The memory slot is reported as "Context Create" when the run selected the
    context create test, since that test stores its result in the memory slot.
    """
    if test is PerGpuTest.CONTEXT_CREATE:
        return CONTEXT_CREATE_DISPLAY_NAME
    if test is PerGpuTest.MEMORY and runs_context_create(primary_test_name):
        return CONTEXT_CREATE_DISPLAY_NAME
    info = PLUGIN_TABLE.get(test)
    return info.display_name if info else ""


def plugins_in_category(category: DiagCategory) -> list[PluginInfo]:
    return [info for info in PLUGIN_TABLE.values() if info.category == category]


def software_test_display_name(index: int) -> str:
    return SOFTWARE_TEST_NAMES[SoftwareTest(index)]
