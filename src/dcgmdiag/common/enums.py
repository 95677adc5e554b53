# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from enum import Enum, IntEnum


class DiagResult(IntEnum):
    """Status of one test result cell."""

    PASS = 0
    SKIP = 1
    WARN = 2
    FAIL = 3
    NOT_RUN = 4

    @property
    def display(self) -> str:
        return _RESULT_DISPLAY[self]


_RESULT_DISPLAY = {
    DiagResult.PASS: "Pass",
    DiagResult.SKIP: "Skip",
    DiagResult.WARN: "Warn",
    DiagResult.FAIL: "Fail",
    DiagResult.NOT_RUN: "Not Run",
}


class PerGpuTest(IntEnum):
    """Index of a per-GPU test inside a per-GPU response slot."""

    MEMORY = 0
    DIAGNOSTIC = 1
    PCI = 2
    SM_STRESS = 3
    TARGETED_STRESS = 4
    TARGETED_POWER = 5
    MEMORY_BANDWIDTH = 6
    MEMTEST = 7
    PULSE_TEST = 8
    EUD_TEST = 9
    UNUSED2 = 10
    UNUSED3 = 11
    UNUSED4 = 12
    SOFTWARE = 14
    # Context create only ever runs by itself and is stored in the MEMORY slot.
    CONTEXT_CREATE = 15

    @property
    def slot(self) -> int:
        """Slot of the response's result array that holds this test."""
        if self is PerGpuTest.CONTEXT_CREATE:
            return PerGpuTest.MEMORY.value
        return self.value


class SoftwareTest(IntEnum):
    """Index of a level-one test inside the level-one result array."""

    DENYLIST = 0
    NVML_LIBRARY = 1
    CUDA_MAIN_LIBRARY = 2
    CUDA_RUNTIME_LIBRARY = 3
    PERMISSIONS = 4
    PERSISTENCE_MODE = 5
    ENVIRONMENT = 6
    PAGE_RETIREMENT = 7
    GRAPHICS_PROCESSES = 8
    INFOROM = 9


class DiagCategory(str, Enum):
    """Section a test is reported under."""

    DEPLOYMENT = "Deployment"
    INTEGRATION = "Integration"
    HARDWARE = "Hardware"
    STRESS = "Stress"


class ErrorPriority(IntEnum):
    """Priority tier an error code resolves to."""

    MONITOR = 0
    ISOLATE = 1
    UNKNOWN = 2
    TRIAGE = 3
    CONFIG = 4
    RESET = 5


class ReturnCode(IntEnum):
    """Status codes returned by the diagnostic engine and surfaced to the caller."""

    OK = 0
    BADPARAM = -1
    GENERIC_ERROR = -3
    MEMORY = -4
    NOT_CONFIGURED = -5
    NOT_SUPPORTED = -6
    INIT_ERROR = -7
    NVML_ERROR = -8
    PENDING = -9
    TIMEOUT = -11
    VER_MISMATCH = -12
    NO_PERMISSION = -17
    GPU_IS_LOST = -18
    CONNECTION_NOT_VALID = -21
    GPU_NOT_SUPPORTED = -22
    GROUP_INCOMPATIBLE = -23
    REQUIRES_ROOT = -29
    NVVS_ERROR = -30
    MODULE_NOT_LOADED = -33
    IN_USE = -34
    GROUP_IS_EMPTY = -35
    DIAG_ALREADY_RUNNING = -39
    DIAG_BAD_JSON = -40
    DIAG_BAD_LAUNCH = -41
    DIAG_THRESHOLD_EXCEEDED = -43
    INSUFFICIENT_DRIVER_VERSION = -44
    CHILD_NOT_KILLED = -47
    NVVS_ISOLATE_ERROR = -51
    NVVS_BINARY_NOT_FOUND = -52
    NVVS_KILLED = -53
    PAUSED = -54

    @property
    def exit_status(self) -> int:
        """Process exit status for this code (truncated to an unsigned byte)."""
        return self.value & 0xFF

    def error_string(self) -> str:
        return _ERROR_STRINGS.get(self, f"Unknown error ({self.value})")


_ERROR_STRINGS = {
    ReturnCode.OK: "Success",
    ReturnCode.BADPARAM: "Bad parameter passed to function",
    ReturnCode.GENERIC_ERROR: "Generic unspecified error",
    ReturnCode.MEMORY: "Out of memory error",
    ReturnCode.NOT_CONFIGURED: "Setting not configured",
    ReturnCode.NOT_SUPPORTED: "Feature not supported",
    ReturnCode.INIT_ERROR: "DCGM initialization error",
    ReturnCode.NVML_ERROR: "NVML error",
    ReturnCode.PENDING: "Object is in a pending state",
    ReturnCode.TIMEOUT: "Timeout",
    ReturnCode.VER_MISMATCH: "API version mismatch",
    ReturnCode.NO_PERMISSION: "No permission",
    ReturnCode.GPU_IS_LOST: "GPU is lost",
    ReturnCode.CONNECTION_NOT_VALID: "Host engine connection invalid/disconnected",
    ReturnCode.GPU_NOT_SUPPORTED: "This GPU is not supported by DCGM",
    ReturnCode.GROUP_INCOMPATIBLE: "The GPUs of this group are incompatible with each other",
    ReturnCode.REQUIRES_ROOT: "This operation requires root access",
    ReturnCode.NVVS_ERROR: "Detected an error in NVVS",
    ReturnCode.MODULE_NOT_LOADED: "This request is serviced by a module that is not loaded",
    ReturnCode.IN_USE: "The requested operation could not be completed because the affected resource is in use",
    ReturnCode.GROUP_IS_EMPTY: "The specified group is empty",
    ReturnCode.DIAG_ALREADY_RUNNING: "A diag instance is already running",
    ReturnCode.DIAG_BAD_JSON: "The GPU Diagnostic returned JSON that cannot be parsed",
    ReturnCode.DIAG_BAD_LAUNCH: "Error while launching the GPU Diagnostic",
    ReturnCode.DIAG_THRESHOLD_EXCEEDED: "A field value met or exceeded the error threshold",
    ReturnCode.INSUFFICIENT_DRIVER_VERSION: "The installed driver version is insufficient for this API",
    ReturnCode.CHILD_NOT_KILLED: "Could not stop the launched diagnostic child process",
    ReturnCode.NVVS_ISOLATE_ERROR: "NVVS detected an error that requires isolating the GPU",
    ReturnCode.NVVS_BINARY_NOT_FOUND: "The NVVS binary was not found in the specified location",
    ReturnCode.NVVS_KILLED: "The NVVS process was killed by a signal",
    ReturnCode.PAUSED: "The hostengine and all modules are paused",
}
