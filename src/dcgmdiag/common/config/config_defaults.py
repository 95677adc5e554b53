# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass


@dataclass(frozen=True)
class DiagDefaults:
    GROUP_ID = 0
    GPU_LIST = ""
    PARAMETERS = ""
    ITERATIONS = 1
    VERBOSE = False
    JSON_OUTPUT = False
    HOST = "localhost"
    LOG_LEVEL = "WARNING"
