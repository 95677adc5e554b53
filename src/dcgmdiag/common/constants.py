# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Capacity limits and fixed values shared with the remote diagnostic engine."""

MAX_NUM_DEVICES = 32
"""Number of per-GPU slots in a diagnostic response."""

MAX_ERRORS = 5
"""Maximum number of error entries recorded for one test result."""

PER_GPU_TEST_COUNT = 13
"""Number of per-GPU test slots in a diagnostic response."""

SOFTWARE_TEST_COUNT = 10
"""Number of level-one (software/environment) test slots."""

UNUSED_GPU_ID = MAX_NUM_DEVICES
"""Out-of-range GPU id marking a per-GPU slot that the engine never populated."""

BLANK_STRING = "<<<NULL>>>"
"""Value the engine writes into string fields that carry no data."""

MAX_CONFIG_FILE_LEN = 10000
"""Largest diagnostic configuration file accepted, in bytes."""

MAX_TEST_NAMES = 20
MAX_TEST_PARMS = 100

INFO_COLUMN_WIDTH = 45
"""Characters of message text shown per row of the text report."""

POLL_INTERVAL_SECONDS = 0.1

CONTEXT_CREATE_PLUGIN_NAME = "context_create"

DIAG_RESPONSE_VERSION = 10
