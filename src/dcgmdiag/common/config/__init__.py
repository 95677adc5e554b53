# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from dcgmdiag.common.config.config_defaults import DiagDefaults
from dcgmdiag.common.config.diag_config import DiagConfig
from dcgmdiag.common.config.groups import Groups

__all__ = [
    "DiagConfig",
    "DiagDefaults",
    "Groups",
]
