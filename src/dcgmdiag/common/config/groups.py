# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from cyclopts import Group


class Groups:
    """Help-screen groups for the diagnostic options, in display order."""

    DIAGNOSTIC = Group.create_ordered("Diagnostic")
    OUTPUT = Group.create_ordered("Output")
    HOST_ENGINE = Group.create_ordered("Host Engine")
