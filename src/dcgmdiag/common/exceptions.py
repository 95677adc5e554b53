# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from dcgmdiag.common.enums import ReturnCode


class DiagError(Exception):
    """Base class for all dcgm-diag errors."""


class EngineTransportError(DiagError):
    """Raised by an engine when the call to the remote host engine could not complete."""

    def __init__(self, return_code: ReturnCode, message: str | None = None) -> None:
        self.return_code = return_code
        super().__init__(message or return_code.error_string())


class InvalidRunConfigError(DiagError, ValueError):
    """Raised when the diagnostic run options are malformed."""


class ReplayFileError(DiagError):
    """Raised when a recorded diagnostic response cannot be loaded."""
