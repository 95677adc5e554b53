# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Engine that replays a recorded diagnostic response from disk."""

import logging
from pathlib import Path

import orjson
from pydantic import ValidationError

from dcgmdiag.common.enums import ReturnCode
from dcgmdiag.common.exceptions import ReplayFileError
from dcgmdiag.common.models import DiagResponse, RunRequest

logger = logging.getLogger(__name__)

__all__ = [
    "ReplayDiagEngine",
]


class ReplayDiagEngine:
    """Serves a response recorded as JSON instead of contacting a host engine.

    The file holds either a bare ``DiagResponse`` document or an object of the
    form ``{"return_code": <int>, "response": {...}}``.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.stop_requests = 0
        self.abort_requests = 0

    def _load(self) -> tuple[ReturnCode, DiagResponse]:
        try:
            with open(self.path, "rb") as f:
                data = orjson.loads(f.read())
        except (OSError, orjson.JSONDecodeError) as e:
            raise ReplayFileError(
                f"Could not read recorded response '{self.path}': {e}"
            ) from e

        return_code = ReturnCode.OK
        if isinstance(data, dict) and "response" in data:
            try:
                return_code = ReturnCode(data.get("return_code", 0))
            except ValueError as e:
                raise ReplayFileError(
                    f"Unknown return code in '{self.path}': {data.get('return_code')}"
                ) from e
            data = data["response"]

        try:
            response = DiagResponse.model_validate(data)
        except ValidationError as e:
            raise ReplayFileError(
                f"Recorded response '{self.path}' is not a valid diagnostic response: {e}"
            ) from e
        return return_code, response

    def start_run(self, request: RunRequest) -> tuple[ReturnCode, DiagResponse]:
        logger.info(
            f"Replaying diagnostic response from {self.path} "
            f"(iteration {request.current_iteration + 1} of {request.total_iterations})"
        )
        return self._load()

    def stop_run(self) -> ReturnCode:
        self.stop_requests += 1
        return ReturnCode.OK

    def abort_run(self, hostname: str) -> ReturnCode:
        self.abort_requests += 1
        logger.debug(f"Abort requested for replayed run on '{hostname}'")
        return ReturnCode.OK
