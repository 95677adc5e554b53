# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from pathlib import Path
from typing import Annotated, Literal

from cyclopts import Parameter
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dcgmdiag.common.config.config_defaults import DiagDefaults
from dcgmdiag.common.config.groups import Groups
from dcgmdiag.common.constants import (
    MAX_CONFIG_FILE_LEN,
    MAX_NUM_DEVICES,
    MAX_TEST_NAMES,
    MAX_TEST_PARMS,
)
from dcgmdiag.common.exceptions import InvalidRunConfigError
from dcgmdiag.common.models import RunRequest

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class DiagConfig(BaseModel):
    """Options of one ``dcgmdiag run`` invocation."""

    model_config = ConfigDict(extra="forbid")

    @field_validator("run")
    @classmethod
    def validate_test_names(cls, v: str) -> str:
        names = _split(v, ",")
        if not names:
            raise InvalidRunConfigError(
                "At least one test name or run level must be given with --run."
            )
        if len(names) > MAX_TEST_NAMES:
            raise InvalidRunConfigError(
                f"Too many tests requested: {len(names)}. At most {MAX_TEST_NAMES} "
                f"test names may be given."
            )
        return v

    @field_validator("parameters")
    @classmethod
    def validate_parameters(cls, v: str) -> str:
        """Every ``;``-separated parameter must look like ``test_name.attr_name=attr_value``."""
        parameters = _split(v, ";")
        if any("=" not in parameter for parameter in parameters):
            raise InvalidRunConfigError(
                f"Improperly formatted parameters argument: '{v}'. "
                f"Argument must follow the format: test_name.attr_name=attr_value[;...]"
            )
        if len(parameters) > MAX_TEST_PARMS:
            raise InvalidRunConfigError(
                f"Too many parameters: {len(parameters)}. At most {MAX_TEST_PARMS} "
                f"parameters may be given."
            )
        return v

    @field_validator("gpu_list")
    @classmethod
    def validate_gpu_list(cls, v: str) -> str:
        # Empty tokens are skipped, the same way the GPU list is parsed.
        for token in (part.strip() for part in v.split(",")):
            if not token:
                continue
            if not token.isdigit():
                raise InvalidRunConfigError(
                    f"Gpu list '{v}' must be a comma-separated list of numbers"
                )
            if int(token) >= MAX_NUM_DEVICES:
                raise InvalidRunConfigError(
                    f"Gpu list '{v}' contains GPU index {token}, which exceeds the "
                    f"maximum of {MAX_NUM_DEVICES - 1}"
                )
        return v

    @model_validator(mode="after")
    def validate_config_file(self) -> "DiagConfig":
        """A config file is only read when no parameters were given."""
        if self.config_file is None or self.parameters:
            return self

        if not self.config_file.is_file():
            raise InvalidRunConfigError(
                f"Could not open configuration file: '{self.config_file}'"
            )
        size = self.config_file.stat().st_size
        if size > MAX_CONFIG_FILE_LEN:
            raise InvalidRunConfigError(
                f"Config file too large. Its size ({size}) exceeds {MAX_CONFIG_FILE_LEN}"
            )
        return self

    group_id: Annotated[
        int,
        Field(
            ge=0,
            description="The group ID of the GPUs to run the diagnostic on.",
        ),
        Parameter(name=("--group-id", "-g"), group=Groups.DIAGNOSTIC),
    ] = DiagDefaults.GROUP_ID

    gpu_list: Annotated[
        str,
        Field(
            description="Comma-separated list of GPU indices to run on instead of a group, "
            "e.g. `0,1,3`.",
        ),
        Parameter(name=("--gpu-list", "-i"), group=Groups.DIAGNOSTIC),
    ] = DiagDefaults.GPU_LIST

    run: Annotated[
        str,
        Field(
            description="Run level (1, 2, 3, 4) or comma-separated list of test names, "
            "e.g. `memory,pcie` or `context_create`.",
        ),
        Parameter(name=("--run", "-r"), group=Groups.DIAGNOSTIC),
    ]

    parameters: Annotated[
        str,
        Field(
            description="Test parameter overrides in the format "
            "`test_name.attr_name=attr_value[;...]`.",
        ),
        Parameter(name=("--parameters", "-p"), group=Groups.DIAGNOSTIC),
    ] = DiagDefaults.PARAMETERS

    config_file: Annotated[
        Path | None,
        Field(
            description="Path to a diagnostic configuration file. "
            "Ignored when `--parameters` is given.",
        ),
        Parameter(name=("--config-file", "-c"), group=Groups.DIAGNOSTIC),
    ] = None

    iterations: Annotated[
        int,
        Field(
            ge=1,
            description="Number of times to run the diagnostic. Stops at the first failing iteration.",
        ),
        Parameter(name=("--iterations",), group=Groups.DIAGNOSTIC),
    ] = DiagDefaults.ITERATIONS

    verbose: Annotated[
        bool,
        Field(description="Show information and warnings for every test, including passing ones."),
        Parameter(name=("--verbose", "-v"), group=Groups.OUTPUT, negative=()),
    ] = DiagDefaults.VERBOSE

    json_output: Annotated[
        bool,
        Field(description="Print the results as a JSON document."),
        Parameter(name=("--json", "-j"), group=Groups.OUTPUT, negative=()),
    ] = DiagDefaults.JSON_OUTPUT

    log_level: Annotated[
        LogLevel,
        Field(description="Log level for messages written to standard error."),
        Parameter(name=("--log-level",), group=Groups.OUTPUT),
    ] = DiagDefaults.LOG_LEVEL

    host: Annotated[
        str,
        Field(description="Host engine address the diagnostic runs on."),
        Parameter(name=("--host",), group=Groups.HOST_ENGINE),
    ] = DiagDefaults.HOST

    replay_file: Annotated[
        Path | None,
        Field(
            description="Replay a recorded diagnostic response from a JSON file "
            "instead of contacting the host engine.",
        ),
        Parameter(name=("--replay",), group=Groups.HOST_ENGINE),
    ] = None

    @property
    def test_names(self) -> tuple[str, ...]:
        return tuple(_split(self.run, ","))

    @property
    def parameter_list(self) -> tuple[str, ...]:
        return tuple(_split(self.parameters, ";"))

    def read_config_file(self) -> str | None:
        """Return the config file contents, or None when no file applies."""
        if self.config_file is None or self.parameters:
            return None
        return self.config_file.read_text()

    def to_run_request(self) -> RunRequest:
        """Build the immutable request handed to the run supervisor."""
        return RunRequest(
            group_id=self.group_id,
            gpu_list=self.gpu_list,
            test_names=self.test_names,
            parameters=self.parameter_list,
            config_file_contents=self.read_config_file(),
            total_iterations=self.iterations,
            verbose=self.verbose,
            json_output=self.json_output,
        )


def _split(value: str, separator: str) -> list[str]:
    return [part.strip() for part in value.split(separator) if part.strip()]
