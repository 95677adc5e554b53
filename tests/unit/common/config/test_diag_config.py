# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Tests for DiagConfig validation and request construction."""

import pytest
from pydantic import ValidationError

from dcgmdiag.common.config import DiagConfig, DiagDefaults
from dcgmdiag.common.constants import MAX_CONFIG_FILE_LEN
from dcgmdiag.diag.classifier import parse_gpu_list


class TestDiagConfigValidators:
    """Tests for the option validators."""

    def test_defaults(self):
        config = DiagConfig(run="1")
        assert config.group_id == DiagDefaults.GROUP_ID
        assert config.iterations == 1
        assert config.host == "localhost"
        assert config.log_level == "WARNING"
        assert config.replay_file is None

    def test_run_is_required(self):
        with pytest.raises(ValidationError):
            DiagConfig()

    @pytest.mark.parametrize("run", ["", " , "])
    def test_rejects_empty_test_selection(self, run):
        with pytest.raises(ValidationError, match="At least one test name"):
            DiagConfig(run=run)

    def test_rejects_too_many_test_names(self):
        with pytest.raises(ValidationError, match="Too many tests"):
            DiagConfig(run=",".join(f"test{i}" for i in range(21)))

    @pytest.mark.parametrize(
        "parameters",
        [
            "memory.test_duration=10",
            "memory.test_duration=10;pcie.test_pinned=false",
            "memory.test_duration=10;",
        ],
    )
    def test_accepts_well_formed_parameters(self, parameters):
        assert DiagConfig(run="1", parameters=parameters).parameters == parameters

    @pytest.mark.parametrize(
        "parameters", ["memory.test_duration", "memory.a=1;pcie.b"]
    )
    def test_rejects_parameters_without_equals(self, parameters):
        with pytest.raises(ValidationError, match="Improperly formatted parameters"):
            DiagConfig(run="1", parameters=parameters)

    @pytest.mark.parametrize("gpu_list", ["", "0", "0,1,3", "31"])
    def test_accepts_valid_gpu_lists(self, gpu_list):
        assert DiagConfig(run="1", gpu_list=gpu_list).gpu_list == gpu_list

    @pytest.mark.parametrize("gpu_list", ["a", "0,b", "-1", "1 2", "0;1"])
    def test_rejects_non_numeric_gpu_lists(self, gpu_list):
        with pytest.raises(ValidationError, match="comma-separated list of numbers"):
            DiagConfig(run="1", gpu_list=gpu_list)

    @pytest.mark.parametrize(
        "gpu_list,expected", [("0,1,", [0, 1]), ("0,,1", [0, 1]), (" 1, 2", [1, 2])]
    )
    def test_empty_tokens_are_skipped_like_the_parser(self, gpu_list, expected):
        config = DiagConfig(run="1", gpu_list=gpu_list)
        assert parse_gpu_list(config.gpu_list) == expected

    def test_rejects_gpu_index_beyond_capacity(self):
        with pytest.raises(ValidationError, match="exceeds the maximum of 31"):
            DiagConfig(run="1", gpu_list="0,32")

    @pytest.mark.parametrize("iterations", [0, -2])
    def test_rejects_non_positive_iterations(self, iterations):
        with pytest.raises(ValidationError):
            DiagConfig(run="1", iterations=iterations)

    def test_rejects_unknown_options(self):
        with pytest.raises(ValidationError):
            DiagConfig(run="1", bogus=True)


class TestDiagConfigFile:
    """Tests for the config file option."""

    def test_missing_file_is_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="Could not open configuration file"):
            DiagConfig(run="1", config_file=tmp_path / "missing.yaml")

    def test_oversized_file_is_rejected(self, tmp_path):
        path = tmp_path / "big.yaml"
        path.write_text("x" * (MAX_CONFIG_FILE_LEN + 1))
        with pytest.raises(ValidationError, match="Config file too large"):
            DiagConfig(run="1", config_file=path)

    def test_file_at_limit_is_read(self, tmp_path):
        path = tmp_path / "diag.yaml"
        path.write_text("y" * MAX_CONFIG_FILE_LEN)
        request = DiagConfig(run="1", config_file=path).to_run_request()
        assert request.config_file_contents == "y" * MAX_CONFIG_FILE_LEN

    def test_parameters_take_precedence_over_file(self, tmp_path):
        missing = tmp_path / "missing.yaml"
        config = DiagConfig(run="1", parameters="a.b=1", config_file=missing)
        assert config.to_run_request().config_file_contents is None


class TestToRunRequest:
    """Tests for DiagConfig.to_run_request."""

    def test_builds_request(self):
        config = DiagConfig(
            run="memory, pcie",
            group_id=4,
            gpu_list="0,2",
            parameters="memory.test_duration=10;pcie.test_pinned=false",
            iterations=3,
            verbose=True,
            json_output=True,
        )

        request = config.to_run_request()

        assert request.group_id == 4
        assert request.gpu_list == "0,2"
        assert request.test_names == ("memory", "pcie")
        assert request.parameters == (
            "memory.test_duration=10",
            "pcie.test_pinned=false",
        )
        assert request.config_file_contents is None
        assert request.total_iterations == 3
        assert request.current_iteration == 0
        assert request.verbose is True
        assert request.json_output is True
