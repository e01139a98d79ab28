"""Tests for provisioning configuration.

Covers:
- Loading from environment variables (verbatim strings, optional defaults)
- Fail-fast validation reporting every missing required setting
- The keep-resource flag spellings
- Seeding the environment from a .env settings file
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from funcapp_provisioner.core.config import (
    REQUIRED_FIELDS,
    ConfigValidationError,
    ProvisionConfig,
    load_settings_file,
    missing_settings,
    should_keep_resources,
)

REQUIRED_VARS = [
    "AZURE_SUBSCRIPTION_ID",
    "AZURE_LOCATION",
    "AZURE_RESOURCE_GROUP_NAME",
    "AZURE_STORAGE_ACCOUNT_NAME",
    "AZURE_FUNCTION_APP_NAME",
    "FUNCTION_NAME",
    "FUNCTION_TEMPLATE",
    "AUTH_LEVEL",
]


class TestProvisionConfigDefaults:
    """Verify default configuration values."""

    def test_optional_defaults(self) -> None:
        cfg = ProvisionConfig()
        assert cfg.project_dir == "functionapp"
        assert cfg.worker_runtime == "node"
        assert cfg.runtime_version == "18"
        assert cfg.functions_version == "4"
        assert cfg.keep_resource == ""

    def test_frozen_immutability(self) -> None:
        cfg = ProvisionConfig()
        with pytest.raises(AttributeError):
            cfg.location = "eastus"  # type: ignore[misc]

    def test_project_path_is_absolute(self) -> None:
        cfg = ProvisionConfig(project_dir="relative/app")
        assert cfg.project_path.is_absolute()
        assert cfg.project_path.parts[-2:] == ("relative", "app")


class TestProvisionConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self, required_env: dict[str, str]) -> None:
        env = {
            **required_env,
            "KEEP_RESOURCE": "true",
            "FUNCTION_PROJECT_DIR": "/srv/app",
            "FUNCTION_WORKER_RUNTIME": "python",
            "FUNCTION_RUNTIME_VERSION": "3.11",
            "FUNCTIONS_EXTENSION_VERSION": "4",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = ProvisionConfig.from_env()

        assert cfg.subscription_id == required_env["AZURE_SUBSCRIPTION_ID"]
        assert cfg.location == "westeurope"
        assert cfg.resource_group_name == "rg-funcapp-test"
        assert cfg.storage_account_name == "stfuncapptest"
        assert cfg.function_app_name == "func-app-test"
        assert cfg.function_name == "HttpExample"
        assert cfg.function_template == "HTTP trigger"
        assert cfg.auth_level == "anonymous"
        assert cfg.keep_resource == "true"
        assert cfg.project_dir == "/srv/app"
        assert cfg.worker_runtime == "python"
        assert cfg.runtime_version == "3.11"

    def test_explicit_mapping_ignores_process_environment(
        self, required_env: dict[str, str]
    ) -> None:
        with patch.dict(os.environ, {"AZURE_LOCATION": "eastus"}, clear=True):
            cfg = ProvisionConfig.from_env(required_env)
        assert cfg.location == "westeurope"

    def test_values_are_not_trimmed_or_checked(self, required_env: dict[str, str]) -> None:
        """Names and regions are passed through; Azure validates them."""
        env = {**required_env, "AZURE_LOCATION": " Not A Region ", "AUTH_LEVEL": "whatever"}
        cfg = ProvisionConfig.from_env(env)
        assert cfg.location == " Not A Region "
        assert cfg.auth_level == "whatever"

    def test_empty_optional_falls_back_to_default(self, required_env: dict[str, str]) -> None:
        cfg = ProvisionConfig.from_env({**required_env, "FUNCTION_PROJECT_DIR": ""})
        assert cfg.project_dir == "functionapp"


class TestProvisionConfigValidation:
    """Missing required settings are all reported at once."""

    def test_all_present_passes(self, required_env: dict[str, str]) -> None:
        cfg = ProvisionConfig.from_env(required_env)
        assert missing_settings(cfg) == []

    def test_empty_environment_lists_all_eight(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            ProvisionConfig.from_env({})
        assert exc_info.value.missing == REQUIRED_VARS

    def test_keep_resource_is_not_required(self, required_env: dict[str, str]) -> None:
        cfg = ProvisionConfig.from_env(required_env)
        assert cfg.keep_resource == ""

    def test_missing_list_equals_removed_subset(self, required_env: dict[str, str]) -> None:
        """Every subset of removed settings is reported exactly, in order."""
        for mask in range(1, 1 << len(REQUIRED_VARS)):
            removed = [name for i, name in enumerate(REQUIRED_VARS) if mask & (1 << i)]
            env = {k: v for k, v in required_env.items() if k not in removed}
            with pytest.raises(ConfigValidationError) as exc_info:
                ProvisionConfig.from_env(env)
            assert exc_info.value.missing == removed

    def test_empty_string_counts_as_missing(self, required_env: dict[str, str]) -> None:
        with pytest.raises(ConfigValidationError, match="FUNCTION_TEMPLATE"):
            ProvisionConfig.from_env({**required_env, "FUNCTION_TEMPLATE": ""})

    def test_error_attributes(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            ProvisionConfig.from_env({})
        err = exc_info.value
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert err.category == "validation"
        assert err.retryable is False
        assert "AZURE_SUBSCRIPTION_ID" in str(err)

    def test_required_fields_cover_eight_settings(self) -> None:
        assert len(REQUIRED_FIELDS) == 8


class TestShouldKeepResources:
    """Only four exact spellings mean keep."""

    @pytest.mark.parametrize("value", ["1", "true", "True", "TRUE"])
    def test_keep_spellings(self, value: str) -> None:
        assert should_keep_resources(value) is True

    @pytest.mark.parametrize(
        "value",
        ["", "0", "false", "yes", "y", "on", "tRuE", " true", "true ", "2", "keep"],
    )
    def test_everything_else_deletes(self, value: str) -> None:
        assert should_keep_resources(value) is False

    def test_config_property(self) -> None:
        assert ProvisionConfig(keep_resource="TRUE").keep_resources is True
        assert ProvisionConfig(keep_resource="no").keep_resources is False


class TestLoadSettingsFile:
    """.env files seed the environment without overriding it."""

    def test_loads_variables(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("AZURE_LOCATION=northeurope\nFUNCTION_NAME=Timer\n", encoding="utf-8")
        with patch.dict(os.environ, {}, clear=True):
            assert load_settings_file(env_file) is True
            assert os.environ["AZURE_LOCATION"] == "northeurope"
            assert os.environ["FUNCTION_NAME"] == "Timer"

    def test_existing_environment_wins(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("AZURE_LOCATION=northeurope\n", encoding="utf-8")
        with patch.dict(os.environ, {"AZURE_LOCATION": "westeurope"}, clear=True):
            load_settings_file(env_file)
            assert os.environ["AZURE_LOCATION"] == "westeurope"

    def test_missing_file_is_not_fatal(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert load_settings_file(tmp_path / "absent.env") is False
