"""Provisioning configuration loaded from environment variables.

Every value is a plain string taken verbatim from the environment.  A local
``.env`` settings file may seed the environment first (see
``load_settings_file``); variables already set in the process win.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` listing *every* required
    setting that is empty.  Names, regions and templates are not checked
    here; Azure and the tools validate them and their errors are fatal.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import find_dotenv, load_dotenv

from funcapp_provisioner.core import constants as c
from funcapp_provisioner.core.exceptions import ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("funcapp_provisioner.core.config")


class ConfigValidationError(ValidationError):
    """Raised when required settings are missing.

    Attributes:
        missing: Environment variable names of the empty settings, in
            declaration order.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required environment variables: {', '.join(self.missing)}")


def should_keep_resources(value: str) -> bool:
    """Return ``True`` when *value* asks to keep the provisioned resources.

    Only ``"1"``, ``"true"``, ``"True"`` and ``"TRUE"`` count; every other
    value, including the empty string, means the resource group is deleted.
    """
    return value in c.KEEP_RESOURCE_VALUES


@dataclass(frozen=True, slots=True)
class ProvisionConfig:
    """Immutable provisioning configuration.

    Loaded once at startup and passed to each step.

    Attributes:
        subscription_id: Azure subscription to provision into.
        location: Azure region for the resource group, storage account and
            consumption plan.
        resource_group_name: Resource group that holds everything.
        storage_account_name: Storage account backing the function app.
        function_app_name: Name of the remote function app.
        function_name: Name of the function handler scaffolded by ``func new``.
        function_template: ``func new`` template (e.g. ``"HTTP trigger"``).
        auth_level: Function auth level (``anonymous``, ``function``, ``admin``).
        keep_resource: Raw ``KEEP_RESOURCE`` value; see ``keep_resources``.
        project_dir: Local directory the Functions project is scaffolded in.
        worker_runtime: Functions worker runtime for ``func init`` and
            ``az functionapp create``.
        runtime_version: Language runtime version of the function app.
        functions_version: Azure Functions host version.
    """

    subscription_id: str = ""
    location: str = ""
    resource_group_name: str = ""
    storage_account_name: str = ""
    function_app_name: str = ""
    function_name: str = ""
    function_template: str = ""
    auth_level: str = ""
    keep_resource: str = ""
    project_dir: str = c.DEFAULT_PROJECT_DIR
    worker_runtime: str = c.DEFAULT_WORKER_RUNTIME
    runtime_version: str = c.DEFAULT_RUNTIME_VERSION
    functions_version: str = c.DEFAULT_FUNCTIONS_VERSION

    @property
    def keep_resources(self) -> bool:
        """Whether the resource group survives the run."""
        return should_keep_resources(self.keep_resource)

    @property
    def project_path(self) -> Path:
        """The project directory as an absolute path."""
        return Path(self.project_dir).expanduser().resolve()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ProvisionConfig:
        """Load and validate configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigValidationError: If any required setting is empty.
        """
        env = os.environ if environ is None else environ
        config = cls(
            **{name: env.get(var) or default for name, (var, default) in _ENV_BINDINGS.items()}
        )
        validate(config)
        return config


# field name -> (environment variable, default when unset)
_ENV_BINDINGS: dict[str, tuple[str, str]] = {
    "subscription_id": (c.ENV_SUBSCRIPTION_ID, ""),
    "location": (c.ENV_LOCATION, ""),
    "resource_group_name": (c.ENV_RESOURCE_GROUP_NAME, ""),
    "storage_account_name": (c.ENV_STORAGE_ACCOUNT_NAME, ""),
    "function_app_name": (c.ENV_FUNCTION_APP_NAME, ""),
    "function_name": (c.ENV_FUNCTION_NAME, ""),
    "function_template": (c.ENV_FUNCTION_TEMPLATE, ""),
    "auth_level": (c.ENV_AUTH_LEVEL, ""),
    "keep_resource": (c.ENV_KEEP_RESOURCE, ""),
    "project_dir": (c.ENV_PROJECT_DIR, c.DEFAULT_PROJECT_DIR),
    "worker_runtime": (c.ENV_WORKER_RUNTIME, c.DEFAULT_WORKER_RUNTIME),
    "runtime_version": (c.ENV_RUNTIME_VERSION, c.DEFAULT_RUNTIME_VERSION),
    "functions_version": (c.ENV_FUNCTIONS_VERSION, c.DEFAULT_FUNCTIONS_VERSION),
}

#: Fields that must be non-empty, in reporting order.
REQUIRED_FIELDS: tuple[str, ...] = (
    "subscription_id",
    "location",
    "resource_group_name",
    "storage_account_name",
    "function_app_name",
    "function_name",
    "function_template",
    "auth_level",
)


def missing_settings(config: ProvisionConfig) -> list[str]:
    """Return the environment variable names of empty required settings."""
    return [
        _ENV_BINDINGS[name][0] for name in REQUIRED_FIELDS if getattr(config, name) == ""
    ]


def validate(config: ProvisionConfig) -> None:
    """Check that every required setting is present.

    Raises:
        ConfigValidationError: Listing all missing settings at once.
    """
    missing = missing_settings(config)
    if missing:
        raise ConfigValidationError(missing)
    logger.info("All required environment variables are set.")


def load_settings_file(path: str | Path | None = None) -> bool:
    """Seed the environment from a ``.env`` settings file.

    Variables already present in the environment are not overridden.  A
    missing or empty file is not an error: the run continues with the
    plain environment.

    Args:
        path: Settings file to load.  Defaults to the nearest ``.env``
            found from the current working directory upwards.

    Returns:
        ``True`` if the file defines at least one variable.
    """
    dotenv_path = str(path) if path is not None else find_dotenv(usecwd=True)
    if not dotenv_path or not Path(dotenv_path).is_file():
        logger.warning("Settings file not found | path=%s", dotenv_path or ".env")
        return False

    loaded = load_dotenv(dotenv_path, override=False)
    if loaded:
        logger.info("Settings file loaded | path=%s", dotenv_path)
    else:
        logger.warning("Settings file had no variables | path=%s", dotenv_path)
    return loaded
