"""Function app creation and code publishing.

The remote app is created on a consumption plan in the configured
location, bound to the storage account provisioned earlier in the run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from funcapp_provisioner.core.constants import AZ_CLI, FUNC_CLI
from funcapp_provisioner.tooling.runner import ToolResult, run_tool

if TYPE_CHECKING:
    from funcapp_provisioner.core.config import ProvisionConfig


def create_function_app(config: ProvisionConfig) -> ToolResult:
    """Create the function app with ``az functionapp create``."""
    return run_tool(
        AZ_CLI,
        [
            "functionapp",
            "create",
            "--resource-group",
            config.resource_group_name,
            "--consumption-plan-location",
            config.location,
            "--runtime",
            config.worker_runtime,
            "--runtime-version",
            config.runtime_version,
            "--functions-version",
            config.functions_version,
            "--name",
            config.function_app_name,
            "--storage-account",
            config.storage_account_name,
        ],
        stage="create_function_app",
    )


def publish_function_app(config: ProvisionConfig) -> ToolResult:
    """Publish the local project with ``func azure functionapp publish``."""
    return run_tool(
        FUNC_CLI,
        ["azure", "functionapp", "publish", config.function_app_name],
        cwd=config.project_path,
        stage="publish_function_app",
    )
