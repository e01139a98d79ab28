"""Local Functions project scaffolding with Azure Functions Core Tools."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from funcapp_provisioner.core.constants import FUNC_CLI
from funcapp_provisioner.core.exceptions import PermanentError
from funcapp_provisioner.tooling.runner import ToolResult, run_tool

if TYPE_CHECKING:
    from funcapp_provisioner.core.config import ProvisionConfig

logger = logging.getLogger("funcapp_provisioner.tooling.scaffold")


class ScaffoldError(PermanentError):
    """The local project directory could not be prepared."""

    default_stage = "initialize_function_project"
    default_code = "SCAFFOLD_FAILED"


def ensure_project_dir(path: str | Path) -> Path:
    """Create the project directory (and parents) if it does not exist.

    Raises:
        ScaffoldError: If the path exists but is not a directory, or
            cannot be created.
    """
    project_dir = Path(path)
    if project_dir.exists() and not project_dir.is_dir():
        msg = f"Project path exists and is not a directory: {project_dir}"
        raise ScaffoldError(msg)

    if not project_dir.exists():
        try:
            project_dir.mkdir(parents=True)
        except OSError as exc:
            msg = f"Failed to create project directory {project_dir}: {exc}"
            raise ScaffoldError(msg) from exc
        logger.info("Project directory created | path=%s", project_dir)

    return project_dir


def initialize_function_project(config: ProvisionConfig) -> ToolResult:
    """Prepare the project directory and run ``func init`` inside it."""
    project_dir = ensure_project_dir(config.project_path)
    return run_tool(
        FUNC_CLI,
        ["init", "--worker-runtime", config.worker_runtime],
        cwd=project_dir,
        stage="initialize_function_project",
    )


def create_new_function(config: ProvisionConfig) -> ToolResult:
    """Add the configured function to the project with ``func new``."""
    return run_tool(
        FUNC_CLI,
        [
            "new",
            "--name",
            config.function_name,
            "--template",
            config.function_template,
            "--authlevel",
            config.auth_level,
        ],
        cwd=config.project_path,
        stage="create_new_function",
    )
