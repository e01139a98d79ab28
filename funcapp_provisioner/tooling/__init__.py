"""External command-line tool steps.

- runner: Process launch with combined output capture
- scaffold: Local Functions project and function scaffolding (``func``)
- deploy: Function app creation (``az``) and publishing (``func``)
"""

from funcapp_provisioner.tooling.deploy import create_function_app, publish_function_app
from funcapp_provisioner.tooling.runner import ToolInvocationError, ToolResult, run_tool
from funcapp_provisioner.tooling.scaffold import (
    ScaffoldError,
    create_new_function,
    ensure_project_dir,
    initialize_function_project,
)

__all__ = [
    "ScaffoldError",
    "ToolInvocationError",
    "ToolResult",
    "create_function_app",
    "create_new_function",
    "ensure_project_dir",
    "initialize_function_project",
    "publish_function_app",
    "run_tool",
]
