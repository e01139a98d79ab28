"""Shared provisioning constants, kept in one place.

Centralises environment variable names, external tool names and the fixed
Azure options (SKU, kind, access tier, Functions runtime defaults) used by
the cloud and tooling steps.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------

ENV_SUBSCRIPTION_ID = "AZURE_SUBSCRIPTION_ID"
ENV_LOCATION = "AZURE_LOCATION"
ENV_RESOURCE_GROUP_NAME = "AZURE_RESOURCE_GROUP_NAME"
ENV_STORAGE_ACCOUNT_NAME = "AZURE_STORAGE_ACCOUNT_NAME"
ENV_FUNCTION_APP_NAME = "AZURE_FUNCTION_APP_NAME"
ENV_FUNCTION_NAME = "FUNCTION_NAME"
ENV_FUNCTION_TEMPLATE = "FUNCTION_TEMPLATE"
ENV_AUTH_LEVEL = "AUTH_LEVEL"
ENV_KEEP_RESOURCE = "KEEP_RESOURCE"
ENV_PROJECT_DIR = "FUNCTION_PROJECT_DIR"
ENV_WORKER_RUNTIME = "FUNCTION_WORKER_RUNTIME"
ENV_RUNTIME_VERSION = "FUNCTION_RUNTIME_VERSION"
ENV_FUNCTIONS_VERSION = "FUNCTIONS_EXTENSION_VERSION"

#: Spellings of ``KEEP_RESOURCE`` that mean "keep the resources".
KEEP_RESOURCE_VALUES: frozenset[str] = frozenset({"1", "true", "True", "TRUE"})

# ---------------------------------------------------------------------------
# Local project defaults
# ---------------------------------------------------------------------------

DEFAULT_PROJECT_DIR = "functionapp"
DEFAULT_WORKER_RUNTIME = "node"
DEFAULT_RUNTIME_VERSION = "18"
DEFAULT_FUNCTIONS_VERSION = "4"

# ---------------------------------------------------------------------------
# External tools
# ---------------------------------------------------------------------------

AZ_CLI = "az"
FUNC_CLI = "func"

#: Tools checked before any cloud call, with what provides each one.
REQUIRED_TOOLS: tuple[tuple[str, str], ...] = (
    (AZ_CLI, "Azure CLI"),
    (FUNC_CLI, "Azure Functions Core Tools"),
)

# ---------------------------------------------------------------------------
# Azure Resource Manager
# ---------------------------------------------------------------------------

ARM_SCOPE = "https://management.azure.com/.default"

#: Storage services that are always encrypted with account-managed keys.
ENCRYPTED_SERVICES: tuple[str, ...] = ("file", "blob", "queue", "table")
