"""Shared pytest fixtures for the provisioner test suite."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from funcapp_provisioner.cloud.clients import AzureClients
from funcapp_provisioner.core.config import ProvisionConfig

# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------

SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000000"
RESOURCE_GROUP_ID = f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg-funcapp-test"
STORAGE_ACCOUNT_ID = (
    f"{RESOURCE_GROUP_ID}/providers/Microsoft.Storage/storageAccounts/stfuncapptest"
)

REQUIRED_ENV: dict[str, str] = {
    "AZURE_SUBSCRIPTION_ID": SUBSCRIPTION_ID,
    "AZURE_LOCATION": "westeurope",
    "AZURE_RESOURCE_GROUP_NAME": "rg-funcapp-test",
    "AZURE_STORAGE_ACCOUNT_NAME": "stfuncapptest",
    "AZURE_FUNCTION_APP_NAME": "func-app-test",
    "FUNCTION_NAME": "HttpExample",
    "FUNCTION_TEMPLATE": "HTTP trigger",
    "AUTH_LEVEL": "anonymous",
}


@pytest.fixture()
def required_env() -> dict[str, str]:
    """All eight required settings, as environment variables."""
    return dict(REQUIRED_ENV)


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    """A not-yet-created project directory under pytest's tmp_path."""
    return tmp_path / "functionapp"


@pytest.fixture()
def config(project_dir: Path) -> ProvisionConfig:
    """A complete configuration pointing at a temporary project directory."""
    return ProvisionConfig(
        subscription_id=SUBSCRIPTION_ID,
        location="westeurope",
        resource_group_name="rg-funcapp-test",
        storage_account_name="stfuncapptest",
        function_app_name="func-app-test",
        function_name="HttpExample",
        function_template="HTTP trigger",
        auth_level="anonymous",
        project_dir=str(project_dir),
    )


# ---------------------------------------------------------------------------
# Azure client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def resources_client() -> MagicMock:
    """ResourceManagementClient stand-in that succeeds."""
    client = MagicMock(name="ResourceManagementClient")
    client.resource_groups.create_or_update.return_value = SimpleNamespace(
        id=RESOURCE_GROUP_ID, name="rg-funcapp-test"
    )
    return client


@pytest.fixture()
def storage_client() -> MagicMock:
    """StorageManagementClient stand-in that succeeds."""
    client = MagicMock(name="StorageManagementClient")
    client.storage_accounts.check_name_availability.return_value = SimpleNamespace(
        name_available=True, reason=None, message=None
    )
    client.storage_accounts.begin_create.return_value.result.return_value = SimpleNamespace(
        id=STORAGE_ACCOUNT_ID
    )
    client.storage_accounts.get_properties.return_value = SimpleNamespace(
        id=STORAGE_ACCOUNT_ID,
        provisioning_state="Succeeded",
        primary_endpoints=SimpleNamespace(
            blob="https://stfuncapptest.blob.core.windows.net/",
            file="https://stfuncapptest.file.core.windows.net/",
            queue="https://stfuncapptest.queue.core.windows.net/",
            table="https://stfuncapptest.table.core.windows.net/",
            web=None,
        ),
    )
    return client


@pytest.fixture()
def azure_clients(resources_client: MagicMock, storage_client: MagicMock) -> AzureClients:
    """Client bundle built from the stand-ins."""
    return AzureClients(
        credential=MagicMock(name="credential"),
        resources=resources_client,
        storage=storage_client,
    )
