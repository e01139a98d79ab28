"""Resource group provisioning and cleanup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.core.exceptions import AzureError

from funcapp_provisioner.core.exceptions import CloudOperationError

if TYPE_CHECKING:
    from azure.mgmt.resource import ResourceManagementClient

    from funcapp_provisioner.core.config import ProvisionConfig

logger = logging.getLogger("funcapp_provisioner.cloud.resource_group")


def create_resource_group(
    resources: ResourceManagementClient,
    config: ProvisionConfig,
) -> Any:
    """Create or update the resource group at the configured location.

    Returns:
        The ``ResourceGroup`` returned by Azure.

    Raises:
        CloudOperationError: If the call fails.
    """
    try:
        group = resources.resource_groups.create_or_update(
            config.resource_group_name,
            {"location": config.location},
        )
    except AzureError as exc:
        msg = f"Failed to create resource group {config.resource_group_name}: {exc}"
        raise CloudOperationError("create_resource_group", msg) from exc

    logger.info(
        "Resource group created | name=%s | location=%s | id=%s",
        config.resource_group_name,
        config.location,
        group.id,
    )
    return group


def delete_resource_group(
    resources: ResourceManagementClient,
    config: ProvisionConfig,
) -> None:
    """Delete the resource group and everything in it.

    Blocks until Azure reports the long-running delete as finished.

    Raises:
        CloudOperationError: If the delete cannot be started or fails.
    """
    logger.info("Deleting resource group | name=%s", config.resource_group_name)
    try:
        poller = resources.resource_groups.begin_delete(config.resource_group_name)
        poller.result()
    except AzureError as exc:
        msg = f"Failed to clean up resource group {config.resource_group_name}: {exc}"
        raise CloudOperationError("cleanup", msg) from exc

    logger.info("Resource group deleted | name=%s", config.resource_group_name)
