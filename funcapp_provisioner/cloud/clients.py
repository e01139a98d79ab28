"""Azure credential and management client construction.

The credential is a ``DefaultAzureCredential`` (environment, managed
identity, Azure CLI login, ...).  By default a token for the Resource
Manager scope is requested immediately so that a missing login fails
before the first provisioning call instead of halfway through the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from azure.core.exceptions import AzureError
from azure.identity import DefaultAzureCredential
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.storage import StorageManagementClient

from funcapp_provisioner.core.constants import ARM_SCOPE
from funcapp_provisioner.core.exceptions import CredentialError

if TYPE_CHECKING:
    from azure.core.credentials import TokenCredential

    from funcapp_provisioner.core.config import ProvisionConfig

logger = logging.getLogger("funcapp_provisioner.cloud.clients")


@dataclass(frozen=True, slots=True)
class AzureClients:
    """Management clients shared by the cloud steps of a single run.

    Attributes:
        credential: Credential the clients authenticate with.
        resources: Client for resource groups.
        storage: Client for storage accounts.
    """

    credential: TokenCredential
    resources: ResourceManagementClient
    storage: StorageManagementClient


def create_credential(*, verify: bool = True) -> TokenCredential:
    """Build the Azure credential.

    Args:
        verify: Request a Resource Manager token straight away.

    Raises:
        CredentialError: If no credential source can issue a token.
    """
    try:
        credential = DefaultAzureCredential()
        if verify:
            credential.get_token(ARM_SCOPE)
    except AzureError as exc:
        msg = f"Failed to obtain a credential: {exc}"
        raise CredentialError(msg) from exc

    logger.info("Azure credential obtained | verified=%s", verify)
    return credential


def create_clients(
    config: ProvisionConfig,
    credential: TokenCredential | None = None,
) -> AzureClients:
    """Create the resource and storage management clients for a run.

    Args:
        config: Provisioning configuration (supplies the subscription).
        credential: Credential to use; one is created when omitted.

    Raises:
        CredentialError: If a credential has to be created and cannot be.
    """
    if credential is None:
        credential = create_credential()

    clients = AzureClients(
        credential=credential,
        resources=ResourceManagementClient(credential, config.subscription_id),
        storage=StorageManagementClient(credential, config.subscription_id),
    )
    logger.info("Azure clients created | subscription=%s", config.subscription_id)
    return clients
