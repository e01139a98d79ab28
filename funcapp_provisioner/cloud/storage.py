"""Storage account provisioning.

The account backing the function app is always created with the same
options:

- kind ``StorageV2``, SKU ``Standard_LRS``, access tier ``Cool``;
- ``Microsoft.Storage`` key source, with the file, blob, queue and table
  services each encrypted and using account-managed keys.

Only the name and location come from configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from azure.core.exceptions import AzureError
from azure.mgmt.storage.models import (
    AccessTier,
    Encryption,
    EncryptionService,
    EncryptionServices,
    KeySource,
    KeyType,
    Kind,
    Sku,
    SkuName,
    StorageAccountCheckNameAvailabilityParameters,
    StorageAccountCreateParameters,
)

from funcapp_provisioner.core.constants import ENCRYPTED_SERVICES
from funcapp_provisioner.core.exceptions import CloudOperationError, PermanentError

if TYPE_CHECKING:
    from azure.mgmt.storage import StorageManagementClient

    from funcapp_provisioner.core.config import ProvisionConfig

logger = logging.getLogger("funcapp_provisioner.cloud.storage")


class StorageNameUnavailableError(PermanentError):
    """The storage account name is taken or not allowed.

    Attributes:
        name: The rejected account name.
        reason: Azure's reason code (``AccountNameInvalid``, ``AlreadyExists``).
    """

    default_stage = "check_name_availability"
    default_code = "STORAGE_NAME_UNAVAILABLE"

    def __init__(self, name: str, reason: str = "", message: str = "") -> None:
        self.name = name
        self.reason = reason
        super().__init__(
            f"Storage account name is not available: {name} ({reason or 'unknown'}): {message}"
        )


def check_name_availability(
    storage: StorageManagementClient,
    config: ProvisionConfig,
) -> Any:
    """Ask Azure whether the storage account name can be used.

    Returns:
        The ``CheckNameAvailabilityResult`` when the name is available.

    Raises:
        StorageNameUnavailableError: If the name cannot be used.
        CloudOperationError: If the call fails.
    """
    name = config.storage_account_name
    try:
        result = storage.storage_accounts.check_name_availability(
            StorageAccountCheckNameAvailabilityParameters(name=name),
        )
    except AzureError as exc:
        msg = f"Failed to check storage account name availability for {name}: {exc}"
        raise CloudOperationError("check_name_availability", msg) from exc

    if not result.name_available:
        raise StorageNameUnavailableError(name, str(result.reason or ""), result.message or "")

    logger.info("Storage account name available | name=%s", name)
    return result


def build_create_parameters(config: ProvisionConfig) -> StorageAccountCreateParameters:
    """Build the create request for the storage account."""
    services = {
        service: EncryptionService(enabled=True, key_type=KeyType.ACCOUNT)
        for service in ENCRYPTED_SERVICES
    }
    return StorageAccountCreateParameters(
        sku=Sku(name=SkuName.STANDARD_LRS),
        kind=Kind.STORAGE_V2,
        location=config.location,
        access_tier=AccessTier.COOL,
        encryption=Encryption(
            services=EncryptionServices(**services),
            key_source=KeySource.MICROSOFT_STORAGE,
        ),
    )


def create_storage_account(
    storage: StorageManagementClient,
    config: ProvisionConfig,
) -> Any:
    """Create the storage account and wait for provisioning to finish.

    Returns:
        The created ``StorageAccount``.

    Raises:
        CloudOperationError: If the create cannot be started or fails.
    """
    name = config.storage_account_name
    logger.info(
        "Creating storage account | name=%s | resource_group=%s | location=%s",
        name,
        config.resource_group_name,
        config.location,
    )
    try:
        poller = storage.storage_accounts.begin_create(
            config.resource_group_name,
            name,
            build_create_parameters(config),
        )
        account = poller.result()
    except AzureError as exc:
        msg = f"Failed to create storage account {name}: {exc}"
        raise CloudOperationError("create_storage_account", msg) from exc

    logger.info("Storage account created | name=%s | id=%s", name, account.id)
    return account


def get_storage_account_properties(
    storage: StorageManagementClient,
    config: ProvisionConfig,
) -> Any:
    """Fetch the properties of the storage account.

    Raises:
        CloudOperationError: If the call fails.
    """
    name = config.storage_account_name
    try:
        account = storage.storage_accounts.get_properties(config.resource_group_name, name)
    except AzureError as exc:
        msg = f"Failed to get storage account properties for {name}: {exc}"
        raise CloudOperationError("get_storage_account_properties", msg) from exc

    logger.info(
        "Storage account properties | name=%s | id=%s | provisioning_state=%s",
        name,
        account.id,
        account.provisioning_state,
    )
    return account
