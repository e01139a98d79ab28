"""Azure management-plane steps.

- clients: Credential and management client construction
- resource_group: Resource group create and delete
- storage: Storage account name check, create and property fetch

Every step receives its client explicitly; nothing here keeps
process-wide state.
"""

from funcapp_provisioner.cloud.clients import AzureClients, create_clients, create_credential
from funcapp_provisioner.cloud.resource_group import (
    create_resource_group,
    delete_resource_group,
)
from funcapp_provisioner.cloud.storage import (
    StorageNameUnavailableError,
    build_create_parameters,
    check_name_availability,
    create_storage_account,
    get_storage_account_properties,
)

__all__ = [
    "AzureClients",
    "StorageNameUnavailableError",
    "build_create_parameters",
    "check_name_availability",
    "create_clients",
    "create_credential",
    "create_resource_group",
    "create_storage_account",
    "delete_resource_group",
    "get_storage_account_properties",
]
