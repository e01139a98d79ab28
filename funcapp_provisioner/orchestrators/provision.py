"""Sequential provisioning driver.

Runs the steps of a provisioning run in a fixed order:

1. Check prerequisites (``az`` and ``func`` on the search path)
2. Create the Azure credential and management clients
3. Create the resource group
4. Check the storage account name, create the account, fetch its properties
5. Scaffold the local project (``func init``) and function (``func new``)
6. Create the function app (``az functionapp create``)
7. Publish the project (``func azure functionapp publish``)
8. Delete the resource group, unless the keep-resource flag is set

The first failing step stops the run: its ``ProvisioningError`` is stamped
with the run ID, recorded in the report, attached to it as ``exc.report``
and re-raised.  Nothing is retried, and nothing created before the failure
is rolled back.
"""

from __future__ import annotations

import logging
import shutil
import time
import uuid
from typing import TYPE_CHECKING, Any, TypeVar

from funcapp_provisioner.cloud.clients import AzureClients, create_clients
from funcapp_provisioner.cloud.resource_group import (
    create_resource_group,
    delete_resource_group,
)
from funcapp_provisioner.cloud.storage import (
    check_name_availability,
    create_storage_account,
    get_storage_account_properties,
)
from funcapp_provisioner.core.exceptions import ProvisioningError
from funcapp_provisioner.core.prerequisites import check_prerequisites
from funcapp_provisioner.models.report import ProvisioningReport, StepStatus
from funcapp_provisioner.tooling.deploy import create_function_app, publish_function_app
from funcapp_provisioner.tooling.scaffold import create_new_function, initialize_function_project

if TYPE_CHECKING:
    from collections.abc import Callable

    from funcapp_provisioner.core.config import ProvisionConfig
    from funcapp_provisioner.tooling.runner import ToolResult

logger = logging.getLogger("funcapp_provisioner.orchestrators.provision")

T = TypeVar("T")

_ENDPOINT_SERVICES = ("blob", "file", "queue", "table")


def new_report(config: ProvisionConfig, run_id: str = "") -> ProvisioningReport:
    """Create an empty report for a run of *config*."""
    return ProvisioningReport(
        run_id=run_id or uuid.uuid4().hex,
        subscription_id=config.subscription_id,
        location=config.location,
        resource_group_name=config.resource_group_name,
        storage_account_name=config.storage_account_name,
        function_app_name=config.function_app_name,
        function_name=config.function_name,
        project_dir=str(config.project_path),
        resources_kept=config.keep_resources,
    )


def run_provisioning(
    config: ProvisionConfig,
    *,
    report: ProvisioningReport | None = None,
    clients_factory: Callable[[ProvisionConfig], AzureClients] = create_clients,
    which: Callable[[str], str | None] = shutil.which,
) -> ProvisioningReport:
    """Provision, deploy and (optionally) clean up.

    Args:
        config: Validated provisioning configuration.
        report: Report to fill in; a new one is created when omitted.
            Passing one lets the caller inspect it after a failure.
        clients_factory: Builds the Azure clients once prerequisites pass.
        which: Search-path lookup used by the prerequisite check.

    Returns:
        The completed ``ProvisioningReport``.

    Raises:
        ProvisioningError: From the first step that fails.
    """
    if report is None:
        report = new_report(config)

    logger.info(
        "Provisioning started | run_id=%s | resource_group=%s | function_app=%s",
        report.run_id,
        config.resource_group_name,
        config.function_app_name,
    )

    try:
        _run_step(report, "check_prerequisites", lambda: check_prerequisites(which=which))
        clients = _run_step(report, "create_clients", lambda: clients_factory(config))

        group = _run_step(
            report,
            "create_resource_group",
            lambda: create_resource_group(clients.resources, config),
            describe=_resource_id,
        )
        report.resource_group_id = _resource_id(group)

        _run_step(
            report,
            "check_name_availability",
            lambda: check_name_availability(clients.storage, config),
        )
        account = _run_step(
            report,
            "create_storage_account",
            lambda: create_storage_account(clients.storage, config),
            describe=_resource_id,
        )
        report.storage_account_id = _resource_id(account)

        properties = _run_step(
            report,
            "get_storage_account_properties",
            lambda: get_storage_account_properties(clients.storage, config),
            describe=_resource_id,
        )
        report.primary_endpoints = _primary_endpoints(properties)

        _run_step(
            report,
            "initialize_function_project",
            lambda: initialize_function_project(config),
            describe=_command_line,
        )
        _run_step(
            report,
            "create_new_function",
            lambda: create_new_function(config),
            describe=_command_line,
        )
        _run_step(
            report,
            "create_function_app",
            lambda: create_function_app(config),
            describe=_command_line,
        )
        _run_step(
            report,
            "publish_function_app",
            lambda: publish_function_app(config),
            describe=_command_line,
        )

        if config.keep_resources:
            report.record("cleanup", StepStatus.SKIPPED, detail="KEEP_RESOURCE is set")
            logger.info(
                "Keeping resources | run_id=%s | resource_group=%s",
                report.run_id,
                config.resource_group_name,
            )
        else:
            _run_step(
                report,
                "cleanup",
                lambda: delete_resource_group(clients.resources, config),
            )
    finally:
        report.finish()

    logger.info(
        "Provisioning finished | run_id=%s | steps=%d | resources_kept=%s",
        report.run_id,
        len(report.steps),
        report.resources_kept,
    )
    return report


def _run_step(
    report: ProvisioningReport,
    name: str,
    action: Callable[[], T],
    *,
    describe: Callable[[T], str] | None = None,
) -> T:
    """Run one step, timing it and recording the outcome in *report*."""
    started = time.monotonic()
    logger.info("Step started | run_id=%s | step=%s", report.run_id, name)
    try:
        result = action()
    except ProvisioningError as exc:
        exc.correlation_id = exc.correlation_id or report.run_id
        exc.report = report
        step = report.record(
            name,
            StepStatus.FAILED,
            duration_s=time.monotonic() - started,
            detail=exc.message,
        )
        logger.info(
            "Step failed | run_id=%s | step=%s | duration_s=%.3f",
            report.run_id,
            name,
            step.duration_s,
        )
        raise

    step = report.record(
        name,
        StepStatus.SUCCEEDED,
        duration_s=time.monotonic() - started,
        detail=describe(result) if describe is not None else "",
    )
    logger.info(
        "Step succeeded | run_id=%s | step=%s | duration_s=%.3f",
        report.run_id,
        name,
        step.duration_s,
    )
    return result


def _resource_id(resource: Any) -> str:
    value = getattr(resource, "id", None)
    return value if isinstance(value, str) else ""


def _command_line(result: ToolResult) -> str:
    return result.command_line


def _primary_endpoints(account: Any) -> dict[str, str]:
    """Pick the service endpoints out of a ``StorageAccount``."""
    endpoints = getattr(account, "primary_endpoints", None)
    if endpoints is None:
        return {}
    found = {service: getattr(endpoints, service, None) for service in _ENDPOINT_SERVICES}
    return {service: url for service, url in found.items() if isinstance(url, str)}
