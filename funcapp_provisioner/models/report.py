"""Pydantic model of a provisioning run report.

The report is the record of one run: which Azure resources were created
(by resource ID), where the local project lives, whether the resource
group was kept, and the outcome and duration of every step.  It is built
up by the orchestrator as the run progresses, attached to the error when
a step fails, and optionally written to disk by the command line.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from pydantic import BaseModel, Field

# Schema version for forward compatibility
SCHEMA_VERSION = "provisioning-report-v1"


class StepStatus(enum.Enum):
    """Outcome of a provisioning step."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


class StepRecord(BaseModel):
    """A single step of the run.

    Attributes:
        name: Step name (e.g. ``"create_storage_account"``).
        status: Outcome of the step.
        duration_s: Wall-clock duration in seconds.
        detail: Resource ID, tool command or error message.
    """

    name: str
    status: StepStatus
    duration_s: float = 0.0
    detail: str = ""


class ProvisioningReport(BaseModel):
    """Top-level record of a provisioning run.

    Attributes:
        schema_version: Schema identifier for forward compatibility.
        run_id: Correlation identifier of the run.
        subscription_id: Subscription provisioned into.
        location: Azure region.
        resource_group_name: Resource group name.
        resource_group_id: Resource ID returned by Azure.
        storage_account_name: Storage account name.
        storage_account_id: Resource ID returned by Azure.
        primary_endpoints: Storage service endpoints (blob, file, queue, ...).
        function_app_name: Remote function app name.
        function_name: Function handler scaffolded in the project.
        project_dir: Absolute path of the local project.
        resources_kept: Whether the resource group was left in place.
        started_at: Run start (ISO 8601, UTC).
        finished_at: Run end (ISO 8601, UTC); empty while running.
        steps: Step outcomes in execution order.
    """

    schema_version: str = Field(default=SCHEMA_VERSION, alias="$schema")
    run_id: str = ""
    subscription_id: str = ""
    location: str = ""
    resource_group_name: str = ""
    resource_group_id: str = ""
    storage_account_name: str = ""
    storage_account_id: str = ""
    primary_endpoints: dict[str, str] = Field(default_factory=dict)
    function_app_name: str = ""
    function_name: str = ""
    project_dir: str = ""
    resources_kept: bool = False
    started_at: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    finished_at: str = ""
    steps: list[StepRecord] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @property
    def succeeded(self) -> bool:
        """``True`` if no step failed."""
        return all(step.status != StepStatus.FAILED for step in self.steps)

    @property
    def failed_step(self) -> str:
        """Name of the step that failed, or ``""``."""
        return next((s.name for s in self.steps if s.status == StepStatus.FAILED), "")

    def record(
        self,
        name: str,
        status: StepStatus,
        *,
        duration_s: float = 0.0,
        detail: str = "",
    ) -> StepRecord:
        """Append a step outcome and return it."""
        step = StepRecord(name=name, status=status, duration_s=round(duration_s, 3), detail=detail)
        self.steps.append(step)
        return step

    def finish(self) -> None:
        """Stamp the end time of the run."""
        self.finished_at = datetime.now(UTC).isoformat()

    def to_dict(self) -> dict[str, object]:
        """Serialise to a dict with the ``$schema`` key."""
        return self.model_dump(by_alias=True, mode="json")

    def to_json(self, *, indent: int = 2) -> str:
        """Serialise to a JSON string with the ``$schema`` key."""
        return self.model_dump_json(by_alias=True, indent=indent)
