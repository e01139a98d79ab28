"""Data models.

- ProvisioningReport: What a run provisioned, and how each step went
- StepRecord: Outcome and timing of a single provisioning step
"""

from funcapp_provisioner.models.report import (
    SCHEMA_VERSION,
    ProvisioningReport,
    StepRecord,
    StepStatus,
)

__all__ = [
    "SCHEMA_VERSION",
    "ProvisioningReport",
    "StepRecord",
    "StepStatus",
]
