"""Unified provisioning exception taxonomy.

Every domain exception inherits from ``ProvisioningError`` and carries
structured context fields so that the command line can report a single,
consistent fatal message whichever step failed.

Taxonomy categories
-------------------
- ``ValidationError`` - missing or unusable configuration, never retryable.
- ``PermanentError``  - failed cloud call or external tool, not retried.

No operation in this package is retried; ``retryable`` is kept on the base
class so that error payloads have the same shape everywhere.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging and the run report.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from funcapp_provisioner.models.report import ProvisioningReport


class ProvisioningError(Exception):
    """Base exception for all provisioning errors.

    Attributes:
        message: Human-readable error description.
        stage: Provisioning step where the error occurred
            (e.g. ``"create_storage_account"``, ``"publish_function_app"``).
        code: Machine-readable error code (e.g. ``"TOOL_FAILED"``).
        retryable: Whether the operation could succeed if repeated.
        correlation_id: Run identifier the error belongs to.
        report: Report of the run, up to and including the failed step;
            set by the orchestrator, ``None`` outside a run.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        self.report: ProvisioningReport | None = None
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(ProvisioningError):
    """Configuration or input validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(ProvisioningError):
    """Failure of a cloud call or external tool. Not retried."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Concrete errors shared across packages
# ---------------------------------------------------------------------------


class MissingToolError(PermanentError):
    """A required executable is not on the search path.

    Attributes:
        tool: Executable name that could not be found.
        hint: What to install to provide it.
    """

    default_stage = "check_prerequisites"
    default_code = "TOOL_NOT_FOUND"

    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        self.hint = hint
        message = f"'{tool}' command is not available."
        if hint:
            message = f"{message} Please install {hint}."
        super().__init__(message)


class CredentialError(PermanentError):
    """An Azure credential could not be obtained."""

    default_stage = "create_credential"
    default_code = "CREDENTIAL_FAILED"


class CloudOperationError(PermanentError):
    """An Azure management-plane call failed.

    Attributes:
        operation: Short name of the failed operation.
    """

    default_code = "CLOUD_OPERATION_FAILED"

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(message, stage=operation)
