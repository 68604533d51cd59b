"""Error taxonomy for Railway MCP."""

from typing import Any, Optional


class RailwayMCPError(Exception):
    """Base class for every error raised by Railway MCP."""

    def context(self) -> dict[str, Any]:
        """Structured details safe to return to the tool caller."""
        return {}


class ConfigurationError(RailwayMCPError):
    """The client is missing configuration it needs, such as the API token."""


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(RailwayMCPError):
    """Input or template payload rejected before any remote mutation."""


class TemplateNotFound(ValidationError):
    """No template in the filtered catalog matches the requested id."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template not found: {template_id}")

    def context(self) -> dict[str, Any]:
        return {"template_id": self.template_id}


class InvalidTemplate(ValidationError):
    """The template cannot be provisioned as-is."""

    def __init__(self, template_id: str, reason: str):
        self.template_id = template_id
        self.reason = reason
        super().__init__(f"Invalid template {template_id}: {reason}")

    def context(self) -> dict[str, Any]:
        return {"template_id": self.template_id, "reason": self.reason}


class UnsupportedDatabaseType(ValidationError):
    """The requested database type is not in the built-in catalog."""

    def __init__(self, database_type: str):
        self.database_type = database_type
        super().__init__(f"Unsupported database type: {database_type}")

    def context(self) -> dict[str, Any]:
        return {"database_type": self.database_type}


class InvalidRegion(ValidationError):
    """The requested region is not one of the supported regions."""

    def __init__(self, region: Any, supported: list[str]):
        self.region = region
        self.supported = supported
        super().__init__(
            f"Unsupported region: {region}. Supported regions: {', '.join(supported)}"
        )

    def context(self) -> dict[str, Any]:
        return {"region": str(self.region), "supported_regions": self.supported}


# =============================================================================
# REMOTE CALL ERRORS
# =============================================================================


class TransportError(RailwayMCPError):
    """Network or HTTP level failure talking to the Railway API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        self.message = message
        if status_code is not None:
            super().__init__(f"Railway API HTTP {status_code}: {message}")
        else:
            super().__init__(f"Railway API request failed: {message}")

    def context(self) -> dict[str, Any]:
        if self.status_code is None:
            return {}
        return {"status_code": self.status_code}


class ApplicationError(RailwayMCPError):
    """The Railway API reported a failure of its own."""

    def __init__(self, message: str, errors: Optional[list[dict[str, Any]]] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    def context(self) -> dict[str, Any]:
        if not self.errors:
            return {}
        return {"errors": self.errors}


class VariableBatchFailed(ApplicationError):
    """One or more upserts in a variable batch failed.

    Raised once the whole chunk has settled, so ``applied`` lists every
    variable that was written and ``failed`` every one that was not.
    """

    def __init__(
        self,
        message: str,
        applied: list[str],
        failed: list[str],
        errors: Optional[list[dict[str, Any]]] = None,
    ):
        self.applied = list(applied)
        self.failed = list(failed)
        super().__init__(message, errors)

    def context(self) -> dict[str, Any]:
        context = super().context()
        context.update({"applied_variables": self.applied, "failed_variables": self.failed})
        return context


# =============================================================================
# ORCHESTRATION ERRORS
# =============================================================================


class OrchestrationError(RailwayMCPError):
    """A provisioning step failed after the service was created.

    Nothing is rolled back. ``created`` lists the identifiers of every
    resource that exists on Railway at the time of the failure so the caller
    can clean up or resume from the failed step.
    """

    step = "unknown"

    def __init__(
        self,
        message: str,
        service_id: str,
        environment_id: str,
        created: Optional[dict[str, Any]] = None,
    ):
        self.service_id = service_id
        self.environment_id = environment_id
        self.created = dict(created or {})
        super().__init__(message)

    def context(self) -> dict[str, Any]:
        return {
            "failed_step": self.step,
            "service_id": self.service_id,
            "environment_id": self.environment_id,
            "created_resources": self.created,
        }


class VariableUpsertFailed(OrchestrationError):
    step = "set_variables"


class InstanceNotFound(OrchestrationError):
    step = "update_placement"


class PlacementUpdateFailed(OrchestrationError):
    step = "update_placement"


class ProxyCreationFailed(OrchestrationError):
    step = "create_network_proxy"


class VolumeCreationFailed(OrchestrationError):
    step = "create_volume"
