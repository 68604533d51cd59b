"""Database and storage provisioning workflow."""

from .database_catalog import (
    DATABASE_CONFIGS,
    DatabaseConfig,
    DatabaseType,
    list_database_types,
    resolve_database,
)
from .orchestrator import ProvisioningOrchestrator, ProvisioningStep
from .regions import SUPPORTED_REGIONS, RegionCode, select_region
from .template_resolver import (
    DEFAULT_APPLICATION_PORT,
    DEFAULT_MOUNT_PATH,
    TemplateResolver,
    resolve_template,
)

__all__ = [
    "DATABASE_CONFIGS",
    "DEFAULT_APPLICATION_PORT",
    "DEFAULT_MOUNT_PATH",
    "DatabaseConfig",
    "DatabaseType",
    "ProvisioningOrchestrator",
    "ProvisioningStep",
    "RegionCode",
    "SUPPORTED_REGIONS",
    "TemplateResolver",
    "list_database_types",
    "resolve_database",
    "resolve_template",
    "select_region",
]
