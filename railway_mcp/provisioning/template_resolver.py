"""Locate a database template and derive what to provision from it."""

from typing import Iterable, Sequence, Union

from ..core_utils import LoggingUtility
from ..errors import InvalidTemplate, TemplateNotFound
from ..models import ResolvedService, ServiceConfig, Template

DEFAULT_APPLICATION_PORT = 5432
DEFAULT_MOUNT_PATH = "/data"
DATABASE_CATEGORIES = ("storage", "database")


CategoryFilter = Union[str, Sequence[str]]


def filter_terms(category_filter: CategoryFilter) -> tuple[str, ...]:
    """A single term may be passed on its own instead of in a sequence."""
    if isinstance(category_filter, str):
        return (category_filter,)
    return tuple(category_filter)


def matches_category(template: Template, category_filter: CategoryFilter) -> bool:
    """Case-insensitive substring match of any filter term on the category."""
    category = template.category.lower()
    return any(term.lower() in category for term in filter_terms(category_filter))


def derive_application_port(config: ServiceConfig) -> int:
    proxies = config.tcp_proxies
    if not proxies:
        return DEFAULT_APPLICATION_PORT
    first = next(iter(proxies.values()))
    return first.port if first.port is not None else DEFAULT_APPLICATION_PORT


def derive_mount_path(config: ServiceConfig) -> str:
    if not config.volume_mounts:
        return DEFAULT_MOUNT_PATH
    first = next(iter(config.volume_mounts.values()))
    return first.mount_path or DEFAULT_MOUNT_PATH


def resolve_template(template: Template) -> ResolvedService:
    """Derive the provisioning input from one template payload.

    Only the first service slot is used. Templates for this workflow declare a
    single service; any further slots are ignored.
    """
    services = template.serialized_config.services
    if not services:
        raise InvalidTemplate(template.id, "no services")

    slot, config = next(iter(services.items()))
    if len(services) > 1:
        LoggingUtility.log_warning(
            "resolve_template",
            f"Template {template.id} declares {len(services)} services; "
            f"only '{slot}' will be provisioned",
        )

    if not config.image:
        raise InvalidTemplate(template.id, "no image source")

    variables = {
        name: variable.default_value
        for name, variable in config.variables.items()
        if variable.default_value is not None
    }

    return ResolvedService(
        source_id=template.id,
        slot=slot,
        image=config.image,
        default_name=config.name or template.name or slot,
        variables=variables,
        application_port=derive_application_port(config),
        mount_path=derive_mount_path(config),
    )


class TemplateResolver:
    """Finds database templates in the live catalog."""

    def __init__(self, templates):
        self.templates = templates
        self.logger = LoggingUtility()

    async def list_database_templates(
        self, category_filter: CategoryFilter = DATABASE_CATEGORIES
    ) -> list[Template]:
        catalog = await self.templates.list_templates()
        return list(_filter_catalog(catalog, category_filter))

    async def resolve(
        self, template_id: str, category_filter: CategoryFilter = DATABASE_CATEGORIES
    ) -> ResolvedService:
        """Fetch the catalog and resolve ``template_id`` within the filter."""
        for template in await self.list_database_templates(category_filter):
            if template.id == template_id:
                resolved = resolve_template(template)
                self.logger.log_info(
                    "resolve_template",
                    f"Resolved {template_id} to image {resolved.image} "
                    f"(port {resolved.application_port}, mount {resolved.mount_path})",
                )
                return resolved
        raise TemplateNotFound(template_id)


def _filter_catalog(
    catalog: Iterable[Template], category_filter: CategoryFilter
) -> Iterable[Template]:
    return (t for t in catalog if matches_category(t, category_filter))
