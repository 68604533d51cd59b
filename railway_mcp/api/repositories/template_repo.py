"""Template catalog queries."""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ...core_utils import LoggingUtility
from ...models import Template

LIST_TEMPLATES_QUERY = """
query {
  templates {
    edges {
      node {
        id
        name
        description
        category
        serializedConfig
        projects
      }
    }
  }
}
"""


class TemplateRepository:
    """Fetches and validates the template catalog."""

    def __init__(self, client):
        self.client = client
        self.logger = LoggingUtility()

    async def list_templates(self) -> list[Template]:
        """Fetch the full catalog, dropping entries that fail validation."""
        data = await self.client.request(LIST_TEMPLATES_QUERY)
        edges = (data.get("templates") or {}).get("edges") or []
        return parse_templates(
            [edge.get("node") for edge in edges if isinstance(edge, dict)]
        )


def parse_templates(nodes: list[Any]) -> list[Template]:
    templates = []
    for node in nodes:
        if not isinstance(node, dict):
            continue
        try:
            templates.append(Template.model_validate(node))
        except PydanticValidationError as e:
            LoggingUtility.log_warning(
                "list_templates",
                f"Skipping malformed template {node.get('id', '<no id>')}: {e}",
            )
    return templates
