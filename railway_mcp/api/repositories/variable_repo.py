"""Variable upserts."""

import asyncio
from typing import Iterator

from ...errors import RailwayMCPError, VariableBatchFailed
from ...models import VariableUpsertInput

UPSERT_VARIABLE_MUTATION = """
mutation variableUpsert(
  $projectId: String!,
  $environmentId: String!,
  $serviceId: String,
  $name: String!,
  $value: String!
) {
  variableUpsert(
    input: {
      projectId: $projectId,
      environmentId: $environmentId,
      serviceId: $serviceId,
      name: $name,
      value: $value
    }
  )
}
"""


class VariableRepository:
    """Variable writes scoped to (project, environment, service)."""

    def __init__(self, client, batch_size: int = 10):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.client = client
        self.batch_size = batch_size

    async def upsert_variable(self, entry: VariableUpsertInput) -> None:
        await self.client.request(
            UPSERT_VARIABLE_MUTATION, entry.model_dump(by_alias=True)
        )

    async def upsert_variables(self, entries: list[VariableUpsertInput]) -> None:
        """Upsert in chunks; each chunk runs concurrently and completes first.

        A chunk always settles before a failure is reported, so the raised
        ``VariableBatchFailed`` names exactly which variables were written.
        """
        applied: list[str] = []
        for chunk in self.chunks(entries):
            results = await asyncio.gather(
                *(self.upsert_variable(entry) for entry in chunk),
                return_exceptions=True,
            )
            failures = [
                (entry, result)
                for entry, result in zip(chunk, results)
                if isinstance(result, BaseException)
            ]
            applied.extend(
                entry.name
                for entry, result in zip(chunk, results)
                if not isinstance(result, BaseException)
            )
            if not failures:
                continue

            entry, error = failures[0]
            if not isinstance(error, RailwayMCPError):
                raise error
            raise VariableBatchFailed(
                f"Failed to set {entry.name}: {error}",
                applied=applied,
                failed=[failed_entry.name for failed_entry, _ in failures],
                errors=getattr(error, "errors", None),
            ) from error

    def chunks(
        self, entries: list[VariableUpsertInput]
    ) -> Iterator[list[VariableUpsertInput]]:
        for start in range(0, len(entries), self.batch_size):
            yield entries[start : start + self.batch_size]
