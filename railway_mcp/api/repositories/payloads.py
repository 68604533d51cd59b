"""Validation of mutation and query payloads returned by the gateway."""

from typing import Any, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...errors import ApplicationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_payload(
    model: type[ModelT], data: dict[str, Any], field: str, required: bool = True
) -> Optional[ModelT]:
    """Validate ``data[field]`` as ``model``.

    An empty field returns None, or raises ``ApplicationError`` when
    ``required``. A payload of the wrong shape always raises
    ``ApplicationError``.
    """
    payload = data.get(field) if isinstance(data, dict) else None
    if not payload:
        if required:
            raise ApplicationError(f"{field} returned no data")
        return None
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ApplicationError(f"Unexpected {field} response: {e}") from e
