"""Merging partial updates into stored entities."""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

READ_ONLY_FIELDS = frozenset({"id", "created_at", "updated_at"})


def merge_changes(
    existing: ModelT,
    changes: Mapping[str, Any],
    read_only: Iterable[str] = READ_ONLY_FIELDS,
) -> ModelT:
    """Return ``existing`` with ``changes`` applied and re-validated.

    Keys missing from ``changes`` keep their stored value; a key mapped to
    None clears the field. Read-only keys are ignored.
    """
    blocked = set(read_only)
    updates = {k: v for k, v in changes.items() if k not in blocked}
    try:
        return type(existing).model_validate(existing.model_dump() | updates)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(f"Invalid value for {field}: {first['msg']}", field=field) from e
