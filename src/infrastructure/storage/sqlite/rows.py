"""Conversion between entity fields and SQLite column values.

Decimals are written as text so money reads back exactly; dates and
timestamps as ISO-8601; enums by value. Reading is left to pydantic,
which parses those strings back into the declared field types.
"""

import re
from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

import aiosqlite
from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

_IDENTIFIER_RE = re.compile(r"^[a-z_]+$")


def to_db(value: Any) -> Any:
    """Column value for a single entity field."""
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def column_values(model: BaseModel, columns: Iterable[str]) -> list[Any]:
    return [to_db(getattr(model, column)) for column in columns]


def from_row(model: type[ModelT], row: aiosqlite.Row, **extra: Any) -> ModelT:
    """Build an entity from a row; columns without a matching field are ignored."""
    return model.model_validate({**dict(row), **extra})


def identifier(name: str) -> str:
    """Guard a table or column name before it is formatted into SQL."""
    if not _IDENTIFIER_RE.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name
