"""
Typed record values.

Records are free-form payloads keyed by model-defined field names. Before
the engine reads a value (the owner field in particular) the payload is
converted into tagged values, so ownership logic never trusts the raw
payload shape.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from ..constants import (FIELD_TYPE_BOOLEAN, FIELD_TYPE_DATE, FIELD_TYPE_JSON,
                         FIELD_TYPE_NUMBER, FIELD_TYPE_RELATION,
                         FIELD_TYPE_STRING)
from .models import FieldDefinition, ModelDefinition


@dataclass(frozen=True)
class StringValue:
    value: str


@dataclass(frozen=True)
class NumberValue:
    value: Union[int, float]


@dataclass(frozen=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True)
class DateValue:
    value: datetime


@dataclass(frozen=True)
class JsonValue:
    value: Any


@dataclass(frozen=True)
class RelationRef:
    """Reference to one or more records of another model."""

    model: str
    value: Any


FieldValue = Union[StringValue, NumberValue, BooleanValue, DateValue, JsonValue, RelationRef]
TypedRecord = Dict[str, FieldValue]


def _coerce_date(raw: Any) -> Optional[datetime]:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def coerce_value(field: FieldDefinition, raw: Any) -> Optional[FieldValue]:
    """
    Tag a raw payload value according to its field type.

    Returns None when the value does not fit the declared type.
    """
    if field.type == FIELD_TYPE_STRING:
        return StringValue(raw) if isinstance(raw, str) else None
    if field.type == FIELD_TYPE_NUMBER:
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return None
        return NumberValue(raw)
    if field.type == FIELD_TYPE_BOOLEAN:
        return BooleanValue(raw) if isinstance(raw, bool) else None
    if field.type == FIELD_TYPE_DATE:
        parsed = _coerce_date(raw)
        return DateValue(parsed) if parsed is not None else None
    if field.type == FIELD_TYPE_JSON:
        return JsonValue(raw)
    if field.type == FIELD_TYPE_RELATION and field.relation is not None:
        return RelationRef(field.relation.model, raw)
    return None


def coerce_record(model: ModelDefinition, payload: Mapping) -> TypedRecord:
    """
    Convert a raw payload into a typed record.

    Keys that are not fields of ``model``, null values and values that do
    not fit the declared type are left out.
    """
    record: TypedRecord = {}
    for field in model.fields:
        if field.name not in payload or payload[field.name] is None:
            continue
        value = coerce_value(field, payload[field.name])
        if value is not None:
            record[field.name] = value
    return record


def as_user_id(value: Any) -> Optional[int]:
    """
    Interpret a stored owner value as a user id.

    Accepts integers and integral floats, raw or wrapped in a
    ``NumberValue``. Booleans, strings and everything else yield None.
    """
    if isinstance(value, NumberValue):
        value = value.value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def read_owner(record: Mapping, owner_field: str) -> Optional[int]:
    """Return the owner id stored in ``record`` or None if it has none."""
    return as_user_id(record.get(owner_field))


def is_owned_by(record: Mapping, owner_field: str, user_id: int) -> bool:
    owner = read_owner(record, owner_field)
    return owner is not None and owner == user_id
