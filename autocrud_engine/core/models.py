"""
Normalized model definition types.

These are the values the validator produces once a submission has passed
every check. They are immutable; a new save produces a new value.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

FieldType = Literal["string", "number", "boolean", "date", "json", "relation"]
RelationKind = Literal["one-to-one", "one-to-many", "many-to-many"]
PermissionLiteral = Literal["create", "read", "update", "delete", "all"]
DefaultValue = Union[bool, int, float, str, None]


class RelationConfig(BaseModel):
    """Target of a relation field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    model: str
    type: RelationKind
    foreign_key: Optional[str] = Field(default=None, alias="foreignKey")
    references: Optional[str] = None


class FieldDefinition(BaseModel):
    """One attribute of a model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    type: FieldType
    required: bool = False
    unique: bool = False
    default: DefaultValue = None
    relation: Optional[RelationConfig] = None

    @property
    def is_relation(self) -> bool:
        return self.type == "relation"


class ModelDefinition(BaseModel):
    """
    The schema for one named entity type.

    ``to_dict()`` returns the camelCase wire form. Keys that were absent
    from the submission stay absent, while ``required``, ``unique`` and
    ``timestamps`` are always present with their defaults applied.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    fields: List[FieldDefinition]
    owner_field: Optional[str] = Field(default=None, alias="ownerField")
    rbac: Optional[Dict[str, List[PermissionLiteral]]] = None
    timestamps: bool = True

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    @property
    def relation_fields(self) -> List[FieldDefinition]:
        return [field for field in self.fields if field.is_relation]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)
