"""Pydantic models for compiled collection and field definitions.

This module contains the compiled-schema models:
- Field models: ScalarField, OptionSetField, RelationshipField,
  ReverseRelationField (a tagged union discriminated on ``kind``)
- Join annotations: VirtualRelation
- Collection model: CollectionDef

Every model renders the framework-shaped dict with ``to_payload()``.

Configuration models (DatabaseConfig, AdapterConfig, SchemaConfig) live in
payload_db.config.models.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enumerations
# ============================================================================


class FieldKind(str, Enum):
    """Discriminator for the field definition union."""

    SCALAR = "scalar"
    OPTION_SET = "option-set"
    RELATIONSHIP = "relationship"
    REVERSE_RELATION = "reverse-relation"


class ScalarType(str, Enum):
    """Scalar field types. Values are the framework's field type names."""

    TEXT = "text"
    TEXTAREA = "textarea"
    RICH_TEXT = "richText"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    CHECKBOX = "checkbox"
    JSON = "json"


class Cardinality(str, Enum):
    """Reference multiplicity of a relation or option set."""

    SINGLE = "single"
    MANY = "many"


# ============================================================================
# Join Annotations
# ============================================================================


class VirtualRelation(BaseModel):
    """Nested relationship descriptor attached by join resolution.

    Example:
        >>> rel = VirtualRelation(name="posts", relation_to="posts")
        >>> rel.cardinality
        <Cardinality.MANY: 'many'>
    """

    model_config = ConfigDict(frozen=True)

    name: str
    relation_to: str
    cardinality: Cardinality = Cardinality.MANY

    def to_payload(self) -> dict[str, Any]:
        """Render as a framework relationship sub-field."""
        return {
            "name": self.name,
            "type": "relationship",
            "relationTo": self.relation_to,
            "hasMany": self.cardinality is Cardinality.MANY,
        }


# ============================================================================
# Field Models
# ============================================================================


class _FieldBase(BaseModel):
    """Attributes shared by every field kind.

    ``rich_editing`` and ``virtual_fields`` are only ever set by join
    resolution on the counterpart of a reverse relation.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    rich_editing: bool = False
    virtual_fields: list[VirtualRelation] = Field(default_factory=list)

    def _annotate(self, payload: dict[str, Any]) -> dict[str, Any]:
        if self.rich_editing:
            admin = dict(payload.get("admin", {}))
            admin["enableRichText"] = True
            payload["admin"] = admin
        if self.virtual_fields:
            payload["fields"] = [rel.to_payload() for rel in self.virtual_fields]
        return payload


class ScalarField(_FieldBase):
    """A plain value field (text, number, date, ...)."""

    kind: Literal["scalar"] = "scalar"
    scalar_type: ScalarType

    def to_payload(self) -> dict[str, Any]:
        return self._annotate({"name": self.name, "type": self.scalar_type.value})


class SelectOption(BaseModel):
    """One labeled value of an option set."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


class OptionSetField(_FieldBase):
    """A field restricted to a fixed list of options.

    Example:
        >>> status = OptionSetField(
        ...     name="status",
        ...     options=[SelectOption(label="Draft", value="draft")],
        ... )
        >>> status.to_payload()["type"]
        'select'
    """

    kind: Literal["option-set"] = "option-set"
    cardinality: Cardinality = Cardinality.SINGLE
    options: list[SelectOption] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "type": "select",
            "options": [option.model_dump() for option in self.options],
        }
        if self.cardinality is Cardinality.MANY:
            payload["hasMany"] = True
        return self._annotate(payload)


class RelationshipField(_FieldBase):
    """A forward reference to entries of another collection."""

    kind: Literal["relationship"] = "relationship"
    relation_to: str
    cardinality: Cardinality = Cardinality.SINGLE

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "type": "relationship",
            "relationTo": self.relation_to,
        }
        if self.cardinality is Cardinality.MANY:
            payload["hasMany"] = True
        return self._annotate(payload)


def discard_value(*args: Any, **kwargs: Any) -> None:
    """Write hook for derived fields: the incoming value is never stored."""
    return None


class ReverseRelationField(_FieldBase):
    """Inverse side of a relationship declared on another collection.

    Only exists between transformation and join resolution; compiled
    collections never contain one.

    Example:
        >>> join = ReverseRelationField(name="posts", relation_to="posts", source_field="author")
        >>> join.before_change({"id": 1}) is None
        True
    """

    kind: Literal["reverse-relation"] = "reverse-relation"
    relation_to: str
    cardinality: Cardinality = Cardinality.MANY
    source_field: str | None = None
    read_only: bool = True

    def before_change(self, value: Any) -> None:
        """Discard any value written to this field."""
        return discard_value(value)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "type": "join",
            "relationTo": self.relation_to,
            "hasMany": True,
            "admin": {"readOnly": True},
            "hooks": {"beforeChange": [discard_value]},
        }
        if self.source_field is not None:
            payload["sourceField"] = self.source_field
        return self._annotate(payload)


FieldDefinition = Annotated[
    Union[ScalarField, OptionSetField, RelationshipField, ReverseRelationField],
    Field(discriminator="kind"),
]


# ============================================================================
# Collection Model
# ============================================================================


class CollectionDef(BaseModel):
    """A compiled collection: slug plus ordered field definitions."""

    model_config = ConfigDict(frozen=True)

    slug: str
    fields: list[FieldDefinition] = Field(default_factory=list)

    def get_field(self, name: str) -> FieldDefinition | None:
        """Return the first field called *name*, or None."""
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None

    def to_payload(self) -> dict[str, Any]:
        """Render as a framework collection config."""
        return {
            "slug": self.slug,
            "fields": [field_def.to_payload() for field_def in self.fields],
        }


class CollectionRef(BaseModel):
    """Lookup entry echoing a collection name."""

    collection_name: str
