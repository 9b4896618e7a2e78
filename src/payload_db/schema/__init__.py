"""Schema compilation: field type grammar and reverse-relation resolution.

Provides the field transformer (``transform_field``, ``process_fields``),
the two-pass processor (``compile_schema``, with ``plan_joins`` and
``apply_joins`` exposed for reporting), and the compiled models.

Usage:
    from payload_db.schema import compile_schema, transform_field
    from payload_db.schema import CollectionDef, RelationshipField
"""

from payload_db.schema.fields import process_fields, transform_field
from payload_db.schema.models import (
    Cardinality,
    CollectionDef,
    CollectionRef,
    FieldDefinition,
    FieldKind,
    OptionSetField,
    RelationshipField,
    ReverseRelationField,
    ScalarField,
    ScalarType,
    SelectOption,
    VirtualRelation,
)
from payload_db.schema.processor import (
    JoinResolution,
    apply_joins,
    compile_schema,
    expand_collections,
    plan_joins,
)

__all__ = [
    "transform_field",
    "process_fields",
    "compile_schema",
    "expand_collections",
    "plan_joins",
    "apply_joins",
    "JoinResolution",
    "Cardinality",
    "CollectionDef",
    "CollectionRef",
    "FieldDefinition",
    "FieldKind",
    "OptionSetField",
    "RelationshipField",
    "ReverseRelationField",
    "ScalarField",
    "ScalarType",
    "SelectOption",
    "VirtualRelation",
]
