"""payload-db: compile shorthand schemas into document-framework collections.

Turns a compact schema (collection -> field -> type string) into fully
expanded collection and field definitions, resolving reverse relations
("<-posts.author") onto their forward relationship fields.

Usage:
    from payload_db import DB, configure_database
    from payload_db import compile_schema, transform_field
    from payload_db import CollectionDef, RelationshipField
    from payload_db import load_schema_config
"""

__version__ = "0.1.0"

# Factory
from payload_db.factory import (
    DB,
    PayloadDBResult,
    UnsupportedDatabaseError,
    configure_database,
)

# Config
from payload_db.config.loader import load_schema_config
from payload_db.config.models import AdapterConfig, DatabaseConfig, SchemaConfig

# Schema
from payload_db.schema.fields import process_fields, transform_field
from payload_db.schema.models import (
    Cardinality,
    CollectionDef,
    CollectionRef,
    FieldKind,
    OptionSetField,
    RelationshipField,
    ReverseRelationField,
    ScalarField,
    ScalarType,
    SelectOption,
    VirtualRelation,
)
from payload_db.schema.processor import compile_schema, plan_joins

__all__ = [
    # Factory
    "DB",
    "PayloadDBResult",
    "UnsupportedDatabaseError",
    "configure_database",
    # Config
    "load_schema_config",
    "AdapterConfig",
    "DatabaseConfig",
    "SchemaConfig",
    # Schema
    "transform_field",
    "process_fields",
    "compile_schema",
    "plan_joins",
    "Cardinality",
    "CollectionDef",
    "CollectionRef",
    "FieldKind",
    "OptionSetField",
    "RelationshipField",
    "ReverseRelationField",
    "ScalarField",
    "ScalarType",
    "SelectOption",
    "VirtualRelation",
]
