"""Framework configuration factory.

Two entry points:
1. ``DB()``: compile a shorthand schema and wrap it in a framework config
2. ``configure_database()``: map a database descriptor to an adapter selection
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from payload_db.config.models import AdapterConfig, DatabaseConfig
from payload_db.schema.models import CollectionDef, CollectionRef
from payload_db.schema.processor import Schema, as_pairs, compile_schema

logger = logging.getLogger(__name__)

# Database type -> adapter driver name
ADAPTERS: dict[str, str] = {
    "mongodb": "mongoose",
    "postgres": "postgres",
    "sqlite": "sqlite",
    "rest": "rest",
}


class UnsupportedDatabaseError(ValueError):
    """Raised when a database descriptor names an unknown type."""

    def __init__(self, db_type: str) -> None:
        self.db_type = db_type
        super().__init__(f"Unsupported database type: {db_type}")


# ============================================================================
# Database Adapter
# ============================================================================


def configure_database(config: DatabaseConfig | Mapping[str, Any]) -> AdapterConfig:
    """Select the adapter for a database descriptor.

    Args:
        config: ``DatabaseConfig`` or mapping with ``type`` and ``uri``.

    Returns:
        AdapterConfig with the adapter driver name and the URI as ``url``

    Raises:
        UnsupportedDatabaseError: If ``type`` is not mongodb, postgres,
            sqlite or rest.

    Example:
        >>> configure_database({"type": "mongodb", "uri": "mongodb://localhost/app"})
        AdapterConfig(adapter='mongoose', url='mongodb://localhost/app')
    """
    if not isinstance(config, DatabaseConfig):
        # Reject the type before validating the rest of the descriptor.
        if config.get("type") not in ADAPTERS:
            raise UnsupportedDatabaseError(config.get("type"))
        config = DatabaseConfig(**config)

    adapter = ADAPTERS.get(config.type)
    if adapter is None:
        raise UnsupportedDatabaseError(config.type)

    logger.debug(f"Using '{adapter}' adapter for {config.type} database")
    return AdapterConfig(adapter=adapter, url=config.uri)


# ============================================================================
# Framework Config
# ============================================================================


class PayloadDBResult(BaseModel):
    """Result of DB(): framework config plus compiled collections."""

    config: dict[str, Any]
    collections: list[CollectionDef] = Field(default_factory=list)
    collection_refs: dict[str, CollectionRef] = Field(default_factory=dict)

    def get_config(self) -> dict[str, Any]:
        """Return the framework configuration."""
        return self.config


def DB(schema: Schema, db: Any = None, **config: Any) -> PayloadDBResult:
    """Build a framework configuration from a shorthand schema.

    Args:
        schema: Collection slug -> field name -> type string.
        db: Database adapter value, passed through untouched.
        **config: Extra framework options, merged last (they may override
            ``collections`` and ``db``).

    Returns:
        PayloadDBResult with ``config``, ``collections`` and
        ``collection_refs`` (one entry per input collection).

    Example:
        >>> result = DB({"posts": {"title": "text"}}, db="adapter", secret="s3cret")
        >>> result.get_config()["secret"]
        's3cret'
        >>> list(result.collection_refs)
        ['posts']
    """
    pairs = as_pairs(schema)
    collections = compile_schema(pairs)

    payload_config: dict[str, Any] = {
        "collections": [collection.to_payload() for collection in collections],
        "db": db,
        **config,
    }

    collection_refs = {
        name: CollectionRef(collection_name=name) for name, _ in pairs
    }

    return PayloadDBResult(
        config=payload_config,
        collections=collections,
        collection_refs=collection_refs,
    )
