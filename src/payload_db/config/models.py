"""Pydantic models for database and schema-file configuration."""

from typing import Any

from pydantic import BaseModel, Field


# ============================================================================
# Database Models
# ============================================================================


class DatabaseConfig(BaseModel):
    """Database descriptor from the ``[database]`` table.

    ``type`` is a plain string; unsupported values are rejected by
    ``configure_database()``.
    """

    type: str
    uri: str


class AdapterConfig(BaseModel):
    """Adapter selection returned by configure_database()."""

    adapter: str
    url: str

    def to_payload(self) -> dict[str, Any]:
        return {"adapter": self.adapter, "url": self.url}


# ============================================================================
# Schema File Model
# ============================================================================


class SchemaConfig(BaseModel):
    """Complete schema file: collections plus optional database."""

    collections: dict[str, dict[str, str]] = Field(default_factory=dict)
    database: DatabaseConfig | None = None
