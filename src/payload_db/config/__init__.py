"""Configuration management: schema files, database descriptors, config models.

Usage:
    >>> from payload_db.config import load_schema_config, DatabaseConfig, SchemaConfig
"""

from payload_db.config.loader import load_schema_config
from payload_db.config.models import AdapterConfig, DatabaseConfig, SchemaConfig

__all__ = ["load_schema_config", "AdapterConfig", "DatabaseConfig", "SchemaConfig"]
