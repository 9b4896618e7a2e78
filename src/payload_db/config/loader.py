"""Schema file loading from TOML."""

import tomllib
from pathlib import Path

from payload_db.config.models import DatabaseConfig, SchemaConfig

DEFAULT_SCHEMA_FILE = "payload-db.toml"


def load_schema_config(config_path: Path | None = None) -> SchemaConfig:
    """Load a schema definition from a TOML file.

    Collection and field order follow the order of the file.

    Args:
        config_path: Path to the schema file (default: ./payload-db.toml)

    Returns:
        SchemaConfig with collections and optional database descriptor

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file has no [collections] table or a field
            type is not a string
        tomllib.TOMLDecodeError: If the file is not valid TOML

    Example:
        >>> config = load_schema_config(Path("payload-db.toml"))
        >>> list(config.collections)
        ['posts', 'authors']
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_SCHEMA_FILE

    if not config_path.exists():
        raise FileNotFoundError(
            f"Schema file not found: {config_path}\n"
            f"Create {DEFAULT_SCHEMA_FILE} with a [collections] table."
        )

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    if "collections" not in data:
        raise ValueError(f"No [collections] table in {config_path.name}")
    if not isinstance(data["collections"], dict):
        raise ValueError(f"[collections] in {config_path.name} must be a table")

    # Parse collections
    collections: dict[str, dict[str, str]] = {}
    for slug, fields in data["collections"].items():
        if not isinstance(fields, dict):
            raise ValueError(
                f"Collection '{slug}' must be a table of field = \"type\" pairs"
            )
        for name, type_string in fields.items():
            if not isinstance(type_string, str):
                raise ValueError(
                    f"Field '{slug}.{name}' must be a type string, "
                    f"got {type(type_string).__name__}"
                )
        collections[slug] = dict(fields)

    # Parse database settings
    database_data = data.get("database")
    if database_data is not None and not isinstance(database_data, dict):
        raise ValueError(f"[database] in {config_path.name} must be a table")
    database = DatabaseConfig(**database_data) if database_data else None

    return SchemaConfig(collections=collections, database=database)
