"""CLI module for compiling and checking shorthand schema files.

Usage:
    payload-db compile
    payload-db compile schema.toml --json
    payload-db check schema.toml
    payload-db adapter schema.toml

Commands:
    compile  - Compile the schema and show collections (or JSON payload)
    check    - Report reverse relations and whether each one resolves
    adapter  - Show the database adapter selected by the [database] table
"""

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from payload_db.config.loader import load_schema_config
from payload_db.config.models import SchemaConfig
from payload_db.factory import configure_database
from payload_db.schema.models import CollectionDef, FieldKind
from payload_db.schema.processor import compile_schema, expand_collections, plan_joins

console = Console()


# ============================================================================
# Helpers
# ============================================================================


def _load(args: argparse.Namespace) -> SchemaConfig:
    return load_schema_config(Path(args.schema_file) if args.schema_file else None)


def _describe_field(field_def) -> str:
    """One-line type summary for the compile table (plain text, not markup)."""
    if field_def.kind == FieldKind.SCALAR:
        return field_def.scalar_type.value
    if field_def.kind == FieldKind.OPTION_SET:
        labels = ", ".join(option.label for option in field_def.options)
        return f"select[{field_def.cardinality.value}] ({labels})"
    return f"-> {field_def.relation_to} [{field_def.cardinality.value}]"


def _collection_table(collection: CollectionDef) -> Table:
    table = Table(title=escape(collection.slug), show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Type")
    table.add_column("Joins", style="dim")

    for field_def in collection.fields:
        joins = ", ".join(rel.name for rel in field_def.virtual_fields)
        table.add_row(
            escape(field_def.name), escape(_describe_field(field_def)), escape(joins)
        )
    return table


# ============================================================================
# Commands
# ============================================================================


def cmd_compile(args: argparse.Namespace) -> int:
    """Compile the schema file and print collections.

    Args:
        args: Parsed CLI arguments.

    Returns:
        0 on success, 1 if the schema file cannot be loaded.
    """
    try:
        config = _load(args)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    collections = compile_schema(config.collections)

    if args.json:
        payload = [collection.to_payload() for collection in collections]
        # Plain print: rich would wrap and highlight the JSON
        print(json.dumps(payload, indent=2))
        return 0

    for collection in collections:
        console.print(_collection_table(collection))

    console.print(f"\n[green]Compiled {len(collections)} collection(s)[/green]")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Report every reverse relation and its counterpart.

    Args:
        args: Parsed CLI arguments.

    Returns:
        0 if every reverse relation resolves, 1 otherwise.
    """
    try:
        config = _load(args)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    collections = expand_collections(config.collections)
    plan = plan_joins(collections)

    if not plan:
        console.print("[dim]No reverse relations declared.[/dim]")
        return 0

    table = Table(title="Reverse Relations", show_header=True, header_style="bold")
    table.add_column("Field")
    table.add_column("Target")
    table.add_column("Status")

    for resolution in plan:
        target = resolution.target_collection
        if resolution.source_field:
            target = f"{target}.{resolution.source_field}"
        # Names come from the schema file and may contain markup brackets
        counterpart = escape(f"{resolution.target_collection}.{resolution.target_field}")
        status = (
            f"[green]-> {counterpart}[/green]"
            if resolution.resolved
            else "[red]unresolved (dropped)[/red]"
        )
        table.add_row(
            escape(f"{resolution.collection}.{resolution.field}"), escape(target), status
        )

    console.print(table)

    unresolved = [r for r in plan if not r.resolved]
    if unresolved:
        console.print(f"\n[yellow]{len(unresolved)} unresolved reverse relation(s)[/yellow]")
        return 1

    console.print("\n[green]All reverse relations resolved[/green]")
    return 0


def cmd_adapter(args: argparse.Namespace) -> int:
    """Show the adapter selected for the schema file's database.

    Args:
        args: Parsed CLI arguments.

    Returns:
        0 on success, 1 if no database is configured or the type is unsupported.
    """
    try:
        config = _load(args)
        if config.database is None:
            console.print("[yellow]No \\[database] table in schema file.[/yellow]")
            return 1
        adapter = configure_database(config.database)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    table = Table(title="Database Adapter", show_header=False)
    table.add_column("Key", style="dim")
    table.add_column("Value")
    table.add_row("Type", escape(config.database.type))
    table.add_row("Adapter", f"[bold cyan]{escape(adapter.adapter)}[/bold cyan]")
    table.add_row("URL", escape(adapter.url))
    console.print(table)
    return 0


# ============================================================================
# Main entry point
# ============================================================================


def main() -> int:
    """Main CLI entry point.

    Parses command line arguments and dispatches to appropriate handler.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        prog="payload-db",
        description="Compile shorthand schemas into framework collection configs",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # compile command
    p_compile = subparsers.add_parser(
        "compile",
        help="Compile the schema and show collections",
    )
    p_compile.add_argument(
        "schema_file",
        nargs="?",
        help="Path to schema TOML file (default: ./payload-db.toml)",
    )
    p_compile.add_argument(
        "--json",
        action="store_true",
        help="Print the framework collection payload as JSON",
    )
    p_compile.set_defaults(func=cmd_compile)

    # check command
    p_check = subparsers.add_parser(
        "check",
        help="Report reverse relations and whether they resolve",
    )
    p_check.add_argument("schema_file", nargs="?", help="Path to schema TOML file")
    p_check.set_defaults(func=cmd_check)

    # adapter command
    p_adapter = subparsers.add_parser(
        "adapter",
        help="Show the database adapter for the schema file",
    )
    p_adapter.add_argument("schema_file", nargs="?", help="Path to schema TOML file")
    p_adapter.set_defaults(func=cmd_adapter)

    args = parser.parse_args()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
