"""Field type grammar: shorthand type strings to field definitions.

Pure logic -- no I/O, no cross-collection knowledge.

Grammar (first match wins):
    "<-posts" / "<-posts.author"   reverse relation (join)
    "users[]"                      many relationship ("tags[]" is an option set)
    "Draft | Published"            option set
    "text", "number", ...          scalar keyword ("tags" is an option set)
    anything else                  single relationship to that collection slug

Usage:
    from payload_db.schema.fields import transform_field

    field_def = transform_field("author", "users")
    field_def.relation_to  # 'users'
"""

import re
from collections.abc import Iterable, Mapping

from payload_db.schema.models import (
    Cardinality,
    FieldDefinition,
    OptionSetField,
    RelationshipField,
    ReverseRelationField,
    ScalarField,
    ScalarType,
    SelectOption,
)

REVERSE_PREFIX = "<-"
MANY_SUFFIX = "[]"
TAGS_KEYWORD = "tags"

SCALAR_KEYWORDS: dict[str, ScalarType] = {
    "text": ScalarType.TEXT,
    "textarea": ScalarType.TEXTAREA,
    "richtext": ScalarType.RICH_TEXT,
    "number": ScalarType.NUMBER,
    "date": ScalarType.DATE,
    "email": ScalarType.EMAIL,
    "checkbox": ScalarType.CHECKBOX,
    "json": ScalarType.JSON,
}

_WHITESPACE_RUN = re.compile(r"\s+")


def _tags_field(name: str) -> OptionSetField:
    # Options are populated outside the compiler.
    return OptionSetField(name=name, cardinality=Cardinality.MANY, options=[])


def option_value(label: str) -> str:
    """Derive an option value: lowercase, whitespace runs become one hyphen.

    Example:
        >>> option_value("In  Review")
        'in-review'
    """
    return _WHITESPACE_RUN.sub("-", label.lower())


def parse_options(type_string: str) -> list[SelectOption]:
    """Split a pipe-separated option string into ordered options.

    ``" | "`` is used as the separator when present anywhere in the
    string, otherwise a bare ``"|"``.
    """
    separator = " | " if " | " in type_string else "|"
    labels = [part.strip() for part in type_string.split(separator)]
    return [SelectOption(label=label, value=option_value(label)) for label in labels]


def transform_field(name: str, type_string: str) -> FieldDefinition:
    """Transform one ``(name, type string)`` pair into a field definition.

    Total over all strings: anything unrecognized is a relationship to the
    collection named by the string. Field names are passed through as-is.

    Args:
        name: Field name (any string, including reserved words).
        type_string: Shorthand type string.

    Returns:
        ``ScalarField``, ``OptionSetField``, ``RelationshipField`` or
        ``ReverseRelationField``.

    Examples:
        >>> transform_field("posts", "<-posts.author").source_field
        'author'
        >>> transform_field("editors", "users[]").cardinality
        <Cardinality.MANY: 'many'>
        >>> [o.value for o in transform_field("status", "Draft | In Review").options]
        ['draft', 'in-review']
    """
    if type_string.startswith(REVERSE_PREFIX):
        target, _, source_field = type_string[len(REVERSE_PREFIX):].partition(".")
        return ReverseRelationField(
            name=name,
            relation_to=target,
            source_field=source_field or None,
        )

    if type_string.endswith(MANY_SUFFIX):
        relation_to = type_string[: -len(MANY_SUFFIX)]
        if relation_to == TAGS_KEYWORD:
            return _tags_field(name)
        return RelationshipField(
            name=name,
            relation_to=relation_to,
            cardinality=Cardinality.MANY,
        )

    if "|" in type_string:
        return OptionSetField(name=name, options=parse_options(type_string))

    if type_string in SCALAR_KEYWORDS:
        return ScalarField(name=name, scalar_type=SCALAR_KEYWORDS[type_string])

    if type_string == TAGS_KEYWORD:
        return _tags_field(name)

    return RelationshipField(name=name, relation_to=type_string)


def process_fields(
    fields: Mapping[str, str] | Iterable[tuple[str, str]],
) -> list[FieldDefinition]:
    """Transform a whole field map in declaration order."""
    pairs = fields.items() if isinstance(fields, Mapping) else fields
    return [transform_field(name, type_string) for name, type_string in pairs]
