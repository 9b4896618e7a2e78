"""Schema processor: expand collections, then resolve reverse relations.

Pass 1 transforms every field of every collection. Pass 2 resolves each
reverse relation ("join") against the already-expanded target collection:
a read-only scan produces a list of ``JoinResolution`` actions, and a single
apply step rebuilds the affected collections. Inputs are never mutated.

Usage:
    from payload_db.schema.processor import compile_schema

    collections = compile_schema({
        "posts": {"title": "text", "author": "authors"},
        "authors": {"name": "text", "posts": "<-posts.author"},
    })
    [c.slug for c in collections]  # ['posts', 'authors']
"""

import logging
from collections.abc import Iterable, Mapping

from pydantic import BaseModel

from payload_db.schema.fields import process_fields
from payload_db.schema.models import (
    CollectionDef,
    FieldDefinition,
    FieldKind,
    ReverseRelationField,
    VirtualRelation,
)

logger = logging.getLogger(__name__)

FieldMap = Mapping[str, str] | Iterable[tuple[str, str]]
Schema = Mapping[str, FieldMap] | Iterable[tuple[str, FieldMap]]


class JoinResolution(BaseModel):
    """Outcome of resolving one reverse relation.

    ``target_field`` is None when the target collection or a matching
    counterpart field does not exist, or when the named counterpart is
    itself a reverse relation.
    """

    collection: str
    field: str
    target_collection: str
    source_field: str | None = None
    target_field: str | None = None
    relation: VirtualRelation

    @property
    def resolved(self) -> bool:
        return self.target_field is not None


# ============================================================================
# Pass 1: Expansion
# ============================================================================


def as_pairs(mapping: Mapping | Iterable) -> list[tuple]:
    """Normalize a mapping or iterable of pairs to an ordered list of pairs."""
    if isinstance(mapping, Mapping):
        return list(mapping.items())
    return list(mapping)


def expand_collections(schema: Schema) -> list[CollectionDef]:
    """Build one ``CollectionDef`` per input collection, in input order."""
    return [
        CollectionDef(slug=slug, fields=process_fields(as_pairs(fields)))
        for slug, fields in as_pairs(schema)
    ]


# ============================================================================
# Pass 2: Join Resolution
# ============================================================================


def _find_counterpart(
    join: ReverseRelationField,
    declaring_slug: str,
    target: CollectionDef,
) -> FieldDefinition | None:
    if join.source_field:
        # Named counterpart is taken regardless of its kind, except another
        # join: those are dropped, so nothing would carry the annotation.
        named = target.get_field(join.source_field)
        if named is not None and named.kind == FieldKind.REVERSE_RELATION:
            return None
        return named

    for candidate in target.fields:
        if (
            candidate.kind == FieldKind.RELATIONSHIP
            and candidate.relation_to == declaring_slug
        ):
            return candidate
    return None


def plan_joins(collections: list[CollectionDef]) -> list[JoinResolution]:
    """Resolve every reverse relation without modifying anything.

    Args:
        collections: Output of ``expand_collections()``.

    Returns:
        One ``JoinResolution`` per reverse-relation field, in collection
        order then field order.
    """
    index: dict[str, CollectionDef] = {}
    for collection in collections:
        # First collection wins when a slug repeats in pair input.
        index.setdefault(collection.slug, collection)

    plan: list[JoinResolution] = []
    for collection in collections:
        for field_def in collection.fields:
            if field_def.kind != FieldKind.REVERSE_RELATION:
                continue

            target = index.get(field_def.relation_to)
            counterpart = (
                _find_counterpart(field_def, collection.slug, target)
                if target is not None
                else None
            )

            resolution = JoinResolution(
                collection=collection.slug,
                field=field_def.name,
                target_collection=field_def.relation_to,
                source_field=field_def.source_field,
                target_field=counterpart.name if counterpart is not None else None,
                relation=VirtualRelation(
                    name=field_def.name,
                    relation_to=field_def.relation_to,
                ),
            )
            if resolution.resolved:
                logger.debug(
                    f"Resolved join {collection.slug}.{field_def.name} "
                    f"-> {resolution.target_collection}.{resolution.target_field}"
                )
            else:
                logger.warning(
                    f"Unresolved join {collection.slug}.{field_def.name} "
                    f"(target '{field_def.relation_to}'); dropping field"
                )
            plan.append(resolution)
    return plan


def apply_joins(
    collections: list[CollectionDef],
    plan: list[JoinResolution],
) -> list[CollectionDef]:
    """Apply resolution actions and drop every reverse-relation field.

    Counterparts are marked for rich editing and receive the virtual
    relations of every join that resolved onto them, in plan order. The
    counterpart is the first field of the target collection with the
    resolved name.

    Returns:
        New ``CollectionDef`` values; the inputs are left untouched.
    """
    attachments: dict[tuple[str, str], list[VirtualRelation]] = {}
    for resolution in plan:
        if resolution.resolved:
            key = (resolution.target_collection, resolution.target_field)
            attachments.setdefault(key, []).append(resolution.relation)

    result: list[CollectionDef] = []
    claimed: set[str] = set()
    for collection in collections:
        # Only the indexed (first) collection for a slug receives attachments.
        owns_slug = collection.slug not in claimed
        claimed.add(collection.slug)

        fields: list[FieldDefinition] = []
        annotated: set[str] = set()
        for field_def in collection.fields:
            if field_def.kind == FieldKind.REVERSE_RELATION:
                continue
            relations = attachments.get((collection.slug, field_def.name))
            if owns_slug and relations and field_def.name not in annotated:
                annotated.add(field_def.name)
                field_def = field_def.model_copy(
                    update={
                        "rich_editing": True,
                        "virtual_fields": [*field_def.virtual_fields, *relations],
                    }
                )
            fields.append(field_def)
        result.append(collection.model_copy(update={"fields": fields}))
    return result


def compile_schema(schema: Schema) -> list[CollectionDef]:
    """Compile a shorthand schema into fully resolved collection definitions.

    Never raises for unresolvable relations, empty collections or empty
    field maps. No output collection contains a reverse-relation field.

    Args:
        schema: Mapping (or ordered pairs) of collection slug to field map,
            where each field map is a mapping (or ordered pairs) of field
            name to type string.

    Returns:
        List of ``CollectionDef`` in input order.

    Examples:
        >>> posts = compile_schema({"posts": {"parent": "posts", "children": "<-posts.parent"}})[0]
        >>> [f.name for f in posts.fields]
        ['parent']
        >>> posts.fields[0].virtual_fields[0].name
        'children'

        >>> compile_schema({"orphan": {"x": "<-missing"}})[0].fields
        []
    """
    collections = expand_collections(schema)
    plan = plan_joins(collections)
    return apply_joins(collections, plan)
