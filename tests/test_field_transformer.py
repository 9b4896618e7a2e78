"""Tests for the field type grammar.

Verifies that transform_field() maps every lexical form of a type string
to the right field definition, with reverse relations taking precedence
over many-relations, option sets and keywords.
"""

import pytest

from payload_db.schema.fields import (
    SCALAR_KEYWORDS,
    option_value,
    parse_options,
    process_fields,
    transform_field,
)
from payload_db.schema.models import (
    Cardinality,
    FieldKind,
    OptionSetField,
    RelationshipField,
    ReverseRelationField,
    ScalarField,
    ScalarType,
)


class TestReverseRelation:
    """Type strings starting with '<-'."""

    def test_target_only(self) -> None:
        """'<-posts' has no source field."""
        field_def = transform_field("posts", "<-posts")

        assert isinstance(field_def, ReverseRelationField)
        assert field_def.kind == FieldKind.REVERSE_RELATION
        assert field_def.relation_to == "posts"
        assert field_def.source_field is None
        assert field_def.cardinality is Cardinality.MANY

    def test_target_and_source_field(self) -> None:
        """'<-posts.author' carries the source field hint."""
        field_def = transform_field("written", "<-posts.author")

        assert field_def.relation_to == "posts"
        assert field_def.source_field == "author"

    def test_splits_on_first_dot(self) -> None:
        """Only the first '.' separates collection from source field."""
        field_def = transform_field("x", "<-a.b.c")

        assert field_def.relation_to == "a"
        assert field_def.source_field == "b.c"

    def test_is_read_only(self) -> None:
        """Reverse relations are flagged read-only."""
        assert transform_field("x", "<-posts").read_only is True

    def test_write_hook_discards_value(self) -> None:
        """before_change() drops whatever value is written."""
        field_def = transform_field("x", "<-posts")

        assert field_def.before_change({"id": "abc"}) is None
        assert field_def.before_change(None) is None

    def test_takes_precedence_over_many_suffix(self) -> None:
        """'<-posts[]' is a reverse relation, not a many-relation."""
        field_def = transform_field("x", "<-posts[]")

        assert isinstance(field_def, ReverseRelationField)
        assert field_def.relation_to == "posts[]"

    def test_takes_precedence_over_pipe(self) -> None:
        """'<-a|b' is a reverse relation, not an option set."""
        assert isinstance(transform_field("x", "<-a|b"), ReverseRelationField)


class TestManyRelation:
    """Type strings ending with '[]'."""

    def test_many_relationship(self) -> None:
        """'users[]' is a many relationship to users."""
        field_def = transform_field("editors", "users[]")

        assert isinstance(field_def, RelationshipField)
        assert field_def.relation_to == "users"
        assert field_def.cardinality is Cardinality.MANY

    def test_tags_many_is_option_set(self) -> None:
        """'tags[]' is an option set with no options, not a relationship."""
        field_def = transform_field("tags", "tags[]")

        assert isinstance(field_def, OptionSetField)
        assert field_def.cardinality is Cardinality.MANY
        assert field_def.options == []

    def test_self_reference(self) -> None:
        """A collection can reference itself with many cardinality."""
        field_def = transform_field("children", "kitchen[]")

        assert field_def.relation_to == "kitchen"
        assert field_def.cardinality is Cardinality.MANY


class TestOptionSet:
    """Pipe-separated option strings."""

    @pytest.mark.parametrize("type_string", ["A | B | C", "A|B|C", "A |B| C"])
    def test_three_options_in_order(self, type_string: str) -> None:
        """Spaced and unspaced separators yield the same three options."""
        field_def = transform_field("grade", type_string)

        assert isinstance(field_def, OptionSetField)
        assert [o.label for o in field_def.options] == ["A", "B", "C"]
        assert [o.value for o in field_def.options] == ["a", "b", "c"]

    def test_values_are_kebab_case(self) -> None:
        """Values are lowercased with whitespace runs hyphenated."""
        field_def = transform_field("status", "In Progress | Needs   Review | Done")

        assert [o.label for o in field_def.options] == [
            "In Progress",
            "Needs   Review",
            "Done",
        ]
        assert [o.value for o in field_def.options] == [
            "in-progress",
            "needs-review",
            "done",
        ]

    def test_single_cardinality(self) -> None:
        """Pipe option sets hold a single value."""
        assert transform_field("s", "A | B").cardinality is Cardinality.SINGLE

    def test_no_deduplication(self) -> None:
        """Repeated options are kept."""
        field_def = transform_field("s", "A | A")
        assert len(field_def.options) == 2

    def test_spaced_separator_wins_for_whole_string(self) -> None:
        """When ' | ' occurs, a bare '|' elsewhere is not a separator."""
        options = parse_options("A|B | C")

        assert [o.label for o in options] == ["A|B", "C"]

    def test_option_value_helper(self) -> None:
        """option_value() collapses tabs and newlines too."""
        assert option_value("Big\t\nDeal") == "big-deal"


class TestScalarKeywords:
    """Reserved scalar keywords."""

    @pytest.mark.parametrize(
        "keyword,expected",
        [
            ("text", ScalarType.TEXT),
            ("textarea", ScalarType.TEXTAREA),
            ("richtext", ScalarType.RICH_TEXT),
            ("number", ScalarType.NUMBER),
            ("date", ScalarType.DATE),
            ("email", ScalarType.EMAIL),
            ("checkbox", ScalarType.CHECKBOX),
            ("json", ScalarType.JSON),
        ],
    )
    def test_keyword(self, keyword: str, expected: ScalarType) -> None:
        """Each keyword maps to its scalar type."""
        field_def = transform_field("value", keyword)

        assert isinstance(field_def, ScalarField)
        assert field_def.scalar_type is expected

    def test_eight_keywords(self) -> None:
        """Exactly eight scalar keywords are reserved."""
        assert len(SCALAR_KEYWORDS) == 8

    def test_richtext_maps_to_rich_text_kind(self) -> None:
        """'richtext' renders as the framework's 'richText' type."""
        assert transform_field("body", "richtext").to_payload()["type"] == "richText"

    def test_tags_keyword_is_option_set(self) -> None:
        """'tags' is a many option set with no options."""
        field_def = transform_field("labels", "tags")

        assert isinstance(field_def, OptionSetField)
        assert field_def.cardinality is Cardinality.MANY
        assert field_def.options == []

    def test_keywords_are_case_sensitive(self) -> None:
        """'Text' is not a keyword, so it is a relationship."""
        field_def = transform_field("x", "Text")

        assert isinstance(field_def, RelationshipField)
        assert field_def.relation_to == "Text"


class TestFallbackRelationship:
    """Any other string is a single relationship."""

    @pytest.mark.parametrize("type_string", ["authors", "blog-posts", "a.b", "textual"])
    def test_single_relationship(self, type_string: str) -> None:
        """Unrecognized strings become relationTo verbatim."""
        field_def = transform_field("ref", type_string)

        assert isinstance(field_def, RelationshipField)
        assert field_def.relation_to == type_string
        assert field_def.cardinality is Cardinality.SINGLE


class TestFieldNames:
    """Field names are never validated or normalized."""

    @pytest.mark.parametrize(
        "name",
        ["type", "constructor", "__proto__", "class", "field with spaces", "$special", ""],
    )
    def test_name_passes_through(self, name: str) -> None:
        """Reserved identifiers compile like any other name."""
        assert transform_field(name, "text").name == name


class TestProcessFields:
    """process_fields() over whole field maps."""

    def test_preserves_declaration_order(self) -> None:
        """Output order matches the mapping's insertion order."""
        fields = process_fields({"z": "text", "a": "number", "m": "users"})

        assert [f.name for f in fields] == ["z", "a", "m"]

    def test_accepts_pairs(self) -> None:
        """An iterable of (name, type) pairs is accepted."""
        fields = process_fields([("b", "text"), ("a", "<-x")])

        assert [f.name for f in fields] == ["b", "a"]
        assert fields[1].kind == FieldKind.REVERSE_RELATION

    def test_empty(self) -> None:
        """An empty field map yields no fields."""
        assert process_fields({}) == []
