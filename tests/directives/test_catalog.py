# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Tests for the directive catalog and the constraint SDL vocabulary."""

import pytest
from graphql import build_schema

from graphql_constraints.directives import (
    CONSTRAINTS_SDL,
    DirectiveCatalog,
    append_directives_sdl,
    build_constrained_schema,
    check_constraint_values,
    get_default_catalog,
)
from graphql_constraints.exceptions import SchemaDirectiveError


def test_default_catalog_defines_the_three_constraint_directives():
    catalog = get_default_catalog()

    assert set(catalog.names) == {"numberValue", "stringValue", "list"}
    assert catalog.resolve("stringValue").key == "@stringValue"
    assert catalog.resolve("numberValue").argument_names == (
        "min",
        "max",
        "exclusiveMax",
        "exclusiveMin",
        "oneOf",
        "equals",
        "multipleOf",
    )
    assert catalog.resolve("list").argument_names == ("maxItems", "minItems", "uniqueItems", "innerList")


def test_default_catalog_is_shared():
    assert get_default_catalog() is get_default_catalog()


def test_directive_locations():
    catalog = get_default_catalog()

    number_value = catalog.resolve("numberValue")
    assert number_value.allows("ARGUMENT_DEFINITION")
    assert number_value.allows("SCALAR")
    assert not catalog.resolve("list").allows("SCALAR")


def test_unknown_directive_resolves_to_none():
    catalog = get_default_catalog()

    assert catalog.resolve("deprecated") is None
    assert catalog.resolve("auth") is None
    assert "auth" not in catalog


def test_catalog_rejects_unknown_constraint_arguments():
    """A directive argument without a predicate would silently never be enforced."""
    sdl = "directive @numberValue(maximum: Float) on ARGUMENT_DEFINITION"

    with pytest.raises(SchemaDirectiveError) as exc_info:
        DirectiveCatalog.from_sdl(sdl)

    assert "maximum" in str(exc_info.value)


def test_catalog_rejects_out_of_range_defaults():
    sdl = "directive @stringValue(minLength: Int = -1) on ARGUMENT_DEFINITION"

    with pytest.raises(SchemaDirectiveError, match="minLength"):
        DirectiveCatalog.from_sdl(sdl)


def test_catalog_rejects_unparsable_sdl():
    with pytest.raises(SchemaDirectiveError, match="Invalid constraint directive SDL"):
        DirectiveCatalog.from_sdl("directive @stringValue(")


@pytest.mark.parametrize(
    "directive,values,fragment",
    [
        ("stringValue", {"minLength": -1}, "minLength"),
        ("stringValue", {"maxLength": -5}, "maxLength"),
        ("stringValue", {"minLength": 5, "maxLength": 2}, "can't be greater than maxLength"),
        ("stringValue", {"regex": "[unclosed("}, "Invalid regex pattern"),
        ("numberValue", {"multipleOf": 0.0}, "multipleOf"),
        ("numberValue", {"min": 10.0, "max": 1.0}, "can't be greater than max"),
        ("numberValue", {"exclusiveMin": 3.0, "exclusiveMax": 3.0}, "exclusiveMin"),
        ("list", {"minItems": -1}, "minItems"),
        ("list", {"minItems": 4, "maxItems": 3}, "minItems"),
        ("list", {"innerList": {"maxItems": -2}}, "maxItems"),
    ],
)
def test_out_of_range_values_are_rejected(directive, values, fragment):
    with pytest.raises(SchemaDirectiveError) as exc_info:
        check_constraint_values(directive, values, location="Query.search(term:)")

    message = str(exc_info.value)
    assert fragment in message
    assert message.startswith("Query.search(term:)")
    assert exc_info.value.directive == directive


def test_in_range_values_are_accepted():
    check_constraint_values("stringValue", {"minLength": 0, "maxLength": 0, "regex": r"^\d+$"})
    check_constraint_values("numberValue", {"min": -5.0, "max": -5.0, "multipleOf": 0.5})
    check_constraint_values("list", {"minItems": 1, "innerList": {"minItems": 0, "maxItems": 2}})


def test_append_directives_sdl_makes_directive_applications_buildable():
    user_sdl = """
        type Query {
          search(term: String @stringValue(minLength: 3)): String
        }
    """

    merged = append_directives_sdl(user_sdl)
    schema = build_schema(merged)

    assert "directive @stringValue" in merged
    assert "input _ListConstraints" in merged
    assert schema.get_directive("list") is not None
    assert schema.query_type.fields["search"].args["term"].ast_node.directives[0].name.value == "stringValue"


def test_build_constrained_schema_accepts_input_field_directives():
    schema = build_constrained_schema(
        """
        input Filter {
          tags: [String] @list(maxItems: 2)
        }

        type Query {
          search(filter: Filter): String
        }
        """
    )

    assert "Filter" in schema.type_map


def test_constraints_sdl_is_standalone():
    catalog = DirectiveCatalog.from_sdl(CONSTRAINTS_SDL)

    assert len(catalog) == 3
    assert [definition.name for definition in catalog] == ["numberValue", "stringValue", "list"]


def test_declared_defaults_are_read():
    catalog = DirectiveCatalog.from_sdl("directive @stringValue(minLength: Int = 2, maxLength: Int) on ARGUMENT_DEFINITION")

    arguments = {argument.name: argument.default for argument in catalog.resolve("stringValue").arguments}
    assert arguments == {"minLength": 2, "maxLength": None}


def test_default_catalog_declares_no_defaults():
    for definition in get_default_catalog():
        assert all(argument.default is None for argument in definition.arguments)
