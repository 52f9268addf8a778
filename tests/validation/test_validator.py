# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Tests for recursive validation of values against constraint maps."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from graphql_constraints.constraint_map import EMPTY_CONSTRAINTS, ConstraintMap
from graphql_constraints.exceptions import KindMismatchError, ValidationError
from graphql_constraints.validation import ConstraintValidator


@pytest.fixture()
def validator():
    return ConstraintValidator()


def _string(**constraints):
    return ConstraintMap({"@stringValue": [constraints]})


def _number(**constraints):
    return ConstraintMap({"@numberValue": [constraints]})


@pytest.mark.parametrize(
    "constraints,value",
    [
        (_string(minLength=5), "acde1"),
        (_string(maxLength=3), "abc"),
        (_string(startsWith="gr"), "graph"),
        (_string(endsWith="ql"), "graphql"),
        (_string(includes="ph"), "graph"),
        (_string(oneOf=("red", "green")), "green"),
        (_string(equals="exact"), "exact"),
        (_string(regex=r"^\d{3}$"), "123"),
        (_number(min=1), 1),
        (_number(max=1.5), 1.5),
        (_number(exclusiveMin=0), 0.1),
        (_number(exclusiveMax=10), 9),
        (_number(multipleOf=3.0), 9),
        (_number(multipleOf=0.5), 2.5),
        (_number(oneOf=(1.0, 2.0)), 2),
        (_number(equals=4.0), 4),
    ],
)
def test_satisfied_constraints_pass(validator, constraints, value):
    validator.validate(value, constraints, ("arg",))


@pytest.mark.parametrize(
    "constraints,value,constraint",
    [
        (_string(minLength=5), "acde", "minLength"),
        (_string(maxLength=3), "abcd", "maxLength"),
        (_string(startsWith="gr"), "ql", "startsWith"),
        (_string(endsWith="ql"), "graph", "endsWith"),
        (_string(includes="xyz"), "graph", "includes"),
        (_string(oneOf=("red", "green")), "blue", "oneOf"),
        (_string(equals="exact"), "Exact", "equals"),
        (_string(regex=r"^\d{3}$"), "12a", "regex"),
        (_number(min=1), 0, "min"),
        (_number(max=1.5), 1.6, "max"),
        (_number(exclusiveMin=0), 0, "exclusiveMin"),
        (_number(exclusiveMax=10), 10, "exclusiveMax"),
        (_number(multipleOf=3.0), 10, "multipleOf"),
        (_number(oneOf=(1.0, 2.0)), 3, "oneOf"),
        (_number(equals=4.0), 4.5, "equals"),
    ],
)
def test_violated_constraints_raise(validator, constraints, value, constraint):
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(value, constraints, ("arg",))

    error = exc_info.value
    assert error.constraint == constraint
    assert error.actual == value
    assert error.path == ("arg",)
    assert constraint in str(error)


def test_minimum_length_boundary(validator):
    constraints = _string(minLength=5)

    with pytest.raises(ValidationError) as exc_info:
        validator.validate("acde", constraints, ("term",))
    validator.validate("acde1", constraints, ("term",))

    assert exc_info.value.directive == "@stringValue"
    assert exc_info.value.expected == 5


def test_null_always_passes(validator):
    validator.validate(None, _string(minLength=5))
    validator.validate(None, ConstraintMap({"@list": [{"minItems": 1}]}))
    validator.validate({"name": None}, ConstraintMap(properties={"name": _string(minLength=1)}))


def test_empty_constraints_accept_anything(validator):
    validator.validate("anything", EMPTY_CONSTRAINTS)
    validator.validate([1, "two", None], EMPTY_CONSTRAINTS)
    validator.validate(True, EMPTY_CONSTRAINTS)


def test_first_violation_follows_predicate_order(validator):
    constraints = _string(startsWith="x", minLength=5)

    with pytest.raises(ValidationError) as exc_info:
        validator.validate("ab", constraints)

    assert exc_info.value.constraint == "minLength"


def test_every_constraint_set_must_hold(validator):
    constraints = ConstraintMap({"@numberValue": [{"min": 0}, {"max": 10}]})

    validator.validate(5, constraints)
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(11, constraints)
    assert exc_info.value.constraint == "max"


def test_string_given_where_number_expected_is_a_kind_mismatch(validator):
    with pytest.raises(KindMismatchError) as exc_info:
        validator.validate("abc", _number(min=0), ("value",))

    error = exc_info.value
    assert error.actual_kind == "string"
    assert error.expected_kinds == ("number",)
    assert error.constraint == "kind"
    assert isinstance(error, ValidationError)
    assert "got string, expected number" in str(error)


def test_boolean_is_not_a_number(validator):
    with pytest.raises(KindMismatchError) as exc_info:
        validator.validate(True, _number(min=0))

    assert exc_info.value.actual_kind == "boolean"


def test_kind_mismatch_lists_every_present_directive(validator):
    constraints = ConstraintMap({"@numberValue": [{}], "@stringValue": [{}]})

    with pytest.raises(KindMismatchError) as exc_info:
        validator.validate(False, constraints)

    assert exc_info.value.expected_kinds == ("number", "string")


def test_bare_directive_only_checks_the_kind(validator):
    constraints = ConstraintMap({"@numberValue": [{}]})

    validator.validate(42, constraints)
    with pytest.raises(KindMismatchError):
        validator.validate("42", constraints)


@pytest.mark.parametrize(
    "items,constraint",
    [
        ([1], "minItems"),
        ([1, 2, 3, 4], "maxItems"),
    ],
)
def test_list_item_counts(validator, items, constraint):
    constraints = ConstraintMap({"@list": [{"minItems": 2, "maxItems": 3}]})

    with pytest.raises(ValidationError) as exc_info:
        validator.validate(items, constraints, ("numbers",))

    assert exc_info.value.constraint == constraint
    assert exc_info.value.directive == "@list"


def test_list_within_bounds_passes(validator):
    constraints = ConstraintMap({"@list": [{"minItems": 2, "maxItems": 3}]})

    validator.validate([1, 2], constraints)
    validator.validate([1, 2, 3], constraints)


def test_unique_items(validator):
    constraints = ConstraintMap({"@list": [{"uniqueItems": True}]})

    validator.validate([1, 2, 3], constraints)
    validator.validate([{"a": 1}, {"a": 2}], constraints)
    with pytest.raises(ValidationError) as exc_info:
        validator.validate([1, 2, 1], constraints)
    assert exc_info.value.constraint == "uniqueItems"
    with pytest.raises(ValidationError):
        validator.validate([{"a": 1}, {"a": 1}], constraints)


def test_unique_items_false_allows_duplicates(validator):
    validator.validate([1, 1], ConstraintMap({"@list": [{"uniqueItems": False}]}))


def test_list_elements_use_scalar_constraints(validator):
    constraints = ConstraintMap({"@list": [{"maxItems": 3}], "@stringValue": [{"minLength": 2}]})

    with pytest.raises(ValidationError) as exc_info:
        validator.validate(["ok", "x"], constraints, ("names",))

    assert exc_info.value.path == ("names", 1)
    assert "names[1]" in str(exc_info.value)


def test_inner_list_constrains_nested_lists(validator):
    constraints = ConstraintMap(
        {
            "@list": [{"maxItems": 2, "innerList": {"minItems": 2, "uniqueItems": True}}],
            "@numberValue": [{"min": 0}],
        }
    )

    validator.validate([[1, 2], [3, 4]], constraints, ("matrix",))
    with pytest.raises(ValidationError) as exc_info:
        validator.validate([[1, 2], [3]], constraints, ("matrix",))
    assert exc_info.value.path == ("matrix", 1)
    assert exc_info.value.constraint == "minItems"
    with pytest.raises(ValidationError) as exc_info:
        validator.validate([[1, 2], [3, 3]], constraints, ("matrix",))
    assert exc_info.value.constraint == "uniqueItems"
    with pytest.raises(ValidationError) as exc_info:
        validator.validate([[1, 2], [3, -4]], constraints, ("matrix",))
    assert exc_info.value.path == ("matrix", 1, 1)


def test_nested_records_report_their_path(validator):
    constraints = ConstraintMap(
        properties={
            "filter": ConstraintMap(
                properties={"tags": ConstraintMap({"@stringValue": [{"maxLength": 3}]})},
            )
        }
    )

    with pytest.raises(ValidationError) as exc_info:
        validator.validate({"filter": {"tags": ["abc", "abcd"]}}, constraints, ("input",))

    assert exc_info.value.path == ("input", "filter", "tags", 1)
    assert str(exc_info.value).startswith("Argument 'input.filter.tags[1]'")


def test_records_may_be_objects(validator):
    constraints = ConstraintMap(properties={"name": _string(minLength=3)})

    validator.validate(SimpleNamespace(name="Ada"), constraints)
    with pytest.raises(ValidationError):
        validator.validate(SimpleNamespace(name="Al"), constraints)


def test_unconstrained_properties_are_ignored(validator):
    constraints = ConstraintMap(properties={"name": _string(minLength=3)})

    validator.validate({"name": "Ada", "extra": "x"}, constraints)


def test_decimal_values_support_multiple_of(validator):
    constraints = _number(multipleOf=0.5)

    validator.validate(Decimal("1.5"), constraints, ("amount",))
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(Decimal("1.25"), constraints, ("amount",))
    assert exc_info.value.constraint == "multipleOf"


def test_decimal_values_compare_with_float_bounds(validator):
    constraints = _number(min=0.0, max=10.0)

    validator.validate(Decimal("9.99"), constraints)
    with pytest.raises(ValidationError):
        validator.validate(Decimal("10.01"), constraints)


@pytest.mark.parametrize(
    "items",
    [
        [1, True],
        [0, False],
        [[1], [True]],
        [{"flag": 1}, {"flag": True}],
    ],
)
def test_unique_items_distinguishes_kinds(validator, items):
    validator.validate(items, ConstraintMap({"@list": [{"uniqueItems": True}]}))


def test_unique_items_treats_equal_numbers_as_duplicates(validator):
    with pytest.raises(ValidationError):
        validator.validate([1, 1.0], ConstraintMap({"@list": [{"uniqueItems": True}]}))
