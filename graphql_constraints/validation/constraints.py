# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint predicates and violation messages.

``CONSTRAINT_CHECKS`` is the single table mapping a constraint name to the
predicate that decides whether a value satisfies it. Its iteration order is
the order in which constraints of one Constraint Set are evaluated, which
makes the first reported violation deterministic.
"""

from __future__ import annotations

import re
import reprlib
from decimal import Decimal
from typing import Any, Callable, Dict, Mapping, Sequence

from ..exceptions import PathEntry, ValidationError
from .base import ValueKind, classify_value, format_path

ConstraintCheck = Callable[[Any, Any], bool]


def _same_item(left: Any, right: Any) -> bool:
    # Items of different kinds never match, so 1 and True stay distinct.
    kind = classify_value(left)
    if kind is not classify_value(right):
        return False
    if kind is ValueKind.LIST:
        left, right = list(left), list(right)
        return len(left) == len(right) and all(_same_item(a, b) for a, b in zip(left, right))
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(_same_item(left[key], right[key]) for key in left)
    return left == right


def _is_unique(items: Sequence[Any]) -> bool:
    # Pairwise comparison so unhashable items (input objects, nested lists) work.
    for index, item in enumerate(items):
        for other in items[index + 1 :]:
            if _same_item(item, other):
                return False
    return True


def _is_multiple(value: Any, divisor: Any) -> bool:
    if isinstance(value, int) and isinstance(divisor, int):
        return value % divisor == 0
    if isinstance(value, Decimal) and not isinstance(divisor, Decimal):
        divisor = Decimal(str(divisor))
    return (value / divisor) % 1 == 0


CONSTRAINT_CHECKS: Dict[str, ConstraintCheck] = {
    "minLength": lambda value, expected: len(value) >= expected,
    "maxLength": lambda value, expected: len(value) <= expected,
    "startsWith": lambda value, expected: value.startswith(expected),
    "endsWith": lambda value, expected: value.endswith(expected),
    "includes": lambda value, expected: expected in value,
    "min": lambda value, expected: value >= expected,
    "max": lambda value, expected: value <= expected,
    "exclusiveMax": lambda value, expected: value < expected,
    "exclusiveMin": lambda value, expected: value > expected,
    "oneOf": lambda value, expected: value in expected,
    "equals": lambda value, expected: value == expected,
    "multipleOf": _is_multiple,
    "regex": lambda value, expected: re.search(expected, value) is not None,
    "minItems": lambda value, expected: len(value) >= expected,
    "maxItems": lambda value, expected: len(value) <= expected,
    "uniqueItems": lambda value, expected: not expected or _is_unique(value),
}

_MESSAGES: Dict[str, str] = {
    "minLength": "must be at least {expected} characters long",
    "maxLength": "must be at most {expected} characters long",
    "startsWith": "must start with {expected}",
    "endsWith": "must end with {expected}",
    "includes": "must include {expected}",
    "min": "must be greater than or equal to {expected}",
    "max": "must be less than or equal to {expected}",
    "exclusiveMax": "must be less than {expected}",
    "exclusiveMin": "must be greater than {expected}",
    "oneOf": "must be one of {expected}",
    "equals": "must be equal to {expected}",
    "multipleOf": "must be a multiple of {expected}",
    "regex": "must match pattern {expected}",
    "minItems": "must contain at least {expected} items",
    "maxItems": "must contain at most {expected} items",
    "uniqueItems": "must not contain duplicate items",
}

_short_repr = reprlib.Repr()
_short_repr.maxstring = 60
_short_repr.maxlist = 8
_short_repr.maxother = 60


def _format_expected(expected: Any) -> str:
    if isinstance(expected, float) and expected.is_integer():
        return str(int(expected))
    if isinstance(expected, str):
        return repr(expected)
    if isinstance(expected, (list, tuple)):
        return "[" + ", ".join(_format_expected(item) for item in expected) + "]"
    return str(expected)


def _subject(path: Sequence[PathEntry]) -> str:
    return f"Argument '{format_path(path)}'" if path else "Value"


def describe_violation(
    directive: str,
    constraint: str,
    expected: Any,
    actual: Any,
    path: Sequence[PathEntry] = (),
) -> str:
    """Produce the diagnostic message for a failed constraint."""

    template = _MESSAGES.get(constraint, "violates " + constraint + " {expected}")
    phrase = template.format(expected=_format_expected(expected))
    return (
        f"{_subject(path)} {phrase} "
        f"(got {_short_repr.repr(actual)}; {directive} {constraint}: {_format_expected(expected)})"
    )


def describe_kind_mismatch(actual_kind: str, expected_kinds: Sequence[str], path: Sequence[PathEntry] = ()) -> str:
    return f"{_subject(path)} got {actual_kind}, expected {' or '.join(expected_kinds)}"


class ConstraintEvaluator:
    """Evaluate one Constraint Set against a value, raising on the first failure."""

    def __init__(self, checks: Mapping[str, ConstraintCheck] = CONSTRAINT_CHECKS):
        self._checks = checks

    def evaluate(
        self,
        directive: str,
        constraints: Mapping[str, Any],
        value: Any,
        path: Sequence[PathEntry] = (),
    ) -> None:
        for name, check in self._checks.items():
            expected = constraints.get(name)
            if expected is None:
                continue
            if not check(value, expected):
                raise ValidationError(
                    describe_violation(directive, name, expected, value, path),
                    directive=directive,
                    constraint=name,
                    expected=expected,
                    actual=value,
                    path=path,
                )


__all__ = [
    "CONSTRAINT_CHECKS",
    "ConstraintCheck",
    "ConstraintEvaluator",
    "describe_kind_mismatch",
    "describe_violation",
]
