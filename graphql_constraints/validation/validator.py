# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Recursive runtime validation of argument values against compiled constraints.

Dispatch is driven by the runtime kind of the value alone (see
:func:`classify_value`), never by the declared GraphQL type:

* ``null`` always passes;
* lists check their ``@list`` sets, then validate every item against the
  element-level constraints (non-list directives plus any ``innerList``);
* records validate each constrained property recursively;
* scalars must have a directive matching their kind and satisfy every
  Constraint Set registered under it.

Validation stops at the first violation.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ..constraint_map import ConstraintMap
from ..exceptions import KindMismatchError, PathEntry
from .base import ValueKind, classify_value, read_property
from .constraints import ConstraintEvaluator, describe_kind_mismatch

LIST_DIRECTIVE = "@list"

_Path = Tuple[PathEntry, ...]


def _kind_name(directive_key: str) -> str:
    name = directive_key[1:]
    if name.endswith("Value"):
        name = name[: -len("Value")]
    return name


class ConstraintValidator:
    """Validate arbitrary value trees against a :class:`ConstraintMap`.

    Instances hold no per-call state and may be shared between threads.
    """

    def __init__(self, evaluator: Optional[ConstraintEvaluator] = None):
        self._evaluator = evaluator or ConstraintEvaluator()
        self._dispatch: Dict[ValueKind, Callable[[Any, ConstraintMap, _Path, ValueKind], None]] = {
            ValueKind.LIST: self._validate_list,
            ValueKind.RECORD: self._validate_record,
            ValueKind.STRING: self._validate_scalar,
            ValueKind.NUMBER: self._validate_scalar,
            ValueKind.BOOLEAN: self._validate_scalar,
        }

    def validate(self, value: Any, constraints: ConstraintMap, path: Sequence[PathEntry] = ()) -> None:
        """Raise :class:`~graphql_constraints.exceptions.ValidationError` if *value* violates *constraints*."""
        if value is None or not constraints:
            return
        kind = classify_value(value)
        handler = self._dispatch.get(kind)
        if handler is not None:
            handler(value, constraints, tuple(path), kind)

    def _validate_list(self, value: Any, constraints: ConstraintMap, path: _Path, kind: ValueKind) -> None:
        items = list(value)
        inner_sets = []
        for constraint_set in constraints.directives.get(LIST_DIRECTIVE, ()):
            self._evaluator.evaluate(LIST_DIRECTIVE, constraint_set, items, path)
            inner = constraint_set.get("innerList")
            if inner is not None:
                inner_sets.append(inner)

        element_constraints = constraints.with_directive(LIST_DIRECTIVE, inner_sets)
        if not element_constraints:
            return
        for index, item in enumerate(items):
            self.validate(item, element_constraints, path + (index,))

    def _validate_record(self, value: Any, constraints: ConstraintMap, path: _Path, kind: ValueKind) -> None:
        for name, nested in constraints.properties.items():
            self.validate(read_property(value, name), nested, path + (name,))

    def _validate_scalar(self, value: Any, constraints: ConstraintMap, path: _Path, kind: ValueKind) -> None:
        directives = constraints.directives
        if not directives:
            return

        expected = kind.directive_key
        if expected not in directives:
            expected_kinds = [_kind_name(key) for key in directives]
            raise KindMismatchError(
                describe_kind_mismatch(kind.value, expected_kinds, path),
                actual_kind=kind.value,
                expected_kinds=expected_kinds,
                actual=value,
                path=path,
            )

        for constraint_set in directives[expected]:
            self._evaluator.evaluate(expected, constraint_set, value, path)


__all__ = ["ConstraintValidator", "LIST_DIRECTIVE"]
