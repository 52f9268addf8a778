# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Read-only constraint maps and the merge rule that combines them.

A :class:`ConstraintMap` is a ``Mapping`` with two kinds of keys:

* directive keys (``"@stringValue"``, ``"@numberValue"``, ``"@list"``) mapping
  to a tuple of Constraint Sets, every one of which must hold;
* property keys (input field names) mapping to the nested
  :class:`ConstraintMap` of that property.

Maps of input object types may reference themselves through their properties.
The compiler creates the property table of such a type before filling it, so
any map that shares the table observes the finished result.
"""

from __future__ import annotations

import reprlib
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

DIRECTIVE_MARKER = "@"

ConstraintSet = Mapping[str, Any]
ConstraintSets = Tuple[ConstraintSet, ...]


_NO_PROPERTIES: Mapping[str, Any] = MappingProxyType({})


def is_directive_key(key: str) -> bool:
    return key.startswith(DIRECTIVE_MARKER)


class ConstraintMap(Mapping[str, Any]):
    __slots__ = ("_directives", "_properties")

    def __init__(
        self,
        directives: Optional[Mapping[str, Iterable[ConstraintSet]]] = None,
        properties: Optional[Mapping[str, "ConstraintMap"]] = None,
    ):
        directives = directives or {}
        for key in directives:
            if not is_directive_key(key):
                raise ValueError(f"Directive keys must start with {DIRECTIVE_MARKER!r}: {key!r}")
        self._directives: Mapping[str, ConstraintSets] = MappingProxyType(
            {key: tuple(sets) for key, sets in directives.items()}
        )
        self._properties: Mapping[str, ConstraintMap] = (
            MappingProxyType(dict(properties)) if properties else _NO_PROPERTIES
        )

    @classmethod
    def _sharing(
        cls,
        directives: Mapping[str, ConstraintSets],
        properties: Mapping[str, "ConstraintMap"],
    ) -> "ConstraintMap":
        """Build a map whose property table is *properties* itself, not a copy."""
        instance = cls(directives)
        if not isinstance(properties, MappingProxyType):
            properties = MappingProxyType(properties)
        instance._properties = properties
        return instance

    @property
    def directives(self) -> Mapping[str, ConstraintSets]:
        return self._directives

    @property
    def properties(self) -> Mapping[str, "ConstraintMap"]:
        return self._properties

    def _is_trivial(self) -> bool:
        # A shared property table may still be empty while its type compiles.
        return not self._directives and self._properties is _NO_PROPERTIES

    def with_directive(self, key: str, sets: Iterable[ConstraintSet]) -> "ConstraintMap":
        """Return a copy where *key* holds *sets*; an empty *sets* drops the key."""
        directives: Dict[str, ConstraintSets] = dict(self._directives)
        sets = tuple(sets)
        if sets:
            directives[key] = sets
        else:
            directives.pop(key, None)
        return ConstraintMap._sharing(directives, self._properties)

    def __getitem__(self, key: str) -> Any:
        if is_directive_key(key):
            return self._directives[key]
        return self._properties[key]

    def __iter__(self) -> Iterator[str]:
        yield from self._directives
        yield from self._properties

    def __len__(self) -> int:
        return len(self._directives) + len(self._properties)

    # Maps of recursive input types reference themselves.
    __hash__ = object.__hash__

    def __eq__(self, other: object) -> bool:
        return self is other

    @reprlib.recursive_repr()
    def __repr__(self) -> str:
        parts = [f"{key}={list(sets)!r}" for key, sets in self._directives.items()]
        parts += [f"{key}={value!r}" for key, value in self._properties.items()]
        return f"ConstraintMap({', '.join(parts)})"


EMPTY_CONSTRAINTS = ConstraintMap()


def reaches_directive(constraints: ConstraintMap) -> bool:
    """Whether *constraints* or any map nested under its properties holds a directive."""
    seen = set()
    pending = [constraints]
    while pending:
        current = pending.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        if current.directives:
            return True
        pending.extend(current.properties.values())
    return False


def merge_constraint_maps(*maps: ConstraintMap) -> ConstraintMap:
    """Combine constraint maps so that every constraint of every input applies.

    Directive keys concatenate their Constraint Set tuples. A property table
    present on only one side is shared by reference, which keeps references to
    types still being compiled intact; tables on both sides merge per key.
    """
    present = [m for m in maps if not m._is_trivial()]
    if not present:
        return EMPTY_CONSTRAINTS
    if len(present) == 1:
        return present[0]

    result = present[0]
    for other in present[1:]:
        result = _merge_pair(result, other)
    return result


def _merge_pair(left: ConstraintMap, right: ConstraintMap) -> ConstraintMap:
    directives: Dict[str, ConstraintSets] = dict(left.directives)
    for key, sets in right.directives.items():
        directives[key] = directives.get(key, ()) + sets

    if right._properties is _NO_PROPERTIES:
        properties = left.properties
    elif left._properties is _NO_PROPERTIES:
        properties = right.properties
    else:
        merged: Dict[str, ConstraintMap] = dict(left.properties)
        for key, nested in right.properties.items():
            merged[key] = merge_constraint_maps(merged[key], nested) if key in merged else nested
        properties = merged
    return ConstraintMap._sharing(directives, properties)


__all__ = [
    "ConstraintMap",
    "ConstraintSet",
    "ConstraintSets",
    "DIRECTIVE_MARKER",
    "EMPTY_CONSTRAINTS",
    "is_directive_key",
    "merge_constraint_maps",
    "reaches_directive",
]
