# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Extraction of constraint directives attached to a single schema element."""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional

from graphql import (
    DirectiveNode,
    GraphQLNamedType,
    GraphQLScalarType,
    GraphQLType,
    get_named_type,
    is_list_type,
    is_named_type,
)

from ..config import DEFAULT_CONFIG, ConstraintsConfig
from ..constraint_map import EMPTY_CONSTRAINTS, ConstraintMap, ConstraintSet
from ..directives import LIST, NUMBER_VALUE, STRING_VALUE, DirectiveCatalog, get_default_catalog
from ..exceptions import SchemaDirectiveError

logger = logging.getLogger(__name__)

BUILTIN_NUMBER_SCALARS: FrozenSet[str] = frozenset({"Int", "Float"})
BUILTIN_STRING_SCALARS: FrozenSet[str] = frozenset({"String", "ID"})


def list_depth(type_: GraphQLType) -> int:
    """Number of list wrappers around *type_* (non-null wrappers are ignored)."""
    depth = 0
    while not is_named_type(type_):
        if is_list_type(type_):
            depth += 1
        type_ = type_.of_type  # type: ignore[attr-defined]
    return depth


def list_chain_length(constraints: Mapping[str, Any]) -> int:
    """Nesting depth declared by an ``@list`` set: one plus its ``innerList`` chain."""
    length = 1
    inner = constraints.get("innerList")
    while inner is not None:
        length += 1
        inner = inner.get("innerList")
    return length


def directive_nodes(element: Any) -> Iterator[DirectiveNode]:
    """Directive applications on *element*'s definition and its extensions."""
    nodes = [getattr(element, "ast_node", None)]
    nodes.extend(getattr(element, "extension_ast_nodes", None) or ())
    for node in nodes:
        if node is not None:
            yield from node.directives or ()


class ConstraintExtractor:
    """Decode and type-check the constraint directives of one element at a time.

    ``declared_type`` is the type of the annotated argument or input field; it
    is ``None`` when the element is a scalar type definition itself.
    """

    def __init__(
        self,
        catalog: Optional[DirectiveCatalog] = None,
        config: ConstraintsConfig = DEFAULT_CONFIG,
    ):
        self._catalog = catalog or get_default_catalog()
        self._compatible_scalars: Dict[str, FrozenSet[str]] = {
            NUMBER_VALUE: BUILTIN_NUMBER_SCALARS | config.number_scalars,
            STRING_VALUE: BUILTIN_STRING_SCALARS | config.string_scalars,
        }

    @property
    def catalog(self) -> DirectiveCatalog:
        return self._catalog

    def extract(
        self,
        element: Any,
        declared_type: Optional[GraphQLType] = None,
        *,
        location: Optional[str] = None,
    ) -> ConstraintMap:
        location = location or getattr(element, "name", None) or "<element>"
        directives: Dict[str, List[ConstraintSet]] = {}

        for node in directive_nodes(element):
            definition = self._catalog.resolve(node.name.value)
            if definition is None:
                continue

            constraints = self._catalog.decode(definition, node, location=location)
            if declared_type is not None:
                self._check_applicable(definition.name, constraints, declared_type, location)
            elif definition.name == LIST:
                raise SchemaDirectiveError(
                    "@list can't be applied to a type definition",
                    directive=LIST,
                    location=location,
                )

            directives.setdefault(definition.key, []).append(constraints)

        if not directives:
            return EMPTY_CONSTRAINTS
        logger.debug("Extracted %s from %s", ", ".join(directives), location)
        return ConstraintMap(directives)

    def accepts(self, directive: str, named_type: GraphQLNamedType) -> bool:
        """Whether a value directive may constrain values of *named_type*.

        Built-in scalars are matched by name; custom scalars must be listed in
        the configuration or carry the same directive on their own definition.
        """
        if not isinstance(named_type, GraphQLScalarType):
            return False
        if named_type.name in self._compatible_scalars.get(directive, frozenset()):
            return True
        return any(node.name.value == directive for node in directive_nodes(named_type))

    def _check_applicable(
        self,
        directive: str,
        constraints: ConstraintSet,
        declared_type: GraphQLType,
        location: str,
    ) -> None:
        if directive == LIST:
            depth = list_depth(declared_type)
            if depth == 0:
                raise SchemaDirectiveError(
                    f"@list can't be applied to non-list type {declared_type}",
                    directive=LIST,
                    location=location,
                )
            expected = list_chain_length(constraints)
            if depth != expected:
                raise SchemaDirectiveError(
                    f"@list directive expects list of depth {expected}, but got {depth} ({declared_type})",
                    directive=LIST,
                    location=location,
                )
            return

        named_type = get_named_type(declared_type)
        if not self.accepts(directive, named_type):
            kind = "numeric" if directive == NUMBER_VALUE else "string"
            raise SchemaDirectiveError(
                f"@{directive} can't be applied to {named_type.name}: "
                f"it is not a {kind}-compatible scalar",
                directive=directive,
                location=location,
            )


__all__ = [
    "BUILTIN_NUMBER_SCALARS",
    "BUILTIN_STRING_SCALARS",
    "ConstraintExtractor",
    "directive_nodes",
    "list_chain_length",
    "list_depth",
]
