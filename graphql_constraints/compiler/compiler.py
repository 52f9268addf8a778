# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Compilation of a schema's constraint directives into a read-only index.

The compiler walks the type graph once:

* every named type gets an *intrinsic* constraint map (scalars: their own
  directives; input objects: one merged map per field), memoised in an arena
  keyed by type name;
* every argument of every object-type field gets the merge of its own
  directives and the intrinsic map of its named type.

Input objects may reference each other cyclically. An input object's entry is
registered in the arena before its fields are compiled, so a re-encountered
type resolves to the entry in progress instead of recursing again.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Set

from graphql import (
    GraphQLInputObjectType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    get_named_type,
    is_introspection_type,
)

from ..config import DEFAULT_CONFIG, ConstraintsConfig
from ..constraint_map import EMPTY_CONSTRAINTS, ConstraintMap, merge_constraint_maps, reaches_directive
from ..directives import DirectiveCatalog
from ..exceptions import SchemaDirectiveError
from ..telemetry import record_compile_metrics
from .extractor import ConstraintExtractor

logger = logging.getLogger(__name__)

ArgumentConstraints = Mapping[str, ConstraintMap]

_NO_ARGUMENTS: ArgumentConstraints = MappingProxyType({})


@dataclass(frozen=True)
class CompiledIndex:
    """Compiled constraints of one schema.

    ``types`` maps a named type to its intrinsic constraint map; ``arguments``
    maps a field key (``"Query.search"``) to the constraint map of each of its
    arguments, in declaration order.
    """

    types: Mapping[str, ConstraintMap]
    arguments: Mapping[str, ArgumentConstraints]

    def field(self, field_key: str) -> ArgumentConstraints:
        return self.arguments.get(field_key, _NO_ARGUMENTS)

    def argument(self, field_key: str, name: str) -> ConstraintMap:
        return self.field(field_key).get(name, EMPTY_CONSTRAINTS)

    @property
    def constrained_fields(self) -> Set[str]:
        """Field keys with at least one constrained argument."""
        return {
            key
            for key, args in self.arguments.items()
            if any(reaches_directive(constraints) for constraints in args.values())
        }


class ConstraintCompiler:
    """Single-use compiler for one schema."""

    def __init__(
        self,
        schema: GraphQLSchema,
        catalog: Optional[DirectiveCatalog] = None,
        config: ConstraintsConfig = DEFAULT_CONFIG,
    ):
        self._schema = schema
        self._extractor = ConstraintExtractor(catalog, config)
        self._arena: Dict[str, ConstraintMap] = {}
        self._in_progress: Set[str] = set()

    def type_constraints(self, named_type: GraphQLNamedType) -> ConstraintMap:
        """Return the intrinsic constraint map of *named_type*, compiling it once."""
        name = named_type.name
        cached = self._arena.get(name)
        if cached is not None:
            if name in self._in_progress:
                logger.debug("Cyclic reference to input type %s", name)
            return cached

        if is_introspection_type(named_type):
            constraints = EMPTY_CONSTRAINTS
        elif isinstance(named_type, GraphQLScalarType):
            constraints = self._extractor.extract(named_type, location=name)
        elif isinstance(named_type, GraphQLInputObjectType):
            return self._compile_input_object(named_type)
        else:
            constraints = EMPTY_CONSTRAINTS

        self._arena[name] = constraints
        return constraints

    def _compile_input_object(self, input_type: GraphQLInputObjectType) -> ConstraintMap:
        name = input_type.name
        fields: Dict[str, ConstraintMap] = {}
        entry = ConstraintMap._sharing({}, fields)
        self._arena[name] = entry
        self._in_progress.add(name)
        try:
            for field_name, field in input_type.fields.items():
                own = self._extractor.extract(
                    field,
                    field.type,
                    location=f"{name}.{field_name}",
                )
                fields[field_name] = merge_constraint_maps(
                    own,
                    self.type_constraints(get_named_type(field.type)),
                )
        finally:
            self._in_progress.discard(name)
        return entry

    def compile(self) -> CompiledIndex:
        for named_type in self._schema.type_map.values():
            self.type_constraints(named_type)

        arguments: Dict[str, ArgumentConstraints] = {}
        for type_name, named_type in self._schema.type_map.items():
            if is_introspection_type(named_type) or not isinstance(named_type, GraphQLObjectType):
                continue
            for field_name, field in named_type.fields.items():
                if not field.args:
                    continue
                field_key = f"{type_name}.{field_name}"
                arguments[field_key] = MappingProxyType(
                    {
                        arg_name: merge_constraint_maps(
                            self._extractor.extract(
                                arg,
                                arg.type,
                                location=f"{field_key}({arg_name}:)",
                            ),
                            self.type_constraints(get_named_type(arg.type)),
                        )
                        for arg_name, arg in field.args.items()
                    }
                )

        return CompiledIndex(
            types=MappingProxyType(dict(self._arena)),
            arguments=MappingProxyType(arguments),
        )


def compile_constraints(
    schema: GraphQLSchema,
    *,
    catalog: Optional[DirectiveCatalog] = None,
    config: ConstraintsConfig = DEFAULT_CONFIG,
) -> CompiledIndex:
    """Compile every constraint directive of *schema* into a :class:`CompiledIndex`.

    Raises:
        SchemaDirectiveError: a directive is applied to an incompatible type,
            an ``@list`` chain does not match the list depth of its element,
            or a directive argument is out of range.
    """
    started_at = time.perf_counter()
    try:
        index = ConstraintCompiler(schema, catalog, config).compile()
    except SchemaDirectiveError as exc:
        logger.error("Rejected schema constraints: %s", exc.message)
        if config.telemetry:
            record_compile_metrics(started_at, "error")
        raise

    if config.telemetry:
        record_compile_metrics(started_at, "success")
    logger.info(
        "Compiled constraints for %d field(s), %d with constrained arguments",
        len(index.arguments),
        len(index.constrained_fields),
    )
    return index


__all__ = ["ArgumentConstraints", "CompiledIndex", "ConstraintCompiler", "compile_constraints"]
