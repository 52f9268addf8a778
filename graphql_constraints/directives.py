# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""The directive catalog: the closed set of constraint directives.

The vocabulary is declared once as SDL (:data:`CONSTRAINTS_SDL`). Schema
authors merge it into their own SDL (:func:`append_directives_sdl`) so that
directive applications parse; the compiler resolves and decodes applications
through a :class:`DirectiveCatalog`.

Applied argument values are range-checked when decoded, so a schema with
``@stringValue(minLength: -1)`` is rejected while it is being compiled rather
than when the first request arrives.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Final, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple, Union

from graphql import (
    DirectiveNode,
    GraphQLArgument,
    GraphQLDirective,
    GraphQLError,
    GraphQLSchema,
    Source,
    build_ast_schema,
    build_schema,
    concat_ast,
    is_specified_directive,
    parse,
    print_ast,
)
from graphql.execution.values import get_argument_values
from graphql.pyutils import Undefined
from graphql.utilities import value_from_ast

from .constraint_map import DIRECTIVE_MARKER, ConstraintSet
from .exceptions import SchemaDirectiveError
from .validation.constraints import CONSTRAINT_CHECKS

logger = logging.getLogger(__name__)

CONSTRAINTS_SDL = '''
directive @numberValue(
  min: Float
  max: Float
  exclusiveMax: Float
  exclusiveMin: Float
  oneOf: [Float]
  equals: Float
  multipleOf: Float
) on FIELD | ARGUMENT_DEFINITION | INPUT_FIELD_DEFINITION | SCALAR

directive @stringValue(
  minLength: Int
  maxLength: Int
  startsWith: String
  endsWith: String
  includes: String
  oneOf: [String]
  equals: String
  regex: String
) on FIELD | ARGUMENT_DEFINITION | INPUT_FIELD_DEFINITION | SCALAR

input _ListConstraints {
  maxItems: Int
  minItems: Int
  uniqueItems: Boolean
  innerList: _ListConstraints
}

directive @list(
  maxItems: Int
  minItems: Int
  uniqueItems: Boolean
  innerList: _ListConstraints
) on FIELD | ARGUMENT_DEFINITION | INPUT_FIELD_DEFINITION
'''

NUMBER_VALUE = "numberValue"
STRING_VALUE = "stringValue"
LIST = "list"

# Arguments that structure a Constraint Set rather than constrain a value.
_STRUCTURAL_ARGUMENTS: FrozenSet[str] = frozenset({"innerList"})

_NON_NEGATIVE = ("minLength", "maxLength", "minItems", "maxItems")
_INCLUSIVE_BOUNDS = (("minLength", "maxLength"), ("min", "max"), ("minItems", "maxItems"))

_PLACEHOLDER_QUERY = "type Query { _placeholder: String }"


def _argument_default(argument: GraphQLArgument) -> Any:
    """Declared default of a directive argument, or ``None``.

    graphql-core 3.3 keeps SDL defaults as literals on ``argument.default``;
    earlier releases coerce them into ``argument.default_value``.
    """
    if argument.default_value is not Undefined:
        return argument.default_value
    default = getattr(argument, "default", None)
    if default is None:
        return None
    if default.literal is not None:
        value = value_from_ast(default.literal, argument.type)
    else:
        value = default.value
    return None if value is Undefined else value


@dataclass(frozen=True)
class DirectiveArgument:
    name: str
    type_name: str
    default: Any = None


@dataclass(frozen=True)
class DirectiveDefinition:
    """An immutable description of one constraint directive."""

    name: str
    arguments: Tuple[DirectiveArgument, ...]
    locations: FrozenSet[str]
    graphql_directive: GraphQLDirective = field(repr=False, compare=False)

    @property
    def key(self) -> str:
        """Key under which decoded applications are stored (``@stringValue``)."""
        return DIRECTIVE_MARKER + self.name

    @property
    def argument_names(self) -> Tuple[str, ...]:
        return tuple(argument.name for argument in self.arguments)

    def allows(self, location: str) -> bool:
        return location in self.locations

    @classmethod
    def from_graphql(cls, directive: GraphQLDirective) -> "DirectiveDefinition":
        arguments = tuple(
            DirectiveArgument(
                name=name,
                type_name=str(argument.type),
                default=_argument_default(argument),
            )
            for name, argument in directive.args.items()
        )
        return cls(
            name=directive.name,
            arguments=arguments,
            locations=frozenset(location.name for location in directive.locations),
            graphql_directive=directive,
        )


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def check_constraint_values(directive: str, values: Mapping[str, Any], *, location: Optional[str] = None) -> None:
    """Range-check the argument values of one directive application.

    Raises :class:`SchemaDirectiveError` for negative lengths or item counts,
    a non-positive ``multipleOf``, inverted bounds, or an invalid ``regex``.
    Nested ``innerList`` sets are checked recursively.
    """

    def fail(message: str) -> None:
        raise SchemaDirectiveError(f"@{directive}: {message}", directive=directive, location=location)

    for name in _NON_NEGATIVE:
        value = values.get(name)
        if value is not None and value < 0:
            fail(f"{name} can't be less than 0 (got {value})")

    multiple_of = values.get("multipleOf")
    if multiple_of is not None and multiple_of <= 0:
        fail(f"multipleOf must be greater than 0 (got {multiple_of})")

    for lower_name, upper_name in _INCLUSIVE_BOUNDS:
        lower, upper = values.get(lower_name), values.get(upper_name)
        if lower is not None and upper is not None and lower > upper:
            fail(f"{lower_name} ({lower}) can't be greater than {upper_name} ({upper})")

    exclusive_min, exclusive_max = values.get("exclusiveMin"), values.get("exclusiveMax")
    if exclusive_min is not None and exclusive_max is not None and exclusive_min >= exclusive_max:
        fail(f"exclusiveMin ({exclusive_min}) must be less than exclusiveMax ({exclusive_max})")

    pattern = values.get("regex")
    if pattern is not None:
        try:
            re.compile(pattern)
        except re.error as exc:
            fail(f"Invalid regex pattern {pattern!r}: {exc}")

    inner = values.get("innerList")
    if inner is not None:
        check_constraint_values(directive, inner, location=location)


class DirectiveCatalog:
    """Read-only lookup of the recognized constraint directives.

    Construction validates every definition: each argument must be a
    constraint known to the predicate table (or a structural argument such as
    ``innerList``) and declared defaults must pass the range checks.
    """

    __slots__ = ("_definitions",)

    def __init__(self, definitions: Iterable[DirectiveDefinition]):
        table: Dict[str, DirectiveDefinition] = {}
        for definition in definitions:
            if definition.name in table:
                raise SchemaDirectiveError(
                    f"Directive @{definition.name} is defined more than once",
                    directive=definition.name,
                )
            unknown = [
                name
                for name in definition.argument_names
                if name not in CONSTRAINT_CHECKS and name not in _STRUCTURAL_ARGUMENTS
            ]
            if unknown:
                raise SchemaDirectiveError(
                    f"Directive @{definition.name} declares unknown constraint(s): {sorted(unknown)}",
                    directive=definition.name,
                )
            defaults = {arg.name: arg.default for arg in definition.arguments if arg.default is not None}
            check_constraint_values(definition.name, defaults, location="directive definition")
            table[definition.name] = definition
        self._definitions: Mapping[str, DirectiveDefinition] = MappingProxyType(table)

    @classmethod
    def from_sdl(cls, sdl: Union[str, Source] = CONSTRAINTS_SDL) -> "DirectiveCatalog":
        """Build a catalog from SDL declaring constraint directives."""
        try:
            document = concat_ast([parse(sdl), parse(_PLACEHOLDER_QUERY)])
            schema = build_ast_schema(document)
        except GraphQLError as exc:
            raise SchemaDirectiveError(f"Invalid constraint directive SDL: {exc.message}") from exc

        definitions = [
            DirectiveDefinition.from_graphql(directive)
            for directive in schema.directives
            if not is_specified_directive(directive)
        ]
        logger.debug("Loaded constraint directives: %s", ", ".join(d.name for d in definitions))
        return cls(definitions)

    def resolve(self, name: str) -> Optional[DirectiveDefinition]:
        """Return the definition named *name*, or ``None`` when it is not a constraint directive."""
        return self._definitions.get(name)

    def decode(
        self,
        definition: DirectiveDefinition,
        node: DirectiveNode,
        *,
        location: Optional[str] = None,
    ) -> ConstraintSet:
        """Decode a directive application into a frozen, range-checked Constraint Set."""
        try:
            values = get_argument_values(definition.graphql_directive, node)
        except GraphQLError as exc:
            raise SchemaDirectiveError(
                f"@{definition.name}: {exc.message}",
                directive=definition.name,
                location=location,
            ) from exc

        check_constraint_values(definition.name, values, location=location)
        return _freeze(values)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __iter__(self) -> Iterator[DirectiveDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)


_DEFAULT_CATALOG: Final[DirectiveCatalog] = DirectiveCatalog.from_sdl()


def get_default_catalog() -> DirectiveCatalog:
    """Return the process-wide catalog built from :data:`CONSTRAINTS_SDL`."""

    return _DEFAULT_CATALOG


def append_directives_sdl(sdl: Union[str, Source]) -> str:
    """Merge the constraint vocabulary into user SDL text."""

    return print_ast(concat_ast([parse(sdl), parse(CONSTRAINTS_SDL)]))


def build_constrained_schema(sdl: Union[str, Source], **kwargs: Any) -> GraphQLSchema:
    """Build a schema from user SDL that may apply constraint directives."""

    return build_schema(append_directives_sdl(sdl), **kwargs)


__all__ = [
    "CONSTRAINTS_SDL",
    "DirectiveArgument",
    "DirectiveCatalog",
    "DirectiveDefinition",
    "LIST",
    "NUMBER_VALUE",
    "STRING_VALUE",
    "append_directives_sdl",
    "build_constrained_schema",
    "check_constraint_values",
    "get_default_catalog",
]
