# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""graphql-core middleware enforcing argument constraints.

The middleware composes with the resolvers of a schema instead of patching
them: graphql-core calls :meth:`ConstraintsMiddleware.resolve` around every
field resolution, the arguments are validated, and only then is the next
resolver in the chain invoked. A violation propagates as the field's error.

Example:
    ```python
    schema = build_constrained_schema(sdl)
    middleware = constraints_middleware(schema)
    result = graphql_sync(schema, query, root_value, middleware=[middleware])
    ```
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from graphql import GraphQLResolveInfo, GraphQLSchema

from ..compiler import CompiledIndex, compile_constraints
from ..config import ConstraintsConfig, load_config
from ..directives import DirectiveCatalog
from .guard import field_key_for, validate_arguments


class ConstraintsMiddleware:
    """Validate field arguments against a :class:`CompiledIndex` before resolving."""

    def __init__(self, index: CompiledIndex, *, telemetry: bool = True):
        self.index = index
        self._telemetry = telemetry

    def resolve(self, next_: Callable[..., Any], root: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
        if args:
            validate_arguments(self.index, field_key_for(info), args, telemetry=self._telemetry)
        return next_(root, info, **args)


def constraints_middleware(
    schema: GraphQLSchema,
    *,
    catalog: Optional[DirectiveCatalog] = None,
    config: Optional[ConstraintsConfig] = None,
) -> ConstraintsMiddleware:
    """Compile *schema* and return middleware enforcing its constraints.

    When *config* is omitted it is loaded with :func:`load_config`.
    """
    config = config if config is not None else load_config()
    index = compile_constraints(schema, catalog=catalog, config=config)
    return ConstraintsMiddleware(index, telemetry=config.telemetry)


__all__ = ["ConstraintsMiddleware", "constraints_middleware"]
