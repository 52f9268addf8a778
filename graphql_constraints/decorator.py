# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

# graphql_constraints/decorator.py

import functools
import inspect
import logging
from typing import Any, Callable, Optional

from .compiler import CompiledIndex
from .exceptions import ValidationError
from .runtime import field_key_for, validate_arguments
from .telemetry import get_tracer

logger = logging.getLogger(__name__)

# Sentinel object to detect if a parameter was provided by the user
_sentinel = object()


def constraints_guard(
    index: CompiledIndex,
    field_key: Optional[str] = None,
    *,
    on_violation: Any = _sentinel,
    telemetry: bool = True,
):
    """
    Validate a resolver's arguments against compiled constraints before it runs.

    Use this when a single resolver should be guarded and the schema is not
    executed with :class:`~graphql_constraints.runtime.ConstraintsMiddleware`.
    The resolver is wrapped, never modified; it follows the graphql-core
    resolver signature ``(root, info, **args)``.

    :param index: The :class:`CompiledIndex` of the schema the resolver belongs to.
    :param field_key: Optional. ``"Type.field"`` of the resolved field. If not
                      provided it is derived from ``info`` on every call.
    :param on_violation: Optional. If provided, determines the behavior when an
                         argument violates its constraints. A callable is invoked
                         (with the :class:`ValidationError` if it accepts it) and
                         its result returned; any other value is returned
                         directly. If not provided, the error is raised.

    .. code-block:: python

        index = compile_constraints(schema)

        @constraints_guard(index, "Query.search")
        def resolve_search(root, info, term):
            ...

        @constraints_guard(index, on_violation=lambda error: [])
        async def resolve_tags(root, info, names):
            ...

    In both cases the resolver body never executes with an invalid argument.
    """

    def decorator(func: Callable):
        def _check(info, kwargs):
            effective_key = field_key or field_key_for(info)
            with get_tracer("graphql_constraints").start_as_current_span(
                f"graphql_constraints.validate:{effective_key}",
                attributes={"graphql.field": effective_key},
            ) as span:
                try:
                    validate_arguments(index, effective_key, kwargs, telemetry=telemetry)
                except ValidationError as error:
                    span.set_attribute("graphql_constraints.constraint", error.constraint)
                    raise

        @functools.wraps(func)
        def sync_wrapper(root, info, **kwargs):
            """Wrapper for synchronous resolvers."""
            try:
                _check(info, kwargs)
            except ValidationError as error:
                return _handle_violation(error)
            return func(root, info, **kwargs)

        @functools.wraps(func)
        async def async_wrapper(root, info, **kwargs):
            """Wrapper for asynchronous resolvers."""
            try:
                _check(info, kwargs)
            except ValidationError as error:
                result = _handle_violation(error)
                if inspect.isawaitable(result):
                    result = await result
                return result
            return await func(root, info, **kwargs)

        def _handle_violation(error: ValidationError):
            """Executes the user-supplied `on_violation` handler or raises by default."""

            if on_violation is _sentinel:
                raise error

            # Static value supplied (e.g. None or an empty list)
            if not callable(on_violation):
                return on_violation

            # Handlers may take the error or nothing; async handlers are awaited by the caller.
            try:
                inspect.signature(on_violation).bind(error)
            except TypeError:
                return on_violation()
            except ValueError:
                # Builtins without an inspectable signature
                pass
            return on_violation(error)

        if inspect.iscoroutinefunction(func):
            wrapper = async_wrapper
        else:
            wrapper = sync_wrapper

        # Attach the field key for introspection if needed
        wrapper.__constraints_field_key__ = field_key
        return wrapper

    return decorator
