"""graphql-constraints - declarative value constraints for GraphQL arguments.

Schema authors annotate scalars, arguments and input fields with
``@numberValue``, ``@stringValue`` and ``@list``. :func:`compile_constraints`
turns those annotations into a read-only :class:`CompiledIndex` once per
schema; :func:`validate_arguments` (or :class:`ConstraintsMiddleware`) checks
the arguments of every field invocation against it before the field resolves.
"""

from .compiler import CompiledIndex, ConstraintMap, compile_constraints, merge_constraint_maps
from .config import ConstraintsConfig, load_config
from .decorator import constraints_guard
from .directives import (
    CONSTRAINTS_SDL,
    DirectiveCatalog,
    append_directives_sdl,
    build_constrained_schema,
    get_default_catalog,
)
from .exceptions import (
    ConfigurationError,
    ConstraintsError,
    KindMismatchError,
    SchemaDirectiveError,
    ValidationError,
)
from .runtime import ConstraintsMiddleware, constraints_middleware, validate_arguments

__version__ = "0.4.0"

__all__ = [
    "CONSTRAINTS_SDL",
    "CompiledIndex",
    "ConfigurationError",
    "ConstraintMap",
    "ConstraintsConfig",
    "ConstraintsError",
    "ConstraintsMiddleware",
    "DirectiveCatalog",
    "KindMismatchError",
    "SchemaDirectiveError",
    "ValidationError",
    "append_directives_sdl",
    "build_constrained_schema",
    "compile_constraints",
    "constraints_guard",
    "constraints_middleware",
    "get_default_catalog",
    "load_config",
    "merge_constraint_maps",
    "validate_arguments",
]
