"""Runtime package - integration points for the request-execution engine."""

from .guard import field_key_for, get_validator, validate_arguments
from .middleware import ConstraintsMiddleware, constraints_middleware

__all__ = [
    "ConstraintsMiddleware",
    "constraints_middleware",
    "field_key_for",
    "get_validator",
    "validate_arguments",
]
