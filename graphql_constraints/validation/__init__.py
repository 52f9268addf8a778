"""Validation package - runtime constraint checking of argument values.

This package checks supplied values against compiled constraint maps. It never
transforms values; it either returns or raises on the first violation.
"""

from .base import ValueKind, classify_value, format_path
from .constraints import CONSTRAINT_CHECKS, ConstraintEvaluator, describe_violation
from .validator import ConstraintValidator

__all__ = [
    "CONSTRAINT_CHECKS",
    "ConstraintEvaluator",
    "ConstraintValidator",
    "ValueKind",
    "classify_value",
    "describe_violation",
    "format_path",
]
