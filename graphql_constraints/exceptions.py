# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for graphql-constraints.

Two families share the :class:`ConstraintsError` base:

* :class:`ConfigurationError` / :class:`SchemaDirectiveError` are raised while a
  schema is being compiled (or configuration loaded). They are fatal: no
  partially compiled schema is ever returned.
* :class:`ValidationError` / :class:`KindMismatchError` are raised while the
  arguments of a single field invocation are checked. They are scoped to that
  invocation and are expected to be reported by the execution engine.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple, Union

PathEntry = Union[str, int]


class ConstraintsError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ConstraintsError):
    """Raised when configuration is missing, malformed or contradictory."""


class SchemaDirectiveError(ConfigurationError):
    """A constraint directive cannot be compiled for the schema element it annotates."""

    def __init__(
        self,
        message: str,
        *,
        directive: Optional[str] = None,
        location: Optional[str] = None,
    ):
        if location:
            message = f"{location}: {message}"
        super().__init__(message)
        self.directive = directive
        self.location = location


class ValidationError(ConstraintsError):
    """A supplied argument value violates a declared constraint."""

    def __init__(
        self,
        message: str,
        *,
        directive: Optional[str],
        constraint: str,
        expected: Any,
        actual: Any,
        path: Sequence[PathEntry] = (),
    ):
        super().__init__(message)
        self.directive = directive
        self.constraint = constraint
        self.expected = expected
        self.actual = actual
        self.path: Tuple[PathEntry, ...] = tuple(path)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(directive={self.directive!r}, "
            f"constraint={self.constraint!r}, expected={self.expected!r}, "
            f"actual={self.actual!r}, path={self.path!r})"
        )


class KindMismatchError(ValidationError):
    """The runtime kind of a value has no matching directive on its argument."""

    def __init__(
        self,
        message: str,
        *,
        actual_kind: str,
        expected_kinds: Sequence[str],
        actual: Any,
        path: Sequence[PathEntry] = (),
    ):
        super().__init__(
            message,
            directive=None,
            constraint="kind",
            expected=tuple(expected_kinds),
            actual=actual,
            path=path,
        )
        self.actual_kind = actual_kind
        self.expected_kinds: Tuple[str, ...] = tuple(expected_kinds)


__all__ = [
    "ConstraintsError",
    "ConfigurationError",
    "SchemaDirectiveError",
    "ValidationError",
    "KindMismatchError",
]
