# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Helper functions used by the middleware and decorator guard logic."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping

from graphql import GraphQLResolveInfo

from ..compiler import CompiledIndex
from ..exceptions import ValidationError
from ..telemetry import record_validation_metrics
from ..validation import ConstraintValidator

logger = logging.getLogger(__name__)

_VALIDATOR: Final[ConstraintValidator] = ConstraintValidator()


def get_validator() -> ConstraintValidator:
    """Return the process-wide, stateless validator instance."""

    return _VALIDATOR


def field_key_for(info: GraphQLResolveInfo) -> str:
    """Key of the field being resolved, as used by :class:`CompiledIndex`."""

    return f"{info.parent_type.name}.{info.field_name}"


def validate_arguments(
    index: CompiledIndex,
    field_key: str,
    arguments: Mapping[str, Any],
    *,
    telemetry: bool = True,
) -> None:
    """Validate the arguments of one field invocation before it resolves.

    Arguments are checked in declaration order; arguments absent from
    *arguments* are skipped. The first violation is raised unchanged.

    Raises:
        ValidationError: an argument value violates its constraints
            (``KindMismatchError`` when its runtime kind has no directive).
    """
    argument_constraints = index.field(field_key)
    if not argument_constraints:
        return

    try:
        for name, constraints in argument_constraints.items():
            if name in arguments:
                _VALIDATOR.validate(arguments[name], constraints, path=(name,))
    except ValidationError as error:
        logger.info("Rejected arguments of field '%s': %s", field_key, error.message)
        if telemetry:
            record_validation_metrics(field_key, error)
        raise

    if telemetry:
        record_validation_metrics(field_key)


__all__ = ["field_key_for", "get_validator", "validate_arguments"]
