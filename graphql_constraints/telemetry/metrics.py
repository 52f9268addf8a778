# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for graphql-constraints."""

from __future__ import annotations

import logging
import time
from typing import Optional

from ..exceptions import ValidationError
from .runtime import meter

logger = logging.getLogger(__name__)

schema_compile_total = meter.create_counter(
    name="graphql_constraints.compile.total",
    description="Counts schema constraint compilations, partitioned by outcome.",
    unit="1",
)

schema_compile_latency_ms = meter.create_histogram(
    name="graphql_constraints.compile.latency.ms",
    description="Time taken to compile the constraint index of a schema.",
    unit="ms",
)

argument_validation_total = meter.create_counter(
    name="graphql_constraints.validation.total",
    description="Counts field invocations whose arguments were validated, by outcome.",
    unit="1",
)

constraint_violation_total = meter.create_counter(
    name="graphql_constraints.violation.total",
    description="Counts rejected field invocations partitioned by directive and constraint.",
    unit="1",
)


def record_compile_metrics(started_at: float, status: str) -> None:
    """Record latency and outcome of one schema compilation.

    Args:
        started_at: Timestamp from time.perf_counter() when compilation started
        status: "success" or "error"
    """
    duration_ms = (time.perf_counter() - started_at) * 1000.0
    try:
        schema_compile_latency_ms.record(duration_ms, {"status": status})
        schema_compile_total.add(1, {"status": status})
    except Exception:
        # Telemetry must never interfere with schema construction
        logger.debug("Failed to record compile metrics", exc_info=True)


def record_validation_metrics(field_key: str, error: Optional[ValidationError] = None) -> None:
    """Record the outcome of validating the arguments of one field invocation."""
    try:
        if error is None:
            argument_validation_total.add(1, {"field": field_key, "status": "passed"})
            return
        argument_validation_total.add(1, {"field": field_key, "status": "rejected"})
        constraint_violation_total.add(
            1,
            {"directive": error.directive or "kind", "constraint": error.constraint},
        )
    except Exception:
        logger.debug("Failed to record validation metrics", exc_info=True)


__all__ = [
    "argument_validation_total",
    "constraint_violation_total",
    "record_compile_metrics",
    "record_validation_metrics",
    "schema_compile_latency_ms",
    "schema_compile_total",
]
