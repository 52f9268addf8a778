"""Telemetry package - OpenTelemetry metrics and tracing helpers."""

from .metrics import (
    argument_validation_total,
    constraint_violation_total,
    record_compile_metrics,
    record_validation_metrics,
    schema_compile_latency_ms,
    schema_compile_total,
)
from .runtime import get_tracer, meter

__all__ = [
    "argument_validation_total",
    "constraint_violation_total",
    "get_tracer",
    "meter",
    "record_compile_metrics",
    "record_validation_metrics",
    "schema_compile_latency_ms",
    "schema_compile_total",
]
