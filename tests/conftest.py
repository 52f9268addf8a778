"""Pytest fixtures shared by the graphql-constraints test-suite."""
from __future__ import annotations

import pytest

from graphql_constraints.compiler import compile_constraints
from graphql_constraints.directives import build_constrained_schema


class EchoRoot:
    """Root value whose every field resolves to ``"ok"`` and records its arguments."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if name.startswith("__"):
            raise AttributeError(name)

        def _resolve(_info, **args):
            self.calls.append((name, args))
            return "ok"

        return _resolve


@pytest.fixture()
def compile_sdl():
    """Return a helper that builds a schema from SDL and compiles its constraints."""

    def _compile(sdl: str, **kwargs):
        schema = build_constrained_schema(sdl)
        return compile_constraints(schema, **kwargs)

    return _compile


@pytest.fixture()
def root_value():
    return EchoRoot()


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Reduce noise – most tests assert behaviour, not log output."""
    caplog.set_level("WARNING")
    yield


@pytest.fixture()
def anyio_backend():  # noqa: D401
    """Force *anyio* tests to use the standard asyncio backend only."""
    return "asyncio"
