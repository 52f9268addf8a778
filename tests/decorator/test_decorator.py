# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Tests for the @constraints_guard resolver decorator."""

from types import SimpleNamespace

import pytest

from graphql_constraints import constraints_guard
from graphql_constraints.exceptions import ValidationError

SDL = """
type Query {
  search(term: String @stringValue(minLength: 3)): [String]
}
"""

INFO = SimpleNamespace(parent_type=SimpleNamespace(name="Query"), field_name="search")


@pytest.fixture()
def index(compile_sdl):
    return compile_sdl(SDL)


def test_valid_call_runs_the_resolver(index):
    @constraints_guard(index, telemetry=False)
    def resolve_search(root, info, term):
        return [term]

    assert resolve_search(None, INFO, term="graph") == ["graph"]


def test_violation_raises_before_the_resolver_runs(index):
    calls = []

    @constraints_guard(index, telemetry=False)
    def resolve_search(root, info, term):
        calls.append(term)

    with pytest.raises(ValidationError) as exc_info:
        resolve_search(None, INFO, term="ql")

    assert exc_info.value.constraint == "minLength"
    assert calls == []


def test_explicit_field_key_ignores_info(index):
    @constraints_guard(index, "Query.search", telemetry=False)
    def resolve_search(root, info, term):
        return [term]

    with pytest.raises(ValidationError):
        resolve_search(None, None, term="ql")
    assert resolve_search.__constraints_field_key__ == "Query.search"


def test_wrapper_preserves_resolver_metadata(index):
    @constraints_guard(index, telemetry=False)
    def resolve_search(root, info, term):
        """Search things."""

    assert resolve_search.__name__ == "resolve_search"
    assert resolve_search.__doc__ == "Search things."
    assert resolve_search.__constraints_field_key__ is None


def test_on_violation_static_value(index):
    @constraints_guard(index, on_violation=[], telemetry=False)
    def resolve_search(root, info, term):
        return [term]

    assert resolve_search(None, INFO, term="ql") == []


def test_on_violation_none_is_returned(index):
    @constraints_guard(index, on_violation=None, telemetry=False)
    def resolve_search(root, info, term):
        return [term]

    assert resolve_search(None, INFO, term="ql") is None


def test_on_violation_handler_receives_the_error(index):
    @constraints_guard(index, on_violation=lambda error: [error.constraint], telemetry=False)
    def resolve_search(root, info, term):
        return [term]

    assert resolve_search(None, INFO, term="ql") == ["minLength"]


def test_on_violation_handler_without_parameters(index):
    @constraints_guard(index, on_violation=lambda: ["fallback"], telemetry=False)
    def resolve_search(root, info, term):
        return [term]

    assert resolve_search(None, INFO, term="ql") == ["fallback"]


@pytest.mark.anyio
async def test_async_resolver(index):
    @constraints_guard(index, telemetry=False)
    async def resolve_search(root, info, term):
        return [term]

    assert await resolve_search(None, INFO, term="graph") == ["graph"]
    with pytest.raises(ValidationError):
        await resolve_search(None, INFO, term="ql")


@pytest.mark.anyio
async def test_async_on_violation_handler_is_awaited(index):
    async def fallback(error):
        return ["async", error.constraint]

    @constraints_guard(index, on_violation=fallback, telemetry=False)
    async def resolve_search(root, info, term):
        return [term]

    assert await resolve_search(None, INFO, term="ql") == ["async", "minLength"]
