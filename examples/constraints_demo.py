# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraints Demo: Invalid Arguments Never Reach Your Resolvers.

This demo shows how constraint directives declared in SDL are compiled once
and enforced on every request. Broken directives are rejected when the schema
is compiled; bad argument values are rejected before a resolver runs.

Run with:
    python examples/constraints_demo.py
"""

from graphql import graphql_sync

from graphql_constraints import (
    ConstraintsConfig,
    SchemaDirectiveError,
    build_constrained_schema,
    constraints_middleware,
)

SDL = """
scalar Percentage @numberValue(min: 0, max: 100)

input ReportFilter {
  tags: [String] @list(maxItems: 3, uniqueItems: true) @stringValue(minLength: 2)
}

type Query {
  search(term: String @stringValue(minLength: 5)): String
  report(discount: Percentage @numberValue(multipleOf: 5), filter: ReportFilter): String
  grid(rows: [[Int]] @list(maxItems: 2, innerList: {minItems: 2})): String
}
"""


class Root:
    """Resolvers that would misbehave if handed an invalid argument."""

    def search(self, _info, term):
        return f"results for {term!r}"

    def report(self, _info, discount=None, filter=None):
        return f"report with {discount}% discount"

    def grid(self, _info, rows):
        return f"{len(rows)} row(s)"


def run(schema, middleware, query):
    print(f"\n  Query:  {query}")
    result = graphql_sync(schema, query, root_value=Root(), middleware=[middleware])
    if result.errors:
        for error in result.errors:
            print(f"  Error:  {error.message}")
    else:
        print(f"  Data:   {result.data}")


def demo_argument_validation():
    """Show valid and invalid argument values against the same schema."""
    print("\n" + "=" * 70)
    print("DEMO 1: Argument Validation")
    print("=" * 70)

    schema = build_constrained_schema(SDL)
    middleware = constraints_middleware(schema, config=ConstraintsConfig(telemetry=False))

    run(schema, middleware, '{ search(term: "graphql") }')
    run(schema, middleware, '{ search(term: "ql") }')
    run(schema, middleware, "{ report(discount: 15) }")
    run(schema, middleware, "{ report(discount: 12) }")
    run(schema, middleware, "{ report(discount: 105) }")
    run(schema, middleware, '{ report(filter: {tags: ["ops", "ops"]}) }')
    run(schema, middleware, "{ grid(rows: [[1, 2], [3, 4]]) }")
    run(schema, middleware, "{ grid(rows: [[1, 2], [3]]) }")


def demo_compile_time_errors():
    """Show directives that can never be satisfied being rejected up front."""
    print("\n" + "=" * 70)
    print("DEMO 2: Compile-Time Checks")
    print("=" * 70)

    broken = {
        "numeric directive on a String": "type Query { f(x: String @numberValue(min: 1)): String }",
        "list chain shorter than the type": "type Query { f(x: [[Int]] @list(maxItems: 1)): String }",
        "negative length": "type Query { f(x: String @stringValue(minLength: -1)): String }",
        "invalid regex": 'type Query { f(x: String @stringValue(regex: "[a-")): String }',
    }

    for label, sdl in broken.items():
        print(f"\n  {label}:")
        try:
            constraints_middleware(build_constrained_schema(sdl), config=ConstraintsConfig(telemetry=False))
            print("    Result: FAIL - schema compiled (should have been rejected)")
        except SchemaDirectiveError as e:
            print(f"    Result: rejected - {e}")


if __name__ == "__main__":
    demo_argument_validation()
    demo_compile_time_errors()
