# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Value classification shared by the runtime validator and the error reporter."""

from __future__ import annotations

import numbers
from enum import Enum
from typing import Any, Collection, Mapping, Sequence

from ..exceptions import PathEntry


class ValueKind(str, Enum):
    """The closed set of runtime kinds a GraphQL input value can take."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    LIST = "list"
    RECORD = "record"

    @property
    def directive_key(self) -> str:
        """Directive key that constrains scalars of this kind (``@numberValue``...)."""
        return f"@{self.value}Value"


def classify_value(value: Any) -> ValueKind:
    """Return the :class:`ValueKind` of *value*.

    ``bool`` is tested before numbers because it subclasses ``int``. Objects
    that are neither scalars nor collections (e.g. input types coerced through
    an ``out_type``) are treated as records and read by attribute.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, numbers.Number):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.RECORD
    if isinstance(value, Collection) and not isinstance(value, (bytes, bytearray)):
        return ValueKind.LIST
    return ValueKind.RECORD


def read_property(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


def format_path(path: Sequence[PathEntry]) -> str:
    """Render ``("filter", "tags", 2)`` as ``filter.tags[2]``."""
    rendered = ""
    for entry in path:
        if isinstance(entry, int):
            rendered += f"[{entry}]"
        elif rendered:
            rendered += f".{entry}"
        else:
            rendered = str(entry)
    return rendered


__all__ = ["ValueKind", "classify_value", "format_path", "read_property"]
