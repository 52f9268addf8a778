# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Configuration for constraint compilation.

Resolution order (first match wins):

1. an explicit path passed to :func:`load_config`;
2. the file named by ``GRAPHQL_CONSTRAINTS_CONFIG``;
3. the ``GRAPHQL_CONSTRAINTS_*`` environment variables.

Configuration files are YAML (JSON is accepted since it is valid YAML)::

    scalars:
      number: [Decimal, BigInt]
      string: [Email, URL]
    telemetry: true
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, FrozenSet, Iterable, Mapping, Optional, Union

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "GRAPHQL_CONSTRAINTS_CONFIG"
NUMBER_SCALARS_ENV = "GRAPHQL_CONSTRAINTS_NUMBER_SCALARS"
STRING_SCALARS_ENV = "GRAPHQL_CONSTRAINTS_STRING_SCALARS"
TELEMETRY_ENV = "GRAPHQL_CONSTRAINTS_TELEMETRY"

_FALSE_VALUES = ("", "0", "false", "no", "off")
_TOP_LEVEL_KEYS = frozenset({"scalars", "telemetry"})
_SCALAR_KEYS = frozenset({"number", "string"})


@dataclass(frozen=True)
class ConstraintsConfig:
    """Settings consumed by the compiler and the runtime guard.

    ``number_scalars`` / ``string_scalars`` name custom scalars that accept
    ``@numberValue`` / ``@stringValue`` on arguments and input fields, in
    addition to the built-in ``Int``/``Float`` and ``String``/``ID``.
    """

    number_scalars: FrozenSet[str] = frozenset()
    string_scalars: FrozenSet[str] = frozenset()
    telemetry: bool = True

    def with_scalars(
        self,
        *,
        number: Iterable[str] = (),
        string: Iterable[str] = (),
    ) -> "ConstraintsConfig":
        return replace(
            self,
            number_scalars=self.number_scalars | frozenset(number),
            string_scalars=self.string_scalars | frozenset(string),
        )


DEFAULT_CONFIG = ConstraintsConfig()


def _split_names(raw: Optional[str]) -> FrozenSet[str]:
    if not raw:
        return frozenset()
    return frozenset(name.strip() for name in raw.split(",") if name.strip())


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> ConstraintsConfig:
    """Build a configuration from ``GRAPHQL_CONSTRAINTS_*`` environment variables."""

    env = os.environ if environ is None else environ
    return ConstraintsConfig(
        number_scalars=_split_names(env.get(NUMBER_SCALARS_ENV)),
        string_scalars=_split_names(env.get(STRING_SCALARS_ENV)),
        telemetry=env.get(TELEMETRY_ENV, "1").strip().lower() not in _FALSE_VALUES,
    )


def _as_name_set(value: Any, field_name: str) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigurationError(f"'{field_name}' must be a list of scalar names")
    names = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ConfigurationError(f"'{field_name}' must only contain non-empty strings")
        names.append(item.strip())
    return frozenset(names)


def parse_config(data: Any, *, source: str = "<config>") -> ConstraintsConfig:
    """Validate a decoded configuration document."""

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"{source}: configuration must be a mapping")

    unknown = set(data) - _TOP_LEVEL_KEYS
    if unknown:
        raise ConfigurationError(f"{source}: unknown configuration key(s): {sorted(unknown)}")

    scalars = data.get("scalars") or {}
    if not isinstance(scalars, Mapping):
        raise ConfigurationError(f"{source}: 'scalars' must be a mapping")
    unknown = set(scalars) - _SCALAR_KEYS
    if unknown:
        raise ConfigurationError(f"{source}: unknown key(s) under 'scalars': {sorted(unknown)}")

    telemetry = data.get("telemetry", True)
    if not isinstance(telemetry, bool):
        raise ConfigurationError(f"{source}: 'telemetry' must be true or false")

    return ConstraintsConfig(
        number_scalars=_as_name_set(scalars.get("number"), "scalars.number"),
        string_scalars=_as_name_set(scalars.get("string"), "scalars.string"),
        telemetry=telemetry,
    )


def load_config(path: Optional[Union[str, Path]] = None) -> ConstraintsConfig:
    """Load configuration from *path*, ``GRAPHQL_CONSTRAINTS_CONFIG`` or the environment."""

    if path is None:
        env_path = os.getenv(CONFIG_FILE_ENV)
        if not env_path:
            return config_from_env()
        path = env_path

    config_path = Path(path).expanduser()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {config_path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Malformed configuration file {config_path}: {exc}") from exc

    config = parse_config(data, source=str(config_path))
    logger.debug("Loaded constraints configuration from %s: %s", config_path, config)
    return config


__all__ = [
    "CONFIG_FILE_ENV",
    "ConstraintsConfig",
    "DEFAULT_CONFIG",
    "NUMBER_SCALARS_ENV",
    "STRING_SCALARS_ENV",
    "TELEMETRY_ENV",
    "config_from_env",
    "load_config",
    "parse_config",
]
