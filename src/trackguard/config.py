"""Typed configuration for the error-tracking analyzer.

Configuration is read from a YAML file whose rule section lives under
``analyzers.missing-error-tracking``::

    skip_env_specific: false
    environment_aliases:
      prod-eu: production
    analyzers:
      missing-error-tracking:
        known_packages:
          - sentry/sentry-laravel
          - acme/error-reporter
        source_files:
          - app/Exceptions/Handler.php
        max_file_bytes: 1048576
        relevant_environments: [production, staging]

Keys that are omitted keep their defaults. An explicitly configured
``known_packages`` list replaces the built-in catalog, so an empty list
disables manifest-side detection.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from trackguard.core.manifest import DEFAULT_KNOWN_PACKAGES
from trackguard.exceptions import ConfigError

RULE_SECTION = "missing-error-tracking"

DEFAULT_SOURCE_FILES: tuple[str, ...] = (
    "app/Exceptions/Handler.php",
    "bootstrap/app.php",
    "config/logging.php",
)

DEFAULT_MAX_FILE_BYTES = 1024 * 1024

DEFAULT_RELEVANT_ENVIRONMENTS: tuple[str, ...] = ("production", "staging")


@dataclass(frozen=True)
class AnalyzerConfig:
    """Settings consumed by ``ErrorTrackingAnalyzer``.

    Attributes:
        known_packages: Composer packages that satisfy the check.
        source_files: Project-relative files scanned when the manifest
            is inconclusive, in scan order.
        max_file_bytes: Source files larger than this are not scanned.
        relevant_environments: ``APP_ENV`` values the check applies to.
        environment_aliases: Custom environment name -> canonical name
            pairs. A mapping is accepted and frozen into pairs.
        skip_env_specific: Ignore the environment gate entirely.
    """

    known_packages: tuple[str, ...] = DEFAULT_KNOWN_PACKAGES
    source_files: tuple[str, ...] = DEFAULT_SOURCE_FILES
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    relevant_environments: tuple[str, ...] = DEFAULT_RELEVANT_ENVIRONMENTS
    environment_aliases: tuple[tuple[str, str], ...] = ()
    skip_env_specific: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.environment_aliases, Mapping):
            object.__setattr__(
                self, "environment_aliases", tuple(self.environment_aliases.items())
            )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> AnalyzerConfig:
        """Build a config from a nested mapping.

        Rule keys are read from ``analyzers.missing-error-tracking`` when
        present, otherwise from the top level.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        if not isinstance(mapping, Mapping):
            raise ConfigError("Configuration must be a mapping")

        rule = mapping
        analyzers = mapping.get("analyzers")
        if isinstance(analyzers, Mapping) and RULE_SECTION in analyzers:
            rule = analyzers[RULE_SECTION] or {}
            if not isinstance(rule, Mapping):
                raise ConfigError(f"'{RULE_SECTION}' must be a mapping")

        kwargs: dict[str, Any] = {}
        for key in ("known_packages", "source_files", "relevant_environments"):
            if key in rule:
                kwargs[key] = _string_tuple(rule[key], key)

        if "max_file_bytes" in rule:
            value = rule["max_file_bytes"]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError("'max_file_bytes' must be a positive integer")
            kwargs["max_file_bytes"] = value

        if "environment_aliases" in mapping:
            aliases = mapping["environment_aliases"] or {}
            if not isinstance(aliases, Mapping):
                raise ConfigError("'environment_aliases' must be a mapping")
            kwargs["environment_aliases"] = tuple(
                (str(k), str(v)) for k, v in aliases.items()
            )

        if "skip_env_specific" in mapping:
            kwargs["skip_env_specific"] = bool(mapping["skip_env_specific"])

        return cls(**kwargs)


def _string_tuple(value: Any, key: str) -> tuple[str, ...]:
    """Validate a list of strings, dropping duplicates but keeping order."""
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return tuple(dict.fromkeys(value))


def load_config(path: Path) -> AnalyzerConfig:
    """Load an ``AnalyzerConfig`` from a YAML file.

    An empty file yields the defaults.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Unable to load config {path}: {exc}") from exc
    if data is None:
        return AnalyzerConfig()
    return AnalyzerConfig.from_mapping(data)
