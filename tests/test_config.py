"""Tests for AnalyzerConfig and YAML config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from trackguard.config import (
    DEFAULT_MAX_FILE_BYTES,
    DEFAULT_SOURCE_FILES,
    AnalyzerConfig,
    load_config,
)
from trackguard.core.manifest import DEFAULT_KNOWN_PACKAGES
from trackguard.exceptions import ConfigError


class TestDefaults:

    def test_defaults(self) -> None:
        config = AnalyzerConfig()
        assert config.known_packages == DEFAULT_KNOWN_PACKAGES
        assert config.source_files == DEFAULT_SOURCE_FILES
        assert config.max_file_bytes == DEFAULT_MAX_FILE_BYTES
        assert config.relevant_environments == ("production", "staging")
        assert config.skip_env_specific is False

    def test_handler_is_scanned_first(self) -> None:
        assert DEFAULT_SOURCE_FILES[0] == "app/Exceptions/Handler.php"


class TestFromMapping:
    """Building configs from nested mappings."""

    def test_nested_rule_section(self) -> None:
        config = AnalyzerConfig.from_mapping({
            "analyzers": {
                "missing-error-tracking": {"known_packages": ["acme/reporter"]},
            },
        })
        assert config.known_packages == ("acme/reporter",)

    def test_top_level_rule_keys(self) -> None:
        config = AnalyzerConfig.from_mapping({"source_files": ["a.php", "b.php"]})
        assert config.source_files == ("a.php", "b.php")

    def test_empty_known_packages_is_kept(self) -> None:
        assert AnalyzerConfig.from_mapping({"known_packages": []}).known_packages == ()

    def test_null_known_packages_is_empty(self) -> None:
        assert AnalyzerConfig.from_mapping({"known_packages": None}).known_packages == ()

    def test_duplicates_are_dropped_in_order(self) -> None:
        config = AnalyzerConfig.from_mapping({"known_packages": ["b/b", "a/a", "b/b"]})
        assert config.known_packages == ("b/b", "a/a")

    def test_global_keys(self) -> None:
        config = AnalyzerConfig.from_mapping({
            "skip_env_specific": True,
            "environment_aliases": {"prod-eu": "production"},
        })
        assert config.skip_env_specific is True
        assert config.environment_aliases == (("prod-eu", "production"),)

    def test_aliases_mapping_is_frozen(self) -> None:
        config = AnalyzerConfig(environment_aliases={"prod-eu": "production"})
        assert config.environment_aliases == (("prod-eu", "production"),)
        assert hash(config) == hash(AnalyzerConfig(environment_aliases={"prod-eu": "production"}))

    @pytest.mark.parametrize("mapping", [
        {"known_packages": "sentry/sentry-laravel"},
        {"known_packages": [1, 2]},
        {"max_file_bytes": 0},
        {"max_file_bytes": "big"},
        {"max_file_bytes": True},
        {"environment_aliases": ["prod"]},
        {"analyzers": {"missing-error-tracking": ["oops"]}},
    ])
    def test_invalid_values(self, mapping: dict) -> None:
        with pytest.raises(ConfigError):
            AnalyzerConfig.from_mapping(mapping)

    def test_non_mapping(self) -> None:
        with pytest.raises(ConfigError):
            AnalyzerConfig.from_mapping(["not", "a", "mapping"])  # type: ignore[arg-type]


class TestLoadConfig:
    """Reading YAML files."""

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "trackguard.yaml"
        path.write_text(
            "analyzers:\n"
            "  missing-error-tracking:\n"
            "    known_packages:\n"
            "      - acme/reporter\n"
            "    max_file_bytes: 2048\n"
        )
        config = load_config(path)
        assert config.known_packages == ("acme/reporter",)
        assert config.max_file_bytes == 2048

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "trackguard.yaml"
        path.write_text("")
        assert load_config(path) == AnalyzerConfig()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "trackguard.yaml"
        path.write_text("known_packages: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "absent.yaml")
