"""Tests for the Composer manifest reader and known-package matching."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from trackguard.core.manifest import (
    DEFAULT_KNOWN_PACKAGES,
    Manifest,
    load_manifest,
    parse_manifest,
)
from trackguard.exceptions import (
    ManifestError,
    ManifestNotFoundError,
    ManifestParseError,
)


class TestParseManifest:
    """Parsing raw manifest content."""

    def test_parses_both_sections(self) -> None:
        manifest = parse_manifest(json.dumps({
            "require": {"php": "^8.1"},
            "require-dev": {"phpunit/phpunit": "^10.0"},
        }))
        assert manifest.require == {"php": "^8.1"}
        assert manifest.require_dev == {"phpunit/phpunit": "^10.0"}

    def test_missing_sections_are_empty(self) -> None:
        manifest = parse_manifest(b'{"name": "acme/app"}')
        assert manifest == Manifest()

    def test_non_object_section_is_ignored(self) -> None:
        manifest = parse_manifest('{"require": "oops", "require-dev": ["a"]}')
        assert manifest.require == {}
        assert manifest.require_dev == {}

    @pytest.mark.parametrize("content", [
        "invalid json {{{",
        "",
        b"\xff\xfe\x00garbage",
        "[]",
        '"composer"',
    ])
    def test_invalid_content_raises_parse_error(self, content: str | bytes) -> None:
        with pytest.raises(ManifestParseError):
            parse_manifest(content)

    def test_parse_error_is_a_manifest_error(self) -> None:
        assert issubclass(ManifestParseError, ManifestError)
        assert issubclass(ManifestNotFoundError, ManifestError)


class TestMatchKnown:
    """Exact, case-sensitive membership across require and require-dev."""

    def test_matches_require(self) -> None:
        manifest = Manifest(require={"sentry/sentry-laravel": "^4.0"})
        assert manifest.match_known(DEFAULT_KNOWN_PACKAGES) == ("sentry/sentry-laravel",)

    def test_matches_require_dev(self) -> None:
        manifest = Manifest(require_dev={"bugsnag/bugsnag-laravel": "^2.0"})
        assert manifest.match_known(DEFAULT_KNOWN_PACKAGES) == ("bugsnag/bugsnag-laravel",)

    def test_matching_is_case_sensitive(self) -> None:
        manifest = Manifest(require={"Sentry/Sentry-Laravel": "^4.0"})
        assert manifest.match_known(DEFAULT_KNOWN_PACKAGES) == ()

    def test_prefix_is_not_a_match(self) -> None:
        manifest = Manifest(require={"sentry/sentry": "^4.0"})
        assert manifest.match_known(["sentry/sentry-laravel"]) == ()

    def test_results_follow_catalog_order(self) -> None:
        manifest = Manifest(
            require={"rollbar/rollbar-laravel": "*"},
            require_dev={"sentry/sentry-laravel": "*"},
        )
        assert manifest.match_known(DEFAULT_KNOWN_PACKAGES) == (
            "sentry/sentry-laravel",
            "rollbar/rollbar-laravel",
        )

    def test_empty_catalog_never_matches(self) -> None:
        manifest = Manifest(require={"sentry/sentry-laravel": "^4.0"})
        assert manifest.match_known([]) == ()


class TestLoadManifest:
    """Reading composer.json from a project root."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestNotFoundError):
            load_manifest(tmp_path)

    def test_directory_named_composer_json_is_not_a_manifest(self, tmp_path: Path) -> None:
        (tmp_path / "composer.json").mkdir()
        with pytest.raises(ManifestNotFoundError):
            load_manifest(tmp_path)

    def test_reads_file(self, tmp_path: Path) -> None:
        (tmp_path / "composer.json").write_text('{"require": {"php": "^8.2"}}')
        assert load_manifest(tmp_path).require == {"php": "^8.2"}

    def test_malformed_file(self, tmp_path: Path) -> None:
        (tmp_path / "composer.json").write_text("invalid json {{{")
        with pytest.raises(ManifestParseError, match="invalid JSON"):
            load_manifest(tmp_path)

    def test_deeply_nested_file(self, tmp_path: Path) -> None:
        (tmp_path / "composer.json").write_text("[" * 200000)
        with pytest.raises(ManifestParseError):
            load_manifest(tmp_path)

    def test_unreadable_path(self, tmp_path: Path, monkeypatch) -> None:
        def denied(self) -> bool:
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "is_file", denied)
        with pytest.raises(ManifestParseError, match="Unable to read"):
            load_manifest(tmp_path)
