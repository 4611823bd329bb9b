"""Tests for APP_ENV resolution from .env files."""

from __future__ import annotations

from pathlib import Path

from trackguard.environment import current_environment


def test_no_env_file(tmp_path: Path) -> None:
    assert current_environment(tmp_path) is None


def test_reads_app_env(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("APP_NAME=Shop\nAPP_ENV=Production\n")
    assert current_environment(tmp_path) == "production"


def test_quoted_value(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text('APP_ENV="staging"\n')
    assert current_environment(tmp_path) == "staging"


def test_missing_app_env(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("APP_NAME=Shop\n")
    assert current_environment(tmp_path) is None


def test_empty_app_env(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("APP_ENV=\n")
    assert current_environment(tmp_path) is None


def test_alias(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("APP_ENV=prod-eu\n")
    assert current_environment(tmp_path, {"Prod-EU": "Production"}) == "production"
