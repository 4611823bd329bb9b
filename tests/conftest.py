"""Shared fixtures for trackguard tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

BASE_MANIFEST: dict = {
    "require": {
        "php": "^8.1",
        "laravel/framework": "^10.0",
    },
}


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that writes a throwaway project and returns its root.

    *files* maps project-relative paths to content. A dict *manifest* is
    serialized to JSON, a string is written verbatim, and None omits
    composer.json.
    """

    def _make(
        files: dict[str, str] | None = None,
        manifest: dict | str | None = BASE_MANIFEST,
    ) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        if manifest is not None:
            content = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (root / "composer.json").write_text(content)
        for relative, content in (files or {}).items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)
        return root

    return _make
