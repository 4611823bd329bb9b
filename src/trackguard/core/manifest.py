"""Composer manifest reader and known-package matching.

The manifest (``composer.json``) is the cheapest evidence channel: if any
known error-tracking SDK is declared under ``require`` or ``require-dev``,
the capability is considered present without looking at source code.

.. code-block:: json

    {
      "require": {"php": "^8.1", "sentry/sentry-laravel": "^4.0"},
      "require-dev": {"laravel/pint": "^1.0"}
    }

Version constraints are opaque: only exact, case-sensitive package names
are compared. Dev-only declarations count, since error reporting may be
wired up only in non-production tooling.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from trackguard.exceptions import ManifestNotFoundError, ManifestParseError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "composer.json"

# Error-tracking SDKs recognised when no catalog is configured.
DEFAULT_KNOWN_PACKAGES: tuple[str, ...] = (
    "sentry/sentry-laravel",
    "bugsnag/bugsnag-laravel",
    "rollbar/rollbar-laravel",
    "airbrake/phpbrake",
    "honeybadger-io/honeybadger-laravel",
)


@dataclass(frozen=True)
class Manifest:
    """Parsed dependency declarations.

    Attributes:
        require: Production dependencies, package name -> constraint.
        require_dev: Development dependencies, package name -> constraint.
    """

    require: dict[str, str] = field(default_factory=dict)
    require_dev: dict[str, str] = field(default_factory=dict)

    def declares(self, package: str) -> bool:
        """Return True if *package* is declared in either section."""
        return package in self.require or package in self.require_dev

    def match_known(self, known_packages: Iterable[str]) -> tuple[str, ...]:
        """Return the known packages declared by this manifest.

        The result preserves catalog order so reports are deterministic.

        Args:
            known_packages: Ordered catalog of package names.

        Returns:
            Matched package names, empty if none are declared.
        """
        return tuple(name for name in known_packages if self.declares(name))


def _dependency_section(document: dict, key: str) -> dict[str, str]:
    """Extract one dependency section, ignoring non-object values."""
    section = document.get(key)
    if not isinstance(section, dict):
        return {}
    return {str(name): str(constraint) for name, constraint in section.items()}


def parse_manifest(content: bytes | str) -> Manifest:
    """Parse manifest bytes into a ``Manifest``.

    Args:
        content: Raw manifest content.

    Returns:
        The parsed manifest.

    Raises:
        ManifestParseError: If the content is not UTF-8 JSON describing an
            object.
    """
    try:
        document = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ManifestParseError(f"{MANIFEST_FILENAME} is invalid JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise ManifestParseError(
            f"{MANIFEST_FILENAME} must contain a JSON object, "
            f"got {type(document).__name__}"
        )

    return Manifest(
        require=_dependency_section(document, "require"),
        require_dev=_dependency_section(document, "require-dev"),
    )


def load_manifest(root: Path) -> Manifest:
    """Load ``composer.json`` from a project root.

    Args:
        root: Project root directory.

    Returns:
        The parsed manifest.

    Raises:
        ManifestNotFoundError: If there is no manifest file.
        ManifestParseError: If the file cannot be read or parsed.
    """
    path = root / MANIFEST_FILENAME
    try:
        if not path.is_file():
            raise ManifestNotFoundError(f"No {MANIFEST_FILENAME} found in {root}")
        content = path.read_bytes()
    except OSError as exc:
        raise ManifestParseError(f"Unable to read {MANIFEST_FILENAME}: {exc}") from exc

    manifest = parse_manifest(content)
    logger.debug(
        "Loaded %s: %d require, %d require-dev",
        path, len(manifest.require), len(manifest.require_dev),
    )
    return manifest
