"""Resolve the target project's runtime environment from its ``.env`` file.

Error tracking only matters where real users hit the application, so the
analyzer is gated on ``APP_ENV``. Custom environment names (``prod-eu``,
``preprod``) are mapped onto canonical ones through configured aliases.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

ENV_FILENAME = ".env"


def current_environment(
    root: Path, aliases: Mapping[str, str] | None = None
) -> str | None:
    """Return the canonical ``APP_ENV`` of a project, or None if undeclared.

    Args:
        root: Project root directory.
        aliases: Custom environment name -> canonical name.
    """
    env_file = root / ENV_FILENAME
    try:
        if not env_file.is_file():
            return None
        values = dotenv_values(env_file)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Unable to read %s: %s", env_file, exc)
        return None

    environment = (values.get("APP_ENV") or "").strip().lower()
    if not environment:
        return None
    if aliases:
        canonical = {k.lower(): v.lower() for k, v in aliases.items()}
        environment = canonical.get(environment, environment)
    return environment
