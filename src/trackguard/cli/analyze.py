"""``trackguard analyze [path]`` -- Check a project for error tracking.

Exit Codes:
    0 -- Passed, or skipped (no composer.json / irrelevant environment).
    1 -- Warning: no error tracking service detected.
    2 -- Failed: composer.json could not be parsed, or a usage error.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from trackguard.cli.output import print_result
from trackguard.config import AnalyzerConfig, load_config
from trackguard.core.analyzer import ErrorTrackingAnalyzer, Status
from trackguard.exceptions import ConfigError

_EXIT_CODES: dict[Status, int] = {
    Status.PASSED: 0,
    Status.SKIPPED: 0,
    Status.WARNING: 1,
    Status.FAILED: 2,
}


@click.command("analyze")
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML configuration file.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--ignore-environment",
    is_flag=True,
    default=False,
    help="Analyze regardless of the project's APP_ENV.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def analyze_command(
    path: str,
    config_path: str | None,
    output_format: str,
    ignore_environment: bool,
    verbose: bool,
) -> None:
    """Check a PHP project for error-tracking instrumentation.

    Looks for a known SDK in composer.json, then for live SDK usage in the
    exception handler, bootstrap and logging configuration.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(Path(config_path)) if config_path else AnalyzerConfig()
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint="--config") from exc

    if ignore_environment:
        config = replace(config, skip_env_specific=True)

    analyzer = ErrorTrackingAnalyzer(config)
    result = analyzer.run(Path(path))

    if output_format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result, analyzer.metadata.name)

    sys.exit(_EXIT_CODES[result.status])
