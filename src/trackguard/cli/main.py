"""TrackGuard CLI -- Detect production apps without error tracking.

Entry point for the ``trackguard`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    analyze    -- Check a project for error-tracking instrumentation.

Usage::

    trackguard analyze                          # Current directory
    trackguard analyze ./my-laravel-app
    trackguard analyze ./my-laravel-app --format json
    trackguard analyze . --config trackguard.yaml --ignore-environment
"""

from __future__ import annotations

import click

from trackguard import __version__
from trackguard.cli.analyze import analyze_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """TrackGuard: Detect production apps without error tracking.

    Inspects a PHP project's composer.json and exception handling code to
    decide whether errors are reported to a service like Sentry.
    """


cli.add_command(analyze_command)
