"""Rule engine deciding whether a project reports errors to a tracking service.

The ``ErrorTrackingAnalyzer`` gathers evidence from two channels, cheapest
first, and stops at the first positive answer:

1. **Manifest** -- ``composer.json`` declares a known error-tracking SDK
   under ``require`` or ``require-dev``.
2. **Source** -- a designated file (exception handler, bootstrap, logging
   configuration) contains a live SDK call, SDK class reference, or a
   framework hook whose body reports to an SDK.

Outcomes:

- no manifest              -> SKIPPED
- unparsable manifest      -> FAILED (one ERROR issue)
- evidence on any channel  -> PASSED
- no evidence              -> WARNING (one WARNING issue)

No exception escapes ``analyze()``; every path returns a ``Result``. The
analyzer performs only file reads and keeps no state between runs, so
instances may be shared across threads.
"""

from __future__ import annotations

import logging
from pathlib import Path

from trackguard.config import AnalyzerConfig
from trackguard.core.analyzer.models import (
    AnalyzerMetadata,
    Issue,
    Location,
    Result,
    Severity,
)
from trackguard.core.analyzer.patterns import (
    DEFAULT_PATTERNS,
    Pattern,
    PatternKind,
    hook_reports_errors,
)
from trackguard.core.lexer import SourceUnit
from trackguard.core.manifest import MANIFEST_FILENAME, load_manifest
from trackguard.environment import current_environment
from trackguard.exceptions import (
    ManifestNotFoundError,
    ManifestParseError,
    SourceReadError,
)

logger = logging.getLogger(__name__)

ANALYZER_ID = "missing-error-tracking"

METADATA = AnalyzerMetadata(
    id=ANALYZER_ID,
    name="Missing Error Tracking Detector",
    description=(
        "Detects production applications without error tracking services "
        "like Sentry"
    ),
    category="best-practices",
    severity=Severity.WARNING,
    tags=("laravel", "monitoring", "production", "error-tracking"),
)

NO_TRACKING_MESSAGE = "No error tracking service detected"

RECOMMENDATION = (
    "Install an error tracking service like Sentry (sentry/sentry-laravel), "
    "Bugsnag, or Rollbar and report exceptions from your exception handler. "
    "This provides production error visibility, automatic error grouping, "
    "and faster debugging."
)


class ErrorTrackingAnalyzer:
    """Detects projects that do not report errors to a tracking service.

    Usage::

        analyzer = ErrorTrackingAnalyzer()
        result = analyzer.analyze(Path("./my-laravel-app"))
        if result.status is Status.WARNING:
            for issue in result.issues:
                print(issue.message, issue.recommendation)
    """

    metadata = METADATA

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        patterns: tuple[Pattern, ...] = DEFAULT_PATTERNS,
    ) -> None:
        self.config = config if config is not None else AnalyzerConfig()
        self.patterns = patterns

    # -- Environment gate --

    def should_run(self, root: Path) -> bool:
        """Return True if the project's environment warrants this check.

        Projects without a declared ``APP_ENV`` are always analyzed.
        """
        if self.config.skip_env_specific:
            return True
        environment = current_environment(root, dict(self.config.environment_aliases))
        if environment is None:
            return True
        return environment in self.config.relevant_environments

    def run(self, root: Path) -> Result:
        """Apply the environment gate, then analyze."""
        if not self.should_run(root):
            environment = current_environment(root, dict(self.config.environment_aliases))
            logger.debug("Skipping %s: environment %r", root, environment)
            return Result.skipped(
                f"Not relevant in the '{environment}' environment",
                analyzer_id=ANALYZER_ID,
            )
        return self.analyze(root)

    # -- Analysis --

    def analyze(self, root: Path) -> Result:
        """Run both evidence channels against a project root.

        Args:
            root: Project root directory.

        Returns:
            The terminal ``Result`` of this run.
        """
        try:
            manifest = load_manifest(root)
        except ManifestNotFoundError:
            return Result.skipped(
                f"No {MANIFEST_FILENAME} found", analyzer_id=ANALYZER_ID
            )
        except ManifestParseError as exc:
            return Result.failed(
                f"Unable to parse {MANIFEST_FILENAME}",
                [Issue(
                    message=str(exc),
                    severity=Severity.ERROR,
                    recommendation=f"Fix the syntax of {MANIFEST_FILENAME} so dependencies can be inspected.",
                    location=Location(MANIFEST_FILENAME, 1),
                )],
                analyzer_id=ANALYZER_ID,
            )

        matched = manifest.match_known(self.config.known_packages)
        if matched:
            logger.debug("Manifest declares %s", ", ".join(matched))
            return Result.passed(
                "Error tracking service is configured",
                evidence=matched,
                analyzer_id=ANALYZER_ID,
            )

        for relative_path in self.config.source_files:
            evidence = self._scan_source(root, relative_path)
            if evidence is not None:
                return Result.passed(
                    "Error tracking service is configured",
                    evidence=(evidence,),
                    analyzer_id=ANALYZER_ID,
                )

        return Result.warning(
            NO_TRACKING_MESSAGE,
            [Issue(
                message=f"{NO_TRACKING_MESSAGE} in {MANIFEST_FILENAME} or exception handling code",
                severity=Severity.WARNING,
                recommendation=RECOMMENDATION,
                location=Location(MANIFEST_FILENAME, 1),
            )],
            analyzer_id=ANALYZER_ID,
        )

    def _scan_source(self, root: Path, relative_path: str) -> str | None:
        """Return an evidence label for the first live pattern hit, if any."""
        try:
            unit = SourceUnit.load(root, relative_path, self.config.max_file_bytes)
        except FileNotFoundError:
            return None
        except SourceReadError as exc:
            logger.warning("Ignoring %s: %s", relative_path, exc)
            return None

        for pattern in self.patterns:
            offset = self._match_offset(unit, pattern)
            if offset is not None:
                line = unit.line_of(offset)
                logger.debug("%s matched in %s:%d", pattern.label, relative_path, line)
                return f"{pattern.label} ({relative_path}:{line})"
        return None

    @staticmethod
    def _match_offset(unit: SourceUnit, pattern: Pattern) -> int | None:
        """Return the offset of the first live match that counts as evidence."""
        for match in pattern.regex.finditer(unit.text):
            if not unit.is_live(match.start()):
                continue
            if pattern.kind is PatternKind.HOOK and not hook_reports_errors(unit, match):
                continue
            return match.start()
        return None
