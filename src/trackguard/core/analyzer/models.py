"""Data models for the rule engine: Status, Severity, Issue, Result.

These are the only types the analyzer hands back to its caller. They are
intentionally decoupled from the engine so that output formatters and the
CLI can import them without pulling in the lexer or pattern catalogs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


# ---------------------------------------------------------------------------
# Status and Severity
# ---------------------------------------------------------------------------


class Status(Enum):
    """Terminal outcome of one analyzer run.

    PASSED  -- positive capability evidence found on either channel.
    WARNING -- analysis completed, but no evidence was found.
    FAILED  -- required input (the manifest) exists but is unparsable.
    SKIPPED -- required input is absent, or the run is not relevant.
    """

    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"
    SKIPPED = "skipped"


class Severity(IntEnum):
    """Three-level issue severity. INFO < WARNING < ERROR."""

    INFO = 1
    WARNING = 2
    ERROR = 3


# ---------------------------------------------------------------------------
# Issue: a single actionable observation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Location:
    """Project-relative file path and 1-based line number."""

    path: str
    line: int = 1

    def __str__(self) -> str:
        return f"{self.path}:{self.line}"


@dataclass(frozen=True)
class Issue:
    """A single issue produced by the rule engine.

    Issues are immutable once created and are kept in insertion order
    inside a ``Result``.

    Attributes:
        message: Human-readable description of the problem.
        severity: INFO, WARNING or ERROR.
        recommendation: Remediation text shown to the user.
        location: Where the issue applies, if anywhere in particular.
        evidence: The label or text that triggered the issue, if any.
    """

    message: str
    severity: Severity
    recommendation: str
    location: Location | None = None
    evidence: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "severity": self.severity.name,
            "recommendation": self.recommendation,
            "location": str(self.location) if self.location else None,
            "evidence": self.evidence,
        }


# ---------------------------------------------------------------------------
# Result: the analyzer's sole output type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Result:
    """The complete outcome of one analyzer run.

    Results compare by value, so running the analyzer twice on unchanged
    inputs yields two equal results.

    Attributes:
        status: The terminal status.
        message: One-line summary of the outcome.
        issues: Ordered issues (empty unless WARNING or FAILED).
        evidence: Labels of the evidence that produced a PASSED status,
            e.g. matched package names or ``"Sentry (app/...:12)"``.
        analyzer_id: Identifier of the rule that produced this result.
    """

    status: Status
    message: str = ""
    issues: tuple[Issue, ...] = ()
    evidence: tuple[str, ...] = ()
    analyzer_id: str = ""

    @classmethod
    def passed(
        cls, message: str, evidence: tuple[str, ...] = (), analyzer_id: str = ""
    ) -> Result:
        return cls(Status.PASSED, message, (), tuple(evidence), analyzer_id)

    @classmethod
    def warning(
        cls, message: str, issues: list[Issue], analyzer_id: str = ""
    ) -> Result:
        return cls(Status.WARNING, message, tuple(issues), (), analyzer_id)

    @classmethod
    def failed(
        cls, message: str, issues: list[Issue], analyzer_id: str = ""
    ) -> Result:
        return cls(Status.FAILED, message, tuple(issues), (), analyzer_id)

    @classmethod
    def skipped(cls, message: str, analyzer_id: str = "") -> Result:
        return cls(Status.SKIPPED, message, (), (), analyzer_id)

    @property
    def max_severity(self) -> Severity | None:
        """Return the highest severity among all issues, or None if none."""
        if not self.issues:
            return None
        return max(i.severity for i in self.issues)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "analyzer": self.analyzer_id,
            "status": self.status.value,
            "message": self.message,
            "evidence": list(self.evidence),
            "issues": [i.to_dict() for i in self.issues],
        }


# ---------------------------------------------------------------------------
# AnalyzerMetadata: static description of a rule
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalyzerMetadata:
    """Identity and classification of a rule, surfaced to reporting layers."""

    id: str
    name: str
    description: str
    category: str
    severity: Severity
    tags: tuple[str, ...] = field(default_factory=tuple)
    docs_url: str = ""
