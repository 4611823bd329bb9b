"""Error-tracking pattern catalog and hook-body inspection.

Each entry pairs a compiled regex with the vendor label reported to the
user. Three idioms are recognised:

- **Calls** -- SDK functions and facades (``\\Sentry\\captureException($e)``,
  ``Bugsnag::notifyException($e)``, ``app('sentry')->captureException($e)``).
- **Class references** -- SDK classes wired into configuration
  (``'via' => \\Sentry\\Laravel\\LogChannel::class``).
- **Hooks** -- framework integration points (``function report(...)``,
  ``->reportable(...)``, ``->withExceptions(...)``). The hook name alone is
  not evidence: its body must do more than forward to the parent
  implementation and must reach an error-tracking SDK.

Patterns use bounded character classes and no nested quantifiers, so
matching stays linear on hostile input. The catalog is immutable and
shared across runs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from trackguard.core.lexer import SourceUnit


class PatternKind(Enum):
    """How a pattern's match is turned into evidence."""

    CALL = "call"
    CLASS_REFERENCE = "class_reference"
    HOOK = "hook"


@dataclass(frozen=True)
class Pattern:
    """A capability-indicating regex and the label reported to the user."""

    regex: re.Pattern[str]
    label: str
    kind: PatternKind = PatternKind.CALL


def _call(expression: str, label: str) -> Pattern:
    return Pattern(re.compile(expression), label, PatternKind.CALL)


def _class_ref(namespace: str, label: str) -> Pattern:
    return Pattern(
        re.compile(rf"\b{namespace}\\[A-Za-z_\\]+::class\b"),
        label,
        PatternKind.CLASS_REFERENCE,
    )


def _hook(expression: str, label: str) -> Pattern:
    return Pattern(re.compile(expression), label, PatternKind.HOOK)


DEFAULT_PATTERNS: tuple[Pattern, ...] = (
    # Sentry
    _call(
        r"\bSentry\\(?:captureException|captureMessage|captureEvent|captureLastError"
        r"|configureScope|withScope|init)\s*\(",
        "Sentry",
    ),
    _call(r"\bapp\(\s*['\"]sentry['\"]\s*\)\s*->\s*capture\w*\s*\(", "Sentry"),
    _call(r"\bIntegration::handles\s*\(", "Sentry"),
    _call(r"\bIntegration::captureUnhandledException\s*\(", "Sentry"),
    _class_ref(r"Sentry", "Sentry"),
    # Bugsnag
    _call(
        r"\bBugsnag::(?:notifyException|notifyError|notify|leaveBreadcrumb"
        r"|registerCallback)\s*\(",
        "Bugsnag",
    ),
    _class_ref(r"Bugsnag", "Bugsnag"),
    # Rollbar
    _call(
        r"\bRollbar::(?:init|log|debug|info|notice|warning|error|critical|alert"
        r"|emergency)\s*\(",
        "Rollbar",
    ),
    _class_ref(r"Rollbar", "Rollbar"),
    # Honeybadger
    _call(r"\bHoneybadger::(?:notify|customNotification|context)\s*\(", "Honeybadger"),
    _call(r"\bapp\(\s*['\"]honeybadger['\"]\s*\)\s*->\s*notify\w*\s*\(", "Honeybadger"),
    _class_ref(r"Honeybadger", "Honeybadger"),
    # Airbrake
    _call(r"\bAirbrake\\Instance::(?:notify|set)\w*\s*\(", "Airbrake"),
    _call(r"\bnew\s+\\?Airbrake\\Notifier\s*\(", "Airbrake"),
    # Framework hooks
    _hook(r"\bfunction\s+report\s*\(", "exception handler report()"),
    _hook(r"->\s*reportable\s*\(", "reportable() callback"),
    _hook(r"->\s*withExceptions\s*\(", "withExceptions() callback"),
)

# Statements that only forward to the framework's default behaviour.
_TRIVIAL_STATEMENT = re.compile(
    r"^(?:return(?:\s+null)?|(?:return\s+)?parent::\w+\s*\(.*\))$", re.DOTALL
)

# Names that tie a hook body to an error-tracking SDK.
_SDK_MARKER = re.compile(
    r"\b(?:capture\w*(?:Exception|Message|Event)|notify(?:Exception|Error)"
    r"|Sentry|Bugsnag|Rollbar|Honeybadger|Airbrake)\b"
)

_STATEMENT_SEPARATORS = re.compile(r"[;{}]")


def _matching_brace(live: str, open_at: int) -> int:
    """Return the offset of the brace closing the one at *open_at*.

    An unbalanced block closes at the end of the text.
    """
    depth = 0
    for pos in range(open_at, len(live)):
        char = live[pos]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos
    return len(live)


def hook_body(unit: SourceUnit, match: re.Match[str]) -> str:
    """Return the live text of the body introduced by a hook match.

    The body is the balanced ``{...}`` block after the match. When a ``;``
    comes before any ``{`` (arrow functions, abstract declarations), the
    body is the text between the match and that ``;``. Braces and
    semicolons inside comments or strings are ignored.
    """
    live = unit.live_text(match.end())
    brace = live.find("{")
    semicolon = live.find(";")
    if brace == -1 or (semicolon != -1 and semicolon < brace):
        end = len(live) if semicolon == -1 else semicolon
        return live[:end]
    return live[brace + 1:_matching_brace(live, brace)]


def body_statements(body: str) -> list[str]:
    """Split hook body text into whitespace-normalised statement fragments."""
    fragments = (" ".join(part.split()) for part in _STATEMENT_SEPARATORS.split(body))
    return [fragment for fragment in fragments if fragment]


def is_trivial_statement(statement: str) -> bool:
    return _TRIVIAL_STATEMENT.match(statement) is not None


def hook_reports_errors(unit: SourceUnit, match: re.Match[str]) -> bool:
    """Decide whether a hook's body counts as error-tracking evidence.

    The body must contain at least one statement that is not a bare
    delegation to default behaviour, and one of those statements must
    reach an error-tracking SDK.
    """
    statements = [
        s for s in body_statements(hook_body(unit, match))
        if not is_trivial_statement(s)
    ]
    return any(_SDK_MARKER.search(s) for s in statements)
