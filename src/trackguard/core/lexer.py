"""Comment-aware lexical classification of PHP source text.

Naive regex matching reports SDK calls that only appear in comments,
docblocks, or string literals (``// Sentry\\captureException($e); - disabled``).
This module classifies every offset of a source file into exactly one
span kind so that pattern matches can be filtered to live code.

Classification Algorithm
------------------------
A single left-to-right pass with one current mode:

- ``//`` or ``#`` (but not the ``#[`` attribute opener) starts a line
  comment that ends before the next newline.
- ``/*`` starts a block comment, ``/**`` a doc block; both end after the
  next ``*/``. ``/**/`` is an empty block comment.
- ``'`` or ``"`` starts a string literal that ends at the next quote of the
  same kind not preceded by an odd number of backslashes.

Comments do not nest: an opener inside a non-live span is ordinary text.
An unterminated span runs to the end of the text. The resulting spans
partition the text exactly, with adjacent live regions merged.

Match Policy
------------
A pattern match counts as live when its *start* offset is live, even if
the matched text runs on into a trailing comment. Only the start offset
is consulted.
"""

from __future__ import annotations

import bisect
import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from trackguard.exceptions import SourceReadError

logger = logging.getLogger(__name__)


class SpanKind(Enum):
    """Lexical class of a region of source text."""

    LIVE = "live"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    DOC_BLOCK = "doc_block"
    STRING = "string"


@dataclass(frozen=True)
class LexicalSpan:
    """A classified half-open region ``[start, end)`` of source text."""

    kind: SpanKind
    start: int
    end: int

    @property
    def is_live(self) -> bool:
        return self.kind is SpanKind.LIVE


# Next thing in live code that can switch modes.
_OPENER = re.compile(r"//|#(?!\[)|/\*|['\"]")


def _string_end(text: str, start: int) -> int:
    """Return the end offset of the string literal opened at *start*."""
    quote = text[start]
    pos = start + 1
    while True:
        pos = text.find(quote, pos)
        if pos == -1:
            return len(text)
        backslashes = 0
        back = pos - 1
        while back > start and text[back] == "\\":
            backslashes += 1
            back -= 1
        if backslashes % 2 == 0:
            return pos + 1
        pos += 1


def classify(text: str) -> tuple[LexicalSpan, ...]:
    """Partition *text* into lexical spans.

    Args:
        text: Raw source text.

    Returns:
        Spans in offset order. They cover ``[0, len(text))`` with no gaps
        or overlaps; empty text yields no spans.
    """
    spans: list[LexicalSpan] = []
    length = len(text)
    live_start = 0
    pos = 0

    while pos < length:
        opener = _OPENER.search(text, pos)
        if opener is None:
            break
        start = opener.start()
        token = opener.group()

        if token in ("//", "#"):
            kind = SpanKind.LINE_COMMENT
            newline = text.find("\n", start)
            end = length if newline == -1 else newline
        elif token == "/*":
            closer = text.find("*/", start + 2)
            end = length if closer == -1 else closer + 2
            is_doc = text.startswith("*", start + 2) and closer != start + 2
            kind = SpanKind.DOC_BLOCK if is_doc else SpanKind.BLOCK_COMMENT
        else:
            kind = SpanKind.STRING
            end = _string_end(text, start)

        if start > live_start:
            spans.append(LexicalSpan(SpanKind.LIVE, live_start, start))
        spans.append(LexicalSpan(kind, start, end))
        live_start = pos = end

    if live_start < length:
        spans.append(LexicalSpan(SpanKind.LIVE, live_start, length))
    return tuple(spans)


class SourceUnit:
    r"""A designated source file and its lazily computed classification.

    The text is never mutated. Spans are computed on first use and reused
    for every later query on the same unit.

    Usage::

        unit = SourceUnit("app/Exceptions/Handler.php", text)
        if unit.find_live(r"captureException\s*\("):
            ...
    """

    def __init__(self, path: str, text: str) -> None:
        self.path = path
        self.text = text
        self._spans: tuple[LexicalSpan, ...] | None = None
        self._starts: list[int] = []

    @classmethod
    def load(cls, root: Path, relative_path: str, max_bytes: int) -> SourceUnit:
        """Read a designated file below *root*.

        Raises:
            FileNotFoundError: If the file does not exist.
            SourceReadError: If it cannot be read, exceeds *max_bytes*, or
                is not valid UTF-8.
        """
        path = root / relative_path
        try:
            if not path.is_file():
                raise FileNotFoundError(relative_path)
            size = path.stat().st_size
            if size > max_bytes:
                raise SourceReadError(
                    f"{relative_path} is {size} bytes, above the {max_bytes} byte limit"
                )
            text = path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            raise
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceReadError(f"Unable to read {relative_path}: {exc}") from exc
        return cls(relative_path, text)

    @property
    def spans(self) -> tuple[LexicalSpan, ...]:
        if self._spans is None:
            self._spans = classify(self.text)
            self._starts = [span.start for span in self._spans]
            logger.debug("Classified %s into %d spans", self.path, len(self._spans))
        return self._spans

    def kind_at(self, offset: int) -> SpanKind:
        """Return the span kind covering *offset*.

        The end-of-text offset inherits the kind of the last span, so an
        unterminated comment still covers an empty match at the very end.
        """
        spans = self.spans
        if not spans:
            return SpanKind.LIVE
        index = bisect.bisect_right(self._starts, offset) - 1
        return spans[max(index, 0)].kind

    def is_live(self, offset: int) -> bool:
        return self.kind_at(offset) is SpanKind.LIVE

    def line_of(self, offset: int) -> int:
        """Return the 1-based line number of *offset*."""
        return self.text.count("\n", 0, offset) + 1

    def find_live(self, pattern: re.Pattern[str] | str, start: int = 0) -> re.Match[str] | None:
        """Return the first match of *pattern* that starts in live code."""
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        for match in regex.finditer(self.text, start):
            if self.is_live(match.start()):
                return match
        return None

    def live_text(self, start: int = 0, end: int | None = None) -> str:
        """Return ``text[start:end]`` with non-live characters blanked.

        Non-live characters become spaces and newlines are kept, so the
        returned string is offset-aligned with the source text.
        """
        end = len(self.text) if end is None else end
        pieces: list[str] = []
        for span in self.spans:
            lo, hi = max(span.start, start), min(span.end, end)
            if lo >= hi:
                continue
            chunk = self.text[lo:hi]
            if not span.is_live:
                chunk = re.sub(r"[^\n]", " ", chunk)
            pieces.append(chunk)
        return "".join(pieces)


def occurs_live(pattern: re.Pattern[str] | str, unit: SourceUnit) -> bool:
    """Return True if *pattern* matches anywhere starting in live code."""
    return unit.find_live(pattern) is not None
