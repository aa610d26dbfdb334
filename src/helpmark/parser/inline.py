"""Inline span tokenizer for a single line of article text."""

from __future__ import annotations

import re
from enum import IntEnum

from .base import Bold, Code, InlineSpan, Italic, Link, PlainText


class InlineKind(IntEnum):
    """Inline constructs; the value doubles as tie-break priority."""

    CODE = 0
    BOLD = 1
    ITALIC = 2
    LINK = 3


_INLINE_PATTERNS: dict[InlineKind, re.Pattern[str]] = {
    InlineKind.CODE: re.compile(r"`([^`]+)`"),
    InlineKind.BOLD: re.compile(r"\*\*([^*]+)\*\*"),
    InlineKind.ITALIC: re.compile(r"(?<!\*)\*([^*]+)\*(?!\*)"),
    InlineKind.LINK: re.compile(r"\[([^\]]+)\]\(([^)]+)\)"),
}


def _match_key(hit: tuple[InlineKind, re.Match[str]]) -> tuple[int, int]:
    kind, match = hit
    return match.start(), int(kind)


def _next_match(text: str) -> tuple[InlineKind, re.Match[str]] | None:
    """Return the earliest inline construct in *text*, if any."""
    hits = []
    for kind, pattern in _INLINE_PATTERNS.items():
        m = pattern.search(text)
        if m:
            hits.append((kind, m))
    if not hits:
        return None
    return min(hits, key=_match_key)


def _make_span(kind: InlineKind, match: re.Match[str]) -> InlineSpan:
    if kind is InlineKind.CODE:
        return Code(match.group(1))
    if kind is InlineKind.BOLD:
        return Bold(match.group(1))
    if kind is InlineKind.ITALIC:
        return Italic(match.group(1))
    return Link(text=match.group(1), href=match.group(2))


def tokenize_inline(text: str) -> list[InlineSpan]:
    """Split *text* into an ordered list of inline spans.

    The earliest-starting construct wins; text between constructs becomes
    ``PlainText``. Unmatched delimiters are left as literal text.
    """
    spans: list[InlineSpan] = []
    remaining = text

    while remaining:
        hit = _next_match(remaining)
        if hit is None:
            spans.append(PlainText(remaining))
            break

        kind, match = hit
        if match.start() > 0:
            spans.append(PlainText(remaining[:match.start()]))
        spans.append(_make_span(kind, match))
        remaining = remaining[match.end():]

    return spans


def spans_to_text(spans: list[InlineSpan]) -> str:
    """Concatenate the visible text of *spans* with markup removed."""
    return "".join(span.text for span in spans)
