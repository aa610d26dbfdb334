"""Line-oriented parser for the help article markdown subset."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

from helpmark.utils.logger import get_logger

from .base import (
    BlockNode,
    Blockquote,
    CodeBlock,
    Heading,
    OrderedListItem,
    Paragraph,
    RenderTree,
    Table,
    UnorderedListItem,
)
from .inline import tokenize_inline

LOGGER = get_logger(__name__)

FENCE = "```"

_TABLE_SEPARATOR_RE = re.compile(r"^\|[\s\-|]+\|$")
_ORDERED_ITEM_RE = re.compile(r"^([0-9]+)\.\s")


@dataclass
class _RenderState:
    """Mode flags and buffers owned by a single ``render_content`` call."""

    lines: list[str]
    index: int = 0
    nodes: list[BlockNode] = field(default_factory=list)
    in_code: bool = False
    code_lang: str = ""
    code_lines: list[str] = field(default_factory=list)
    table_rows: list[list[str]] = field(default_factory=list)

    def lookahead(self, offset: int) -> str:
        pos = self.index + offset
        return self.lines[pos].strip() if pos < len(self.lines) else ""


def render_content(text: str) -> RenderTree:
    """Convert an article body into an ordered list of block nodes.

    Never raises: anything the grammar does not recognise becomes a
    paragraph, and an unterminated code fence is dropped.
    """
    state = _RenderState(lines=text.split("\n"))

    while state.index < len(state.lines):
        line = state.lines[state.index]
        trimmed = line.strip()
        for rule in _RULES:
            if rule.matches(state, trimmed):
                rule.handle(state, line, trimmed)
                break
        state.index += 1

    _finish(state)
    return state.nodes


def _finish(state: _RenderState) -> None:
    if state.in_code:
        LOGGER.debug(
            "Dropping unterminated code block (%d lines, language=%r)",
            len(state.code_lines),
            state.code_lang,
        )


# ---------------------------------------------------------------------------
# Fenced code
# ---------------------------------------------------------------------------

def _toggle_fence(state: _RenderState, line: str, trimmed: str) -> None:
    if state.in_code:
        state.nodes.append(CodeBlock(language=state.code_lang, lines=state.code_lines))
        state.code_lines = []
        state.code_lang = ""
        state.in_code = False
    else:
        state.in_code = True
        state.code_lang = trimmed[len(FENCE):].strip()


def _append_code_line(state: _RenderState, line: str, trimmed: str) -> None:
    state.code_lines.append(line)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def _is_table_row(trimmed: str) -> bool:
    return trimmed.startswith("|") and trimmed.endswith("|")


def _is_separator(trimmed: str) -> bool:
    return bool(_TABLE_SEPARATOR_RE.match(trimmed))


def _split_cells(trimmed: str) -> list[str]:
    # The outer pipes always produce an empty first and last fragment.
    return [cell.strip() for cell in trimmed.split("|")[1:-1]]


def _table_continues(state: _RenderState) -> bool:
    offset = 1
    while _is_separator(state.lookahead(offset)):
        offset += 1
    return _is_table_row(state.lookahead(offset))


def _emit_table(state: _RenderState) -> None:
    header, *rows = state.table_rows
    state.nodes.append(Table(header=header, rows=rows))
    state.table_rows = []


def _handle_table_row(state: _RenderState, line: str, trimmed: str) -> None:
    if not _is_separator(trimmed):
        state.table_rows.append(_split_cells(trimmed))
    if state.table_rows and not _table_continues(state):
        _emit_table(state)


# ---------------------------------------------------------------------------
# Single-line blocks
# ---------------------------------------------------------------------------

def _skip(state: _RenderState, line: str, trimmed: str) -> None:
    pass


def _heading_handler(prefix: str, level: int) -> Callable[[_RenderState, str, str], None]:
    def handle(state: _RenderState, line: str, trimmed: str) -> None:
        state.nodes.append(Heading(level=level, spans=tokenize_inline(trimmed[len(prefix):])))

    return handle


def _handle_blockquote(state: _RenderState, line: str, trimmed: str) -> None:
    state.nodes.append(Blockquote(spans=tokenize_inline(trimmed[2:])))


def _handle_ordered_item(state: _RenderState, line: str, trimmed: str) -> None:
    m = _ORDERED_ITEM_RE.match(trimmed)
    state.nodes.append(OrderedListItem(index=m.group(1), spans=tokenize_inline(trimmed[m.end():])))


def _handle_unordered_item(state: _RenderState, line: str, trimmed: str) -> None:
    state.nodes.append(UnorderedListItem(spans=tokenize_inline(trimmed[2:])))


def _handle_paragraph(state: _RenderState, line: str, trimmed: str) -> None:
    state.nodes.append(Paragraph(spans=tokenize_inline(trimmed)))


# ---------------------------------------------------------------------------
# Rule chain
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Rule:
    name: str
    predicate: Callable[[_RenderState, str], bool]
    handler: Callable[[_RenderState, str, str], None]

    def matches(self, state: _RenderState, trimmed: str) -> bool:
        return self.predicate(state, trimmed)

    def handle(self, state: _RenderState, line: str, trimmed: str) -> None:
        self.handler(state, line, trimmed)


def _prefix(prefix: str) -> Callable[[_RenderState, str], bool]:
    return lambda state, trimmed: trimmed.startswith(prefix)


# Evaluated top to bottom; the first matching rule consumes the line.
_RULES: tuple[_Rule, ...] = (
    _Rule("fence", _prefix(FENCE), _toggle_fence),
    _Rule("code", lambda state, trimmed: state.in_code, _append_code_line),
    _Rule("table", lambda state, trimmed: _is_table_row(trimmed), _handle_table_row),
    _Rule("blank", lambda state, trimmed: not trimmed, _skip),
    _Rule("heading-2", _prefix("## "), _heading_handler("## ", 2)),
    _Rule("heading-3", _prefix("### "), _heading_handler("### ", 3)),
    _Rule("heading-4", _prefix("#### "), _heading_handler("#### ", 4)),
    _Rule("blockquote", _prefix("> "), _handle_blockquote),
    _Rule("ordered-item", lambda state, trimmed: bool(_ORDERED_ITEM_RE.match(trimmed)), _handle_ordered_item),
    _Rule("unordered-item", _prefix("- "), _handle_unordered_item),
    _Rule("paragraph", lambda state, trimmed: True, _handle_paragraph),
)
