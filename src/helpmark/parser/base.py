"""Render tree produced for one help article body."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any


# ---------------------------------------------------------------------------
# Inline spans
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class PlainText:
    text: str


@dataclass(slots=True)
class Code:
    text: str


@dataclass(slots=True)
class Bold:
    text: str


@dataclass(slots=True)
class Italic:
    text: str


@dataclass(slots=True)
class Link:
    text: str
    href: str


InlineSpan = PlainText | Code | Bold | Italic | Link


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Heading:
    level: int
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass(slots=True)
class Blockquote:
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass(slots=True)
class OrderedListItem:
    index: str
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass(slots=True)
class UnorderedListItem:
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass(slots=True)
class Paragraph:
    spans: list[InlineSpan] = field(default_factory=list)


@dataclass(slots=True)
class CodeBlock:
    language: str = ""
    lines: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Table:
    """Pipe table with raw cell text; cells are tokenized on demand."""

    header: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    def header_spans(self) -> list[list[InlineSpan]]:
        from .inline import tokenize_inline

        return [tokenize_inline(cell) for cell in self.header]

    def row_spans(self) -> list[list[list[InlineSpan]]]:
        from .inline import tokenize_inline

        return [[tokenize_inline(cell) for cell in row] for row in self.rows]


BlockNode = Heading | Blockquote | OrderedListItem | UnorderedListItem | Paragraph | CodeBlock | Table

RenderTree = list[BlockNode]


# ---------------------------------------------------------------------------
# Plain-dict export
# ---------------------------------------------------------------------------

def _type_tag(obj: object) -> str:
    # OrderedListItem -> ordered_list_item
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(obj).__name__).lower()


def _span_dict(span: InlineSpan) -> dict[str, Any]:
    return {"type": _type_tag(span), **asdict(span)}


def to_dict(node: BlockNode) -> dict[str, Any]:
    """Convert a block node into a JSON-friendly dict tagged with ``type``."""
    result: dict[str, Any] = {"type": _type_tag(node)}
    for f in fields(node):
        value = getattr(node, f.name)
        if f.name == "spans":
            result["spans"] = [_span_dict(span) for span in value]
        elif isinstance(value, list):
            result[f.name] = [list(v) if isinstance(v, list) else v for v in value]
        else:
            result[f.name] = value
    return result


def tree_to_dicts(tree: RenderTree) -> list[dict[str, Any]]:
    return [to_dict(node) for node in tree]
