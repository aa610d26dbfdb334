"""Parser package."""

from .base import (
    BlockNode,
    Blockquote,
    Bold,
    Code,
    CodeBlock,
    Heading,
    InlineSpan,
    Italic,
    Link,
    OrderedListItem,
    Paragraph,
    PlainText,
    RenderTree,
    Table,
    UnorderedListItem,
    to_dict,
    tree_to_dicts,
)
from .inline import spans_to_text, tokenize_inline
from .md_parser import render_content

__all__ = [
    "BlockNode",
    "Blockquote",
    "Bold",
    "Code",
    "CodeBlock",
    "Heading",
    "InlineSpan",
    "Italic",
    "Link",
    "OrderedListItem",
    "Paragraph",
    "PlainText",
    "RenderTree",
    "Table",
    "UnorderedListItem",
    "render_content",
    "spans_to_text",
    "tokenize_inline",
    "to_dict",
    "tree_to_dicts",
]
