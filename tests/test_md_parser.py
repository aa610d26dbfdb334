"""Tests for the help article block parser.

Covers:
- Headings (##, ###, ####) and the unhandled single # line
- Blockquotes, ordered and unordered list items, paragraphs
- Fenced code blocks (language tag, verbatim lines, unterminated fences)
- Pipe tables (separator rows, ragged rows, header-only tables)
- Ordering and graceful handling of malformed input
- Plain-dict export of the render tree
"""

from __future__ import annotations

import pytest

from helpmark.parser.base import (
    Blockquote,
    Bold,
    Code,
    CodeBlock,
    Heading,
    Italic,
    Link,
    OrderedListItem,
    Paragraph,
    PlainText,
    Table,
    UnorderedListItem,
    to_dict,
    tree_to_dicts,
)
from helpmark.parser.md_parser import render_content


# ---------------------------------------------------------------------------
# Reference scenarios
# ---------------------------------------------------------------------------

def test_heading_and_inline_paragraph() -> None:
    tree = render_content("## Hello\nThis is **bold** and *italic*.\n")

    assert tree == [
        Heading(level=2, spans=[PlainText("Hello")]),
        Paragraph(spans=[
            PlainText("This is "),
            Bold("bold"),
            PlainText(" and "),
            Italic("italic"),
            PlainText("."),
        ]),
    ]


def test_fenced_code_with_language() -> None:
    assert render_content("```js\nconst x = 1;\n```") == [CodeBlock(language="js", lines=["const x = 1;"])]


def test_simple_table() -> None:
    tree = render_content("| A | B |\n|---|---|\n| 1 | 2 |\n")
    assert tree == [Table(header=["A", "B"], rows=[["1", "2"]])]


def test_ordered_list() -> None:
    assert render_content("1. First\n2. Second\n") == [
        OrderedListItem(index="1", spans=[PlainText("First")]),
        OrderedListItem(index="2", spans=[PlainText("Second")]),
    ]


def test_blockquote() -> None:
    assert render_content("> A quote\n") == [Blockquote(spans=[PlainText("A quote")])]


def test_link_only_paragraph() -> None:
    assert render_content("[Click](https://example.com)") == [
        Paragraph(spans=[Link(text="Click", href="https://example.com")])
    ]


# ---------------------------------------------------------------------------
# Single-line blocks
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    ("line", "level", "text"),
    [
        ("## Two", 2, "Two"),
        ("### Three", 3, "Three"),
        ("#### Four", 4, "Four"),
        ("   ### Indented", 3, "Indented"),
    ],
)
def test_heading_levels(line: str, level: int, text: str) -> None:
    assert render_content(line) == [Heading(level=level, spans=[PlainText(text)])]


def test_single_hash_is_a_paragraph() -> None:
    assert render_content("# Title") == [Paragraph(spans=[PlainText("# Title")])]


def test_heading_content_is_tokenized() -> None:
    tree = render_content("### Step 1: Use `git`")
    assert tree == [Heading(level=3, spans=[PlainText("Step 1: Use "), Code("git")])]


def test_ordered_index_is_not_renumbered() -> None:
    tree = render_content("1. a\n1. b\n3. c\n10. d")
    assert [node.index for node in tree] == ["1", "1", "3", "10"]


def test_ordered_item_requires_space_after_dot() -> None:
    assert render_content("2.5 percent") == [Paragraph(spans=[PlainText("2.5 percent")])]


def test_ordered_item_needs_ascii_digits() -> None:
    assert render_content("٣. x") == [Paragraph(spans=[PlainText("٣. x")])]
    assert render_content("１. x") == [Paragraph(spans=[PlainText("１. x")])]


def test_unordered_item_with_inline_markup() -> None:
    tree = render_content("  - Go to **Dashboard > Products**")
    assert tree == [UnorderedListItem(spans=[PlainText("Go to "), Bold("Dashboard > Products")])]


def test_markers_without_space_fall_through_to_paragraph() -> None:
    tree = render_content("-dash\n>quote\n##tight")
    assert all(isinstance(node, Paragraph) for node in tree)
    assert [node.spans[0].text for node in tree] == ["-dash", ">quote", "##tight"]


def test_blank_lines_produce_nothing() -> None:
    assert render_content("\n\n   \n\t\n") == []


# ---------------------------------------------------------------------------
# Fenced code
# ---------------------------------------------------------------------------

def test_code_block_keeps_lines_verbatim() -> None:
    text = "```\n  indented\n\n## not a heading\n| a | b |\n```"
    assert render_content(text) == [
        CodeBlock(language="", lines=["  indented", "", "## not a heading", "| a | b |"])
    ]


def test_empty_code_block() -> None:
    assert render_content("```sh\n```") == [CodeBlock(language="sh", lines=[])]


def test_fence_language_is_trimmed() -> None:
    assert render_content("```   python  \npass\n```")[0].language == "python"


def test_fence_balance() -> None:
    text = "```a\none\n```\nbetween\n```b\ntwo\nthree\n```"
    tree = render_content(text)

    blocks = [node for node in tree if isinstance(node, CodeBlock)]
    assert [(b.language, b.lines) for b in blocks] == [("a", ["one"]), ("b", ["two", "three"])]
    assert tree[1] == Paragraph(spans=[PlainText("between")])


def test_any_fence_line_closes_an_open_block() -> None:
    tree = render_content("```\nx\n```trailing\nafter")
    assert tree == [CodeBlock(language="", lines=["x"]), Paragraph(spans=[PlainText("after")])]


def test_unterminated_fence_is_dropped() -> None:
    tree = render_content("intro\n```py\nx = 1\ny = 2")
    assert tree == [Paragraph(spans=[PlainText("intro")])]


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def test_table_cells_receive_inline_spans() -> None:
    tree = render_content("| Field | Example |\n|-------|---------|\n| **SMTP Host** | `smtp.example.com` |")
    table = tree[0]

    assert table.header == ["Field", "Example"]
    assert table.rows == [["**SMTP Host**", "`smtp.example.com`"]]
    assert table.row_spans() == [[[Bold("SMTP Host")], [Code("smtp.example.com")]]]
    assert table.header_spans() == [[PlainText("Field")], [PlainText("Example")]]


def test_separator_rows_never_become_rows() -> None:
    text = "| A | B |\n| --- | --- |\n| 1 | 2 |\n|---|---|\n| 3 | 4 |"
    tree = render_content(text)
    assert tree == [Table(header=["A", "B"], rows=[["1", "2"], ["3", "4"]])]


def test_header_with_separator_at_end_of_document() -> None:
    assert render_content("| A | B |\n|---|---|") == [Table(header=["A", "B"], rows=[])]


def test_isolated_row_becomes_header_only_table() -> None:
    assert render_content("| lonely |") == [Table(header=["lonely"], rows=[])]


def test_ragged_rows_pass_through() -> None:
    tree = render_content("| a | b |\n|---|---|\n| 1 |\n| 1 | 2 | 3 |")
    assert tree == [Table(header=["a", "b"], rows=[["1"], ["1", "2", "3"]])]


def test_inner_empty_cells_are_kept() -> None:
    assert render_content("| a |  | b |")[0].header == ["a", "", "b"]


def test_table_ends_at_non_table_line() -> None:
    tree = render_content("| A |\n|---|\n| 1 |\nafter\n| B |\n|---|\n| 2 |")
    assert tree == [
        Table(header=["A"], rows=[["1"]]),
        Paragraph(spans=[PlainText("after")]),
        Table(header=["B"], rows=[["2"]]),
    ]


def test_blank_line_splits_tables() -> None:
    tree = render_content("| A |\n\n| B |")
    assert tree == [Table(header=["A"]), Table(header=["B"])]


def test_separator_without_header_is_dropped() -> None:
    assert render_content("|---|\ntext") == [Paragraph(spans=[PlainText("text")])]


def test_colon_alignment_row_is_kept_as_a_row() -> None:
    tree = render_content("| A |\n|:--|\n| 1 |")
    assert tree == [Table(header=["A"], rows=[[":--"], ["1"]])]


# ---------------------------------------------------------------------------
# Ordering and malformed input
# ---------------------------------------------------------------------------

def test_document_order_is_preserved() -> None:
    text = """\
## Title

Intro paragraph.

- bullet
1. step
> note

```
code
```

| H |
|---|
| r |
#### Tail
"""
    kinds = [type(node).__name__ for node in render_content(text)]
    assert kinds == [
        "Heading",
        "Paragraph",
        "UnorderedListItem",
        "OrderedListItem",
        "Blockquote",
        "CodeBlock",
        "Table",
        "Heading",
    ]


@pytest.mark.parametrize("text", ["", "`", "```", "|", "||", "*", "**", "[", "[a](", "> ", "1.", "\n```\n|"])
def test_malformed_input_never_raises(text: str) -> None:
    assert isinstance(render_content(text), list)


def test_single_pipe_yields_empty_table() -> None:
    assert render_content("|") == [Table(header=[], rows=[])]


def test_calls_do_not_share_state() -> None:
    first = render_content("```\nopen")
    second = render_content("plain")
    assert first == []
    assert second == [Paragraph(spans=[PlainText("plain")])]


# ---------------------------------------------------------------------------
# Dict export
# ---------------------------------------------------------------------------

def test_to_dict_tags_nodes_and_spans() -> None:
    node = Heading(level=2, spans=[PlainText("Hi "), Link(text="docs", href="/help")])
    assert to_dict(node) == {
        "type": "heading",
        "level": 2,
        "spans": [
            {"type": "plain_text", "text": "Hi "},
            {"type": "link", "text": "docs", "href": "/help"},
        ],
    }


def test_tree_to_dicts_for_code_and_table() -> None:
    tree = render_content("```js\nx\n```\n| A |\n|---|\n| 1 |\n3. three")
    assert tree_to_dicts(tree) == [
        {"type": "code_block", "language": "js", "lines": ["x"]},
        {"type": "table", "header": ["A"], "rows": [["1"]]},
        {"type": "ordered_list_item", "index": "3", "spans": [{"type": "plain_text", "text": "three"}]},
    ]
