"""Render help articles and their render trees into self-contained HTML pages."""

from __future__ import annotations

import html
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from helpmark.articles import HelpArticle, HelpCatalog
from helpmark.parser.base import (
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
)
from helpmark.parser.md_parser import render_content
from helpmark.utils.logger import get_logger

LOGGER = get_logger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "template"


def article_href(slug: str) -> str:
    return f"{slug}.html"


class HTMLRenderer:
    """Render render trees, article pages and the help center index."""

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = _TEMPLATE_DIR

        loader = FileSystemLoader(str(template_dir))
        self._env = Environment(loader=loader, autoescape=True, trim_blocks=True, lstrip_blocks=True)

    def render_article(
        self,
        article: HelpArticle,
        catalog: HelpCatalog | None = None,
        *,
        dark_mode: bool = False,
    ) -> str:
        category = catalog.category(article.category) if catalog else None
        prev, nxt = catalog.neighbours(article.slug) if catalog and catalog.find(article.slug) else (None, None)

        template = self._env.get_template("article.html")
        return template.render(
            page_title=article.title,
            article=article,
            category=category,
            body=self.render_blocks(render_content(article.content)),
            prev=_nav_item(prev),
            next=_nav_item(nxt),
            sidebar=_sidebar(catalog, article.slug) if catalog else [],
            dark_mode=dark_mode,
        )

    def render_index(
        self,
        catalog: HelpCatalog,
        *,
        query: str | None = None,
        dark_mode: bool = False,
    ) -> str:
        groups = [
            {"category": cat, "articles": [_nav_item(a) for a in catalog.by_category(cat.id)]}
            for cat in catalog.categories
        ]

        popular = []
        for article in catalog.popular():
            cat = catalog.category(article.category)
            popular.append({**_nav_item(article), "category": cat.name if cat else ""})

        results = None
        if query is not None:
            results = [_nav_item(a) for a in catalog.search(query)]

        template = self._env.get_template("index.html")
        return template.render(
            page_title="Help Center",
            groups=groups,
            popular=popular,
            query=query,
            results=results,
            dark_mode=dark_mode,
        )

    def render_blocks(self, tree: RenderTree) -> str:
        return "\n".join(self._render_block(node) for node in tree)

    def _render_block(self, node: BlockNode) -> str:
        if isinstance(node, Heading):
            tag = f"h{node.level}"
            return f'<{tag} class="help-heading">{self._render_spans(node.spans)}</{tag}>'

        if isinstance(node, Blockquote):
            return f'<blockquote class="help-callout">{self._render_spans(node.spans)}</blockquote>'

        if isinstance(node, OrderedListItem):
            return (
                '<div class="help-step">'
                f'<span class="help-step-index">{html.escape(node.index)}</span>'
                f"<p>{self._render_spans(node.spans)}</p>"
                "</div>"
            )

        if isinstance(node, UnorderedListItem):
            return (
                '<div class="help-bullet"><span class="help-bullet-dot"></span>'
                f"<p>{self._render_spans(node.spans)}</p></div>"
            )

        if isinstance(node, Paragraph):
            return f'<p class="help-paragraph">{self._render_spans(node.spans)}</p>'

        if isinstance(node, CodeBlock):
            return self._render_code_block(node)

        if isinstance(node, Table):
            return self._render_table(node)

        LOGGER.warning("Skipping unknown block node %r", node)
        return ""

    def _render_code_block(self, block: CodeBlock) -> str:
        label = ""
        if block.language:
            label = f'<div class="help-code-lang">{html.escape(block.language)}</div>'
        code = html.escape("\n".join(block.lines))
        return f'<div class="help-code">{label}<pre><code>{code}</code></pre></div>'

    def _render_table(self, block: Table) -> str:
        head_cells = "".join(f"<th>{self._render_spans(spans)}</th>" for spans in block.header_spans())
        head_html = f"<thead><tr>{head_cells}</tr></thead>"

        row_html = ""
        if block.rows:
            rows = []
            for row in block.row_spans():
                cells = "".join(f"<td>{self._render_spans(spans)}</td>" for spans in row)
                rows.append(f"<tr>{cells}</tr>")
            row_html = "<tbody>" + "".join(rows) + "</tbody>"

        return f'<div class="help-table-wrap"><table class="help-table">{head_html}{row_html}</table></div>'

    def _render_spans(self, spans: list[InlineSpan]) -> str:
        return "".join(self._render_span(span) for span in spans)

    def _render_span(self, span: InlineSpan) -> str:
        if isinstance(span, PlainText):
            return html.escape(span.text)
        if isinstance(span, Code):
            return f'<code class="help-inline-code">{html.escape(span.text)}</code>'
        if isinstance(span, Bold):
            return f"<strong>{html.escape(span.text)}</strong>"
        if isinstance(span, Italic):
            return f"<em>{html.escape(span.text)}</em>"
        if isinstance(span, Link):
            return f'<a class="help-link" href="{_resolve_href(span.href)}">{html.escape(span.text)}</a>'
        return ""


def _nav_item(article: HelpArticle | None) -> dict | None:
    if article is None:
        return None
    return {
        "slug": article.slug,
        "title": article.title,
        "description": article.description,
        "href": article_href(article.slug),
    }


def _sidebar(catalog: HelpCatalog, current: str) -> list[dict]:
    """Category groups for the article page sidebar, skipping empty categories."""
    groups = []
    for cat in catalog.categories:
        items = [{**_nav_item(a), "current": a.slug == current} for a in catalog.by_category(cat.id)]
        if items:
            groups.append({"category": cat, "articles": items})
    return groups


def _resolve_href(href: str) -> str:
    """Point ``/help/<slug>`` links at the generated sibling page."""
    slug = href[len("/help/"):] if href.startswith("/help/") else ""
    if slug and "/" not in slug:
        href = article_href(slug)
    return html.escape(href, quote=True)
