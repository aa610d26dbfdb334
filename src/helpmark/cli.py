"""helpmark CLI entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

import click

from helpmark.articles import DEFAULT_CONTENT_DIR, ArticleNotFoundError, HelpCatalog, load_article
from helpmark.parser.base import tree_to_dicts
from helpmark.parser.md_parser import render_content
from helpmark.renderer.html_renderer import HTMLRenderer, article_href
from helpmark.utils.logger import get_logger, set_verbose

LOGGER = get_logger(__name__)

_CONTENT_DIR_TYPE = click.Path(exists=True, file_okay=False, path_type=Path)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """Render AffiliGrid help center articles to HTML."""
    set_verbose(verbose)


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output", "-o", type=click.Path(path_type=Path), required=True, help="Output HTML path")
@click.option("--dark-mode", is_flag=True, help="Enable dark mode stylesheet")
def render(input_path: Path, output: Path, dark_mode: bool) -> None:
    """Render a single article file into a standalone HTML page."""
    article = _load(input_path)
    html = HTMLRenderer().render_article(article, dark_mode=dark_mode)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    click.echo(f"Rendered: {output}")


@main.command()
@click.argument(
    "content_dir",
    type=_CONTENT_DIR_TYPE,
    default=DEFAULT_CONTENT_DIR,
    envvar="HELPMARK_CONTENT_DIR",
)
@click.option("--output", "-o", type=click.Path(file_okay=False, path_type=Path), required=True, help="Output directory")
@click.option("--dark-mode", is_flag=True, help="Enable dark mode stylesheet")
def build(content_dir: Path, output: Path, dark_mode: bool) -> None:
    """Render every article in CONTENT_DIR plus an index page."""
    catalog = _catalog(content_dir)
    renderer = HTMLRenderer()

    output.mkdir(parents=True, exist_ok=True)
    for article in catalog.articles:
        page = renderer.render_article(article, catalog, dark_mode=dark_mode)
        (output / article_href(article.slug)).write_text(page, encoding="utf-8")
        LOGGER.debug("Wrote %s", article.slug)

    (output / "index.html").write_text(renderer.render_index(catalog, dark_mode=dark_mode), encoding="utf-8")
    click.echo(f"Built {len(catalog.articles)} articles into {output}")


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--indent", type=click.IntRange(min=0), default=2, show_default=True, help="JSON indentation")
def tree(input_path: Path, indent: int) -> None:
    """Print the render tree of an article as JSON."""
    article = _load(input_path)
    nodes = tree_to_dicts(render_content(article.content))
    click.echo(json.dumps(nodes, indent=indent or None, ensure_ascii=False))


@main.command()
@click.argument("query")
@click.option(
    "--content-dir",
    type=_CONTENT_DIR_TYPE,
    default=DEFAULT_CONTENT_DIR,
    envvar="HELPMARK_CONTENT_DIR",
    help="Directory of article files",
)
@click.option("--titles-only", is_flag=True, help="Do not search article bodies")
def search(query: str, content_dir: Path, titles_only: bool) -> None:
    """List articles whose title, description or body contains QUERY."""
    hits = _catalog(content_dir).search(query, include_content=not titles_only)
    if not hits:
        click.echo(f'No results for "{query}"')
        return
    for article in hits:
        click.echo(f"{article.slug}\t{article.title}")


@main.command()
@click.argument("slug")
@click.option("--content-dir", type=_CONTENT_DIR_TYPE, default=DEFAULT_CONTENT_DIR, envvar="HELPMARK_CONTENT_DIR")
def show(slug: str, content_dir: Path) -> None:
    """Print an article's metadata and its previous/next neighbours."""
    catalog = _catalog(content_dir)
    try:
        article = catalog.get(slug)
    except ArticleNotFoundError as e:
        raise click.ClickException(str(e)) from e

    prev, nxt = catalog.neighbours(slug)
    category = catalog.category(article.category)
    click.echo(f"{article.title} ({article.read_time} min read)")
    click.echo(f"category: {category.name if category else article.category or '-'}")
    click.echo(f"previous: {prev.slug if prev else '-'}")
    click.echo(f"next: {nxt.slug if nxt else '-'}")


def _load(path: Path):
    try:
        return load_article(path)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _catalog(content_dir: Path) -> HelpCatalog:
    try:
        return HelpCatalog.from_directory(content_dir)
    except ValueError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":  # pragma: no cover
    main()
