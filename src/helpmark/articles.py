"""Help center articles and categories loaded from markdown files."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from pathlib import Path

from helpmark.utils.logger import get_logger

LOGGER = get_logger(__name__)

WORDS_PER_MINUTE = 200
MIN_SEARCH_LENGTH = 2

DEFAULT_CONTENT_DIR = Path(__file__).resolve().parent / "content"

POPULAR_SLUGS: tuple[str, ...] = (
    "create-your-store",
    "setup-gmail-app-password",
    "setup-email-campaigns",
    "setup-tracking-pixels",
    "customize-store-theme",
    "custom-smtp-setup",
)


class ArticleNotFoundError(LookupError):
    """Raised when a slug does not name an article in the catalog."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"No help article with slug {slug!r}")
        self.slug = slug


@dataclass(slots=True)
class HelpCategory:
    id: str
    name: str
    icon: str = "BookOpen"
    description: str = ""


DEFAULT_CATEGORIES: tuple[HelpCategory, ...] = (
    HelpCategory("getting-started", "Getting Started", "Rocket", "Learn the basics and set up your store"),
    HelpCategory("products", "Products & Store", "ShoppingBag", "Add and manage your digital products"),
    HelpCategory("marketing", "Marketing & Email", "Mail", "Grow your audience and send campaigns"),
    HelpCategory("analytics", "Analytics & Tracking", "BarChart3", "Understand your traffic and conversions"),
    HelpCategory("customization", "Customization", "Palette", "Make your store look amazing"),
    HelpCategory("account", "Account & Settings", "Settings", "Manage your account and security"),
)


@dataclass(slots=True)
class HelpArticle:
    slug: str
    title: str
    content: str
    description: str = ""
    category: str = ""
    icon: str = "BookOpen"

    @property
    def read_time(self) -> int:
        """Estimated reading time in whole minutes (at least one)."""
        # Halves round up.
        return max(1, math.floor(len(self.content.split()) / WORDS_PER_MINUTE + 0.5))


# ---------------------------------------------------------------------------
# Frontmatter
# ---------------------------------------------------------------------------

_FRONTMATTER_KEYS = {"slug", "title", "description", "category", "icon"}
_FIRST_HEADING_RE = re.compile(r"^\s*##\s+(.+?)\s*$", re.MULTILINE)


def _split_frontmatter(text: str) -> tuple[str, str]:
    """Split a leading ``---`` block from the article body."""
    if not text.startswith("---"):
        return "", text
    end = text.find("\n---", 3)
    if end == -1:
        return "", text
    body_start = text.find("\n", end + 4)
    body = text[body_start + 1:] if body_start != -1 else ""
    return text[3:end].strip(), body


def _parse_frontmatter(raw: str) -> dict[str, str]:
    """Read flat ``key: value`` pairs; unknown keys are ignored."""
    result: dict[str, str] = {}
    for line in raw.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        m = re.match(r"^([a-zA-Z_]\w*)\s*:\s*(.*)", line)
        if not m:
            LOGGER.debug("Ignoring frontmatter line %r", line)
            continue

        key = m.group(1).lower()
        value = m.group(2).strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]

        if key in _FRONTMATTER_KEYS:
            result[key] = value
    return result


def load_article(path: Path) -> HelpArticle:
    """Load one article file.

    Slug defaults to the file stem; title defaults to the first ``##``
    heading, then to the stem.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ValueError(f"{path.name} is not UTF-8 text") from e

    frontmatter, body = _split_frontmatter(raw)
    meta = _parse_frontmatter(frontmatter)
    body = body.strip()

    title = meta.get("title", "")
    if not title:
        m = _FIRST_HEADING_RE.search(body)
        title = m.group(1) if m else path.stem

    return HelpArticle(
        slug=meta.get("slug") or path.stem,
        title=title,
        content=body,
        description=meta.get("description", ""),
        category=meta.get("category", ""),
        icon=meta.get("icon") or "BookOpen",
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass
class HelpCatalog:
    """Ordered collection of articles with lookup, navigation and search."""

    articles: list[HelpArticle] = field(default_factory=list)
    categories: list[HelpCategory] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))

    @classmethod
    def from_directory(cls, root: Path, categories: list[HelpCategory] | None = None) -> HelpCatalog:
        root = Path(root)
        if not root.is_dir():
            raise ValueError(f"Content directory not found: {root}")

        cats = list(categories) if categories is not None else list(DEFAULT_CATEGORIES)
        order = {cat.id: idx for idx, cat in enumerate(cats)}

        articles = [load_article(p) for p in sorted(root.glob("*.md"))]
        # sorted() is stable, so file order is kept within a category.
        articles.sort(key=lambda a: order.get(a.category, len(order)))

        slugs = [a.slug for a in articles]
        duplicates = sorted({s for s in slugs if slugs.count(s) > 1})
        if duplicates:
            raise ValueError(f"Duplicate article slugs in {root}: {', '.join(duplicates)}")

        LOGGER.debug("Loaded %d articles from %s", len(articles), root)
        return cls(articles=articles, categories=cats)

    def find(self, slug: str) -> HelpArticle | None:
        return next((a for a in self.articles if a.slug == slug), None)

    def get(self, slug: str) -> HelpArticle:
        article = self.find(slug)
        if article is None:
            raise ArticleNotFoundError(slug)
        return article

    def category(self, category_id: str) -> HelpCategory | None:
        return next((c for c in self.categories if c.id == category_id), None)

    def by_category(self, category_id: str) -> list[HelpArticle]:
        return [a for a in self.articles if a.category == category_id]

    def popular(self, slugs: tuple[str, ...] = POPULAR_SLUGS) -> list[HelpArticle]:
        """Featured articles in the given order; slugs not in the catalog are skipped."""
        found = (self.find(slug) for slug in slugs)
        return [a for a in found if a is not None]

    def neighbours(self, slug: str) -> tuple[HelpArticle | None, HelpArticle | None]:
        """Return the (previous, next) articles around *slug* in catalog order."""
        article = self.get(slug)
        idx = self.articles.index(article)
        prev = self.articles[idx - 1] if idx > 0 else None
        nxt = self.articles[idx + 1] if idx < len(self.articles) - 1 else None
        return prev, nxt

    def search(self, query: str, *, include_content: bool = True) -> list[HelpArticle]:
        q = query.strip().lower()
        if len(q) < MIN_SEARCH_LENGTH:
            return []

        def hit(article: HelpArticle) -> bool:
            if q in article.title.lower() or q in article.description.lower():
                return True
            return include_content and q in article.content.lower()

        return [a for a in self.articles if hit(a)]


def default_catalog() -> HelpCatalog:
    """Catalog of the articles bundled with the package."""
    return HelpCatalog.from_directory(DEFAULT_CONTENT_DIR)
