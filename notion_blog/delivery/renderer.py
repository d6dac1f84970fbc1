"""
Post Renderer.

Turns normalized posts into HTML pages with Jinja2. Each content kind maps
to one element: paragraph to <p>, headings to <h2>/<h3>, quote to
<blockquote>, code to <pre><code class="language-..."> for a client-side
highlighter. Missing titles and text render as empty elements.

Standalone usage:
    from notion_blog.delivery.renderer import PostRenderer

    renderer = PostRenderer()
    html = renderer.render_index(posts)
"""

from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape

from notion_blog.collectors.normalization.schema import Post
from notion_blog.config.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

FONT_URL = (
    "https://fonts.googleapis.com/css2"
    "?family=Noto+Sans+JP:wght@400;500;700"
    "&display=swap"
)


# =============================================================================
# Helpers
# =============================================================================


def format_timestamp(
    value: Optional[str],
    tz: str = "UTC",
    fmt: str = "%Y.%m.%d %H:%M",
) -> str:
    """Format an ISO-8601 timestamp for display.

    Args:
        value: Timestamp as returned by Notion, e.g. '2023-01-01T00:00:00.000Z'.
        tz: IANA zone to convert into.
        fmt: strftime format.

    Returns:
        The formatted string, or '' when the value is missing or unparseable.
    """
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("unparseable_timestamp", value=value)
        return ""
    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(ZoneInfo(tz))
        except ZoneInfoNotFoundError:
            logger.warning("unknown_timezone", tz=tz)
    return parsed.strftime(fmt)


# =============================================================================
# Renderer
# =============================================================================


class PostRenderer:
    """Renders the index page and single-post pages."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(enabled_extensions=["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["timestamp"] = self._format
        self._index_tpl = self._env.get_template("index.html")
        self._post_tpl = self._env.get_template("post.html")

    def _format(self, value: Optional[str]) -> str:
        return format_timestamp(
            value,
            tz=self._settings.display_timezone,
            fmt=self._settings.timestamp_format,
        )

    def _context(self) -> dict:
        return {
            "site_title": self._settings.site_title,
            "language": self._settings.site_language,
            "font_url": FONT_URL,
        }

    def render_index(self, posts: Sequence[Post]) -> str:
        """Render every post, in the given order, on one page."""
        return self._index_tpl.render(posts=posts, **self._context())

    def render_post(self, post: Post) -> str:
        """Render a single post page."""
        return self._post_tpl.render(post=post, **self._context())


def _is_safe_slug(slug: str) -> bool:
    """A slug must name a single directory under posts/."""
    if slug in (".", "..") or "/" in slug or "\\" in slug or "\x00" in slug:
        return False
    return not Path(slug).is_absolute()


def write_site(
    posts: Sequence[Post],
    output_dir: Path,
    renderer: Optional[PostRenderer] = None,
) -> list[Path]:
    """Write index.html plus posts/<slug>/index.html for every slugged post.

    Posts without a slug only appear on the index. Slugs that are not a
    single path segment are skipped so nothing lands outside output_dir.

    Returns:
        Paths of the files written.
    """
    renderer = renderer or PostRenderer()
    output_dir.mkdir(parents=True, exist_ok=True)

    index_path = output_dir / "index.html"
    index_path.write_text(renderer.render_index(posts), encoding="utf-8")
    written = [index_path]

    posts_root = (output_dir / "posts").resolve()
    for post in posts:
        if not post.slug:
            continue
        post_dir = output_dir / "posts" / post.slug
        if not _is_safe_slug(post.slug) or post_dir.resolve().parent != posts_root:
            logger.warning("unsafe_slug_skipped", post_id=post.id, slug=post.slug)
            continue
        post_dir.mkdir(parents=True, exist_ok=True)
        post_path = post_dir / "index.html"
        post_path.write_text(renderer.render_post(post), encoding="utf-8")
        written.append(post_path)

    logger.info("site_written", output_dir=str(output_dir), files=len(written))
    return written
