"""Blog endpoints: HTML pages and the JSON post list."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse

from notion_blog.api.dependencies import get_posts, get_renderer
from notion_blog.collectors.normalization.schema import Post
from notion_blog.delivery.renderer import PostRenderer

logger = structlog.get_logger(__name__)

pages_router = APIRouter(tags=["Pages"])
api_router = APIRouter(prefix="/posts", tags=["Posts"])


@pages_router.get("/", response_class=HTMLResponse)
async def index(
    posts: list[Post] = Depends(get_posts),
    renderer: PostRenderer = Depends(get_renderer),
) -> HTMLResponse:
    """Render every published post, newest first."""
    return HTMLResponse(renderer.render_index(posts))


@pages_router.get("/posts/{slug}", response_class=HTMLResponse)
async def post_page(
    slug: str,
    posts: list[Post] = Depends(get_posts),
    renderer: PostRenderer = Depends(get_renderer),
) -> HTMLResponse:
    """Render a single post by slug."""
    for post in posts:
        if post.slug == slug:
            return HTMLResponse(renderer.render_post(post))

    logger.info("post_not_found", slug=slug)
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Post not found: {slug}",
    )


@api_router.get("", response_model=list[Post])
async def list_posts(posts: list[Post] = Depends(get_posts)) -> list[Post]:
    """Return the normalized posts as JSON (camelCase timestamp keys)."""
    return posts
