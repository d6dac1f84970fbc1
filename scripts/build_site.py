#!/usr/bin/env python3
"""Fetch the published posts once and write the blog as static HTML.

Usage:
    # Render into ./dist
    python scripts/build_site.py

    # Render somewhere else
    python scripts/build_site.py --output public

    # Print the normalized posts as JSON instead of rendering
    python scripts/build_site.py --json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import structlog

from notion_blog.collectors.notion.collector import NotionCollector
from notion_blog.config import Settings, get_settings
from notion_blog.core.exceptions import NotionBlogError
from notion_blog.core.log_config import configure_logging
from notion_blog.delivery.renderer import write_site

logger = structlog.get_logger(__name__)


async def build(settings: Settings, output: Path, as_json: bool) -> int:
    """Run one fetch and write the result. Returns the process exit code."""
    try:
        async with NotionCollector(settings=settings) as collector:
            posts = await collector.fetch_all()
    except NotionBlogError as e:
        logger.error("build_failed", error=str(e), error_type=type(e).__name__)
        return 1

    if as_json:
        payload = [post.model_dump(mode="json", by_alias=True) for post in posts]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0

    write_site(posts, output)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Build the blog from Notion")
    parser.add_argument(
        "--output", "-o", type=Path, default=Path("dist"), help="Output directory"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print normalized posts as JSON"
    )
    parser.add_argument(
        "--policy",
        choices=["strict", "isolate"],
        help="Override BLOCK_FETCH_POLICY for this run",
    )
    args = parser.parse_args()

    settings = get_settings()
    if args.policy:
        settings = settings.model_copy(update={"block_fetch_policy": args.policy})
    configure_logging(settings.log_level, json_logs=False)

    return asyncio.run(build(settings, args.output, args.json))


if __name__ == "__main__":
    sys.exit(main())
