from __future__ import annotations

import logging
from typing import List, Optional
from urllib.parse import quote, unquote, urlsplit

from bs4 import BeautifulSoup

from .base import PostRecord, site_settings
from .frontmatter import parse_markdown

logger = logging.getLogger(__name__)


def category_path(category: str) -> str:
    return f"posts/{category}/"


def extract_markdown_links(listing_html: str, extension: str = ".md") -> List[str]:
    """Document names linked from a directory listing, in listing order.

    Absolute and relative hrefs are treated alike: only the final path
    segment is kept.
    """
    soup = BeautifulSoup(listing_html, "html.parser")
    names = []
    for a in soup.find_all("a", href=True):
        path = urlsplit(a["href"]).path
        if not path.endswith(extension):
            continue
        name = unquote(path.rsplit("/", 1)[-1])
        if name:
            names.append(name)
    return names


async def fetch_markdown_files(category: str, fetcher, *, site: Optional[dict] = None) -> List[PostRecord]:
    """Discover and parse every document published under one category.

    Never raises: a failed listing yields an empty list, a failed or
    rejected document is skipped on its own.
    """
    settings = site_settings(site)
    base = category_path(category)
    try:
        listing = await fetcher.get(base)
        if not listing.ok:
            logger.warning("No listing for %s (status %s)", category, listing.status)
            return []
        filenames = extract_markdown_links(listing.text, settings["extension"])
    except Exception:
        logger.warning("No posts found for %s", category, exc_info=True)
        return []

    posts: List[PostRecord] = []
    for filename in filenames:
        try:
            r = await fetcher.get(base + quote(filename))
            if not r.ok:
                logger.warning("Skipping %s/%s: status %s", category, filename, r.status)
                continue
            post = parse_markdown(r.text, category, filename, site=settings)
        except Exception:
            logger.warning("Error loading %s/%s", category, filename, exc_info=True)
            continue
        if post is None:
            logger.warning("Skipping %s/%s: missing frontmatter", category, filename)
            continue
        posts.append(post)
    logger.debug("Loaded %d %s posts", len(posts), category)
    return posts
