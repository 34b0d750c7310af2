import asyncio
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from inkwell.sources.base import CATEGORIES, PostRecord
from inkwell.sources.listing import fetch_markdown_files
from inkwell.util.dates import parse_date


def _sort_key(post: PostRecord, today: date) -> datetime:
    dt = parse_date(post["date"])
    if dt is None:
        # unparseable dates sit with today's posts
        dt = datetime(today.year, today.month, today.day)
    return dt


def sort_posts(posts: Iterable[PostRecord], *, today: Optional[date] = None) -> List[PostRecord]:
    """Newest first. Equal dates keep their incoming order."""
    today = today or date.today()
    return sorted(posts, key=lambda p: _sort_key(p, today), reverse=True)


def _check_category(category: str):
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category: {category!r}")


async def collect_all(
    fetcher,
    categories: Sequence[str] = CATEGORIES,
    *,
    site: Optional[dict] = None,
) -> List[PostRecord]:
    for category in categories:
        _check_category(category)
    collections = await asyncio.gather(
        *(fetch_markdown_files(category, fetcher, site=site) for category in categories)
    )
    results: List[PostRecord] = []
    for posts in collections:
        results.extend(posts)
    return sort_posts(results)


async def collect_category(category: str, fetcher, *, site: Optional[dict] = None) -> List[PostRecord]:
    _check_category(category)
    posts = await fetch_markdown_files(category, fetcher, site=site)
    return sort_posts(posts)


async def find_post(category: str, post_id: str, fetcher, *, site: Optional[dict] = None) -> Optional[PostRecord]:
    # duplicate ids: the later document in the listing wins
    found = None
    for post in await fetch_markdown_files(category, fetcher, site=site):
        if post["id"] == post_id:
            found = post
    return found
