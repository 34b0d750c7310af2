import logging
from typing import Optional, Sequence

from inkwell.aggregator.aggregator import collect_all, collect_category, find_post
from inkwell.sources.base import CATEGORIES
from inkwell.report.render import (
    render_empty_state,
    render_error_state,
    render_feed_container,
    render_post_card,
    render_prompt_page,
    render_story_page,
)

logger = logging.getLogger(__name__)


def _cards(posts, site):
    return render_feed_container(render_post_card(post, site=site) for post in posts)


async def render_feed(fetcher, *, categories: Sequence[str] = CATEGORIES, site: Optional[dict] = None) -> str:
    """Every category merged into one date-ordered feed."""
    try:
        posts = await collect_all(fetcher, categories, site=site)
        if not posts:
            return render_empty_state()
        return _cards(posts, site)
    except Exception:
        logger.exception("Error rendering feed")
        return render_error_state()


async def render_collection(category: str, fetcher, *, site: Optional[dict] = None) -> str:
    try:
        posts = await collect_category(category, fetcher, site=site)
        if not posts:
            return render_empty_state(category)
        return _cards(posts, site)
    except Exception:
        logger.exception("Error rendering collection %s", category)
        return render_error_state()


async def render_story(post_id: str, fetcher, *, site: Optional[dict] = None) -> str:
    post = await find_post("stories", post_id, fetcher, site=site)
    return render_story_page(post, site=site)


async def render_prompt(post_id: str, fetcher, *, site: Optional[dict] = None) -> str:
    post = await find_post("prompts", post_id, fetcher, site=site)
    return render_prompt_page(post, site=site)
