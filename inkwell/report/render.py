from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup, escape

from inkwell.sources.base import PostRecord, site_settings
from inkwell.util.dates import display_date

TEMPLATES_DIR = Path(__file__).parent / "templates"

# one template per category; every category must appear here exactly once
CARD_TEMPLATES = {
    "poetry": "card_poetry.html.j2",
    "sentiment": "card_sentiment.html.j2",
    "stories": "card_stories.html.j2",
    "prompts": "card_prompts.html.j2",
}

EMPTY_FEED_MESSAGE = "The pages are still being written. \U0001F48C"
EMPTY_COLLECTION_MESSAGE = "No {category} posts yet. \U0001F48C"
ERROR_MESSAGE = "Error loading posts. \U0001F48C"


def nl2br(value: str) -> Markup:
    return Markup("<br>").join(escape(value).split("\n"))


def _make_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["nl2br"] = nl2br
    env.filters["display_date"] = display_date
    return env


env = _make_env()


def _render(name: str, **context) -> str:
    return env.get_template(name).render(**context)


def render_post_card(post: PostRecord, *, site: Optional[dict] = None) -> str:
    """Compact card for one post, chosen by its category."""
    try:
        template = CARD_TEMPLATES[post["category"]]
    except KeyError:
        raise ValueError(f"No card template for category {post.get('category')!r}") from None
    return _render(template, post=post, site=site_settings(site))


def render_story_page(post: Optional[PostRecord], *, site: Optional[dict] = None) -> str:
    if not post:
        return ""
    return _render("story_page.html.j2", post=post, site=site_settings(site))


def render_prompt_page(post: Optional[PostRecord], *, site: Optional[dict] = None) -> str:
    if not post:
        return ""
    return _render("prompt_page.html.j2", post=post, site=site_settings(site))


def render_about(site: Optional[dict] = None) -> str:
    return _render("about.html.j2", site=site_settings(site))


def render_feed_container(cards: Iterable[str]) -> str:
    return _render("feed.html.j2", cards=[Markup(card) for card in cards])


def render_empty_state(category: Optional[str] = None) -> str:
    if category:
        message = EMPTY_COLLECTION_MESSAGE.format(category=category)
    else:
        message = EMPTY_FEED_MESSAGE
    return _render("empty_state.html.j2", message=message)


def render_error_state() -> str:
    return _render("empty_state.html.j2", message=ERROR_MESSAGE)


def render_loading() -> str:
    return _render("loading.html.j2")
