from typing import Dict, Literal, Optional, TypedDict

Category = Literal["poetry", "sentiment", "stories", "prompts"]

# declaration order doubles as the feed tiebreak
CATEGORIES: tuple[Category, ...] = ("poetry", "sentiment", "stories", "prompts")

DEFAULT_SITE = {
    "name": "The Inkwell",
    "author": "Beau Holliday",
    "tagline": "Poetry and Prose by Beau Holliday",
    "placeholder_image": "/assets/media/beauholliday.jpg",
    "extension": ".md",
    "website": "https://www.BeauHolliday.com",
    "location": "Southwest & Montreal",
}


class PostRecord(TypedDict):
    id: str
    category: str        # one of CATEGORIES
    title: str
    date: str            # ISO8601 date, as written in the document
    author: str
    image: str
    cover: str
    excerpt: str
    body: str
    metadata: Dict[str, str]


def site_settings(site: Optional[dict] = None) -> dict:
    merged = dict(DEFAULT_SITE)
    merged.update({k: v for k, v in (site or {}).items() if v is not None})
    return merged
