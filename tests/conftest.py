from __future__ import annotations

from datetime import date
from urllib.parse import quote, unquote

import pytest

from inkwell.sources.fetcher import FetchResponse


def make_doc(title="", date_="", body="", **extra) -> str:
    lines = ["---"]
    if title:
        lines.append(f"title: {title}")
    if date_:
        lines.append(f"date: {date_}")
    for key, value in extra.items():
        lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


class FakeFetcher:
    """In-memory site: ``{category: {filename: text}}``.

    Listings link with absolute hrefs like a real autoindex. Paths in
    ``fail`` raise, paths in ``status`` answer with that status.
    """

    def __init__(self, posts=None, *, fail=(), status=None, extra_links=None):
        self.posts = posts or {}
        self.fail = set(fail)
        self.status = dict(status or {})
        self.extra_links = extra_links or {}
        self.calls = []

    def _listing(self, category):
        names = list(self.posts[category]) + list(self.extra_links.get(category, []))
        links = "".join(f'<a href="http://example.test/posts/{category}/{quote(n)}">{n}</a>' for n in names)
        return f"<html><body><a href='../'>Parent</a>{links}</body></html>"

    async def get(self, path):
        self.calls.append(path)
        if path in self.fail:
            raise ConnectionError(f"boom: {path}")
        if path in self.status:
            return FetchResponse(self.status[path])
        parts = path.split("/")
        if len(parts) == 3 and parts[0] == "posts":
            category, name = parts[1], unquote(parts[2])
            if category not in self.posts:
                return FetchResponse(404)
            if not name:
                return FetchResponse(200, self._listing(category))
            if name in self.posts[category]:
                return FetchResponse(200, self.posts[category][name])
        return FetchResponse(404)

    def close(self):
        pass


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
def today():
    return date(2024, 6, 1)
