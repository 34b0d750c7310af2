from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, TextIO

from inkwell.report.feed import render_collection, render_feed, render_prompt, render_story
from inkwell.report.render import render_about, render_error_state, render_loading
from inkwell.sources.base import CATEGORIES
from inkwell.util.paths import ensure_dir


class ContentSink(Protocol):
    def replace(self, markup: str) -> None: ...


class MemorySink:
    """Keeps every replacement; ``content`` is what a reader would see now."""

    def __init__(self):
        self.history: List[str] = []

    def replace(self, markup: str) -> None:
        self.history.append(markup)

    @property
    def content(self) -> str:
        return self.history[-1] if self.history else ""


class FileSink:
    """Write the current page to a single HTML file.

    The loading placeholder is written too, so a viewer that refreshes
    mid-render sees it rather than a stale page.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def replace(self, markup: str) -> None:
        ensure_dir(self.path.parent)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(markup, encoding="utf-8")
        tmp.replace(self.path)


class StreamSink:
    """Print only the final page; the loading placeholder is not worth a write."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._loading = render_loading()

    def replace(self, markup: str) -> None:
        if markup == self._loading:
            return
        self.stream.write(markup)
        self.stream.write("\n")
        self.stream.flush()


async def load_page(
    page: str,
    sink: ContentSink,
    fetcher,
    *,
    categories: Sequence[str] = CATEGORIES,
    site: Optional[dict] = None,
) -> str:
    """Render ``page`` into ``sink`` and return the markup.

    Pages: ``everything``, ``about``, a category name, ``story:<id>`` or
    ``prompt:<id>``. Fetches run to completion once started.
    """
    sink.replace(render_loading())
    kind, _, ident = page.partition(":")
    if page == "everything":
        markup = await render_feed(fetcher, categories=categories, site=site)
    elif page == "about":
        markup = render_about(site)
    elif page in categories:
        markup = await render_collection(page, fetcher, site=site)
    elif kind == "story" and ident:
        markup = await render_story(ident, fetcher, site=site)
    elif kind == "prompt" and ident:
        markup = await render_prompt(ident, fetcher, site=site)
    else:
        markup = render_error_state()
    sink.replace(markup)
    return markup
