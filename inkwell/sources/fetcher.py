from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote, unquote, urljoin

import requests
from jinja2 import Template

AUTOINDEX = Template(
    "<html><head><title>Index of {{ title }}</title></head><body><ul>"
    "{% for href, name in entries %}<li><a href=\"{{ href }}\">{{ name }}</a></li>{% endfor %}"
    "</ul></body></html>",
    autoescape=True,
)


@dataclass(frozen=True)
class FetchResponse:
    status: int
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpFetcher:
    """Fetch site paths over HTTP.

    requests is blocking, so each call runs in a worker thread and the
    awaiting task suspends without holding up other category fetches.
    Every request is independent; no session is shared between threads.
    Transport errors are raised; discovery decides what to skip.
    """

    def __init__(self, base_url: str, *, user_agent: str = "Inkwell/0.1", timeout: float = 20):
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "text/html, text/markdown;q=0.9, text/plain;q=0.8, */*;q=0.5",
        }

    def url_for(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    def _get(self, path: str) -> FetchResponse:
        r = requests.get(self.url_for(path), headers=self.headers, timeout=self.timeout)
        if not r.encoding or r.encoding.lower() == "iso-8859-1":
            r.encoding = "utf-8"
        return FetchResponse(r.status_code, r.text)

    async def get(self, path: str) -> FetchResponse:
        return await asyncio.to_thread(self._get, path)

    def close(self):
        pass


class LocalFetcher:
    """Serve a site checked out on disk the way a static file server would.

    Directory paths answer with an autoindex page of ``<a href>`` entries,
    files answer with their UTF-8 text, anything else is a 404.
    """

    def __init__(self, root: Path):
        self.root = Path(os.path.expanduser(str(root))).resolve()

    def _resolve(self, path: str) -> Path | None:
        target = (self.root / unquote(path).lstrip("/")).resolve()
        if target != self.root and self.root not in target.parents:
            return None
        return target

    def _index(self, directory: Path, path: str) -> str:
        entries = []
        for entry in sorted(directory.iterdir()):
            name = entry.name + ("/" if entry.is_dir() else "")
            entries.append((quote(name), name))
        return AUTOINDEX.render(title="/" + path.strip("/"), entries=entries)

    def _get(self, path: str) -> FetchResponse:
        target = self._resolve(path)
        if target is None or not target.exists():
            return FetchResponse(404)
        if target.is_dir():
            if not path.endswith("/"):
                return FetchResponse(301)
            return FetchResponse(200, self._index(target, path))
        return FetchResponse(200, target.read_text(encoding="utf-8"))

    async def get(self, path: str) -> FetchResponse:
        return await asyncio.to_thread(self._get, path)

    def close(self):
        pass
