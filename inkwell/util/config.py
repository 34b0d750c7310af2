from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from inkwell.sources.base import CATEGORIES, DEFAULT_SITE
from inkwell.sources.fetcher import HttpFetcher, LocalFetcher
from inkwell.util.paths import resolve_path

CONFIG_DEFAULTS = {
    "base_url": "http://localhost:8000/",
    "site_root": None,          # serve posts from disk instead of base_url
    "user_agent": "Inkwell/0.1",
    "timeout": 20,
    "categories": list(CATEGORIES),
    "site": dict(DEFAULT_SITE),
    "output": {"save_dir": None},
}

ENV_OVERRIDES = {
    "INKWELL_BASE_URL": "base_url",
    "INKWELL_SITE_ROOT": "site_root",
    "INKWELL_USER_AGENT": "user_agent",
}


def load_config(path: Optional[Path] = None) -> dict:
    """Merge defaults <- YAML file <- environment (.env honoured).

    Relative ``site_root`` and ``output.save_dir`` resolve against the
    config file's directory.
    """
    base_dir = Path.cwd()
    file_cfg: dict = {}
    if path is not None:
        path = Path(path)
        base_dir = path.resolve().parent
        if path.exists():
            file_cfg = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    load_dotenv(base_dir / ".env")

    cfg = dict(CONFIG_DEFAULTS)
    cfg.update({k: v for k, v in file_cfg.items() if k not in ("site", "output")})
    cfg["categories"] = list(cfg["categories"])
    cfg["site"] = {**CONFIG_DEFAULTS["site"], **(file_cfg.get("site") or {})}
    cfg["output"] = {**CONFIG_DEFAULTS["output"], **(file_cfg.get("output") or {})}

    for env_key, cfg_key in ENV_OVERRIDES.items():
        if os.environ.get(env_key):
            cfg[cfg_key] = os.environ[env_key]

    unknown = [c for c in cfg["categories"] if c not in CATEGORIES]
    if unknown:
        raise ValueError(f"Unknown categories in config: {', '.join(unknown)}")

    if cfg.get("site_root"):
        cfg["site_root"] = resolve_path(str(cfg["site_root"]), base_dir)
    if cfg["output"].get("save_dir"):
        cfg["output"]["save_dir"] = resolve_path(str(cfg["output"]["save_dir"]), base_dir)
    return cfg


def make_fetcher(cfg: dict):
    if cfg.get("site_root"):
        return LocalFetcher(cfg["site_root"])
    return HttpFetcher(cfg["base_url"], user_agent=cfg["user_agent"], timeout=float(cfg["timeout"]))
