#!/usr/bin/env python3
import argparse
import asyncio
import logging
from pathlib import Path

from inkwell.report.delivery import FileSink, StreamSink, load_page
from inkwell.util.config import load_config, make_fetcher


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="The Inkwell: render posts into a feed")
    ap.add_argument("--config", default="config.yml")
    ap.add_argument("--page", default="everything",
                    help="everything, about, a category (poetry, sentiment, stories, prompts), story:<id> or prompt:<id>")
    ap.add_argument("--out", default=None, help="write the page to this file instead of stdout")
    ap.add_argument("--base-url", default=None, help="override base_url from config")
    ap.add_argument("--site-root", default=None, help="read posts from this directory instead of over HTTP")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(Path(args.config))
    # CLI overrides win over config and environment
    if args.base_url:
        cfg["base_url"] = args.base_url
        cfg["site_root"] = None
    if args.site_root:
        cfg["site_root"] = Path(args.site_root).expanduser().resolve()

    out_path = None
    if args.out:
        out_path = Path(args.out)
    elif cfg["output"].get("save_dir"):
        slug = args.page.replace(":", "-")
        out_path = Path(cfg["output"]["save_dir"]) / f"{slug}.html"

    sink = FileSink(out_path) if out_path else StreamSink()
    fetcher = make_fetcher(cfg)
    try:
        asyncio.run(load_page(args.page, sink, fetcher, categories=cfg["categories"], site=cfg["site"]))
    finally:
        fetcher.close()

    if out_path:
        print("[inkwell] Wrote:")
        print(f"  - {args.page}: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
