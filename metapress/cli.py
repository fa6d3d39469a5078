from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from metapress import config
from metapress.exceptions import ContentError
from metapress.models.listing import SitemapEntry
from metapress.services.content_store import ContentStore


logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load the content trees and report what would be published.")
    parser.add_argument("--posts", type=Path, default=config.POSTS_DIR, help="Posts directory")
    parser.add_argument("--pages", type=Path, default=config.PAGES_DIR, help="Pages directory")
    parser.add_argument("--base-url", default=config.SITE_URL, help="Absolute site URL used in the sitemap")
    parser.add_argument("--sitemap", type=Path, default=None, help="Write sitemap.xml to this path")
    parser.add_argument(
        "--lenient",
        action="store_true",
        help="Accept metadata keys that are not recognised",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every loaded file")
    return parser.parse_args(argv)


def prepare_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(config.TEMPLATES_DIR),
        autoescape=select_autoescape(["html", "xml"]),
    )


def write_sitemap(destination: Path, entries: Sequence[SitemapEntry]) -> None:
    template = prepare_environment().get_template("sitemap.xml")
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(template.render(entries=entries), encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = ContentStore(args.posts, args.pages, base_url=args.base_url, strict_keys=not args.lenient)
    try:
        snapshot = store.reload()
    except (ContentError, OSError) as exc:
        print(f"Content check failed: {exc}", file=sys.stderr)
        return 1

    print(f"posts: {len(snapshot.posts)}")
    print(f"pages: {len(snapshot.pages)}")
    print(f"tags: {len(snapshot.tags())}")
    print(f"categories: {len(snapshot.categories())}")
    print(f"sitemap entries: {len(store.sitemap())}")

    if args.sitemap is not None:
        write_sitemap(args.sitemap, store.sitemap())
        logger.info("Wrote %s", args.sitemap)
    return 0


if __name__ == "__main__":
    sys.exit(main())
