from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Set, Tuple

from metapress import config
from metapress.exceptions import EmptyContentError, ValidationError
from metapress.models.content import Page, Post, newest_first, oldest_first
from metapress.models.listing import PostPage, SitemapEntry
from metapress.services.meta_loader import load_tree
from metapress.services.multi_index import MultiIndex
from metapress.services.paginator import paginate
from metapress.services.record_builder import build_page, build_post
from metapress.services.sitemap import build_sitemap


logger = logging.getLogger(__name__)


class Snapshot:
    """Immutable result of one reload, and the queries that run against it.

    ``posts`` is ordered newest first, as is every bucket of ``post_index``.
    """

    __slots__ = ("posts", "pages", "post_index", "page_index", "_positions")

    def __init__(
        self,
        posts: Tuple[Post, ...],
        pages: Mapping[str, Page],
        post_index: MultiIndex[Post],
        page_index: MultiIndex[Page],
    ) -> None:
        self.posts = posts
        self.pages = MappingProxyType(dict(pages))
        self.post_index = post_index
        self.page_index = page_index
        self._positions: Dict[int, int] = {id(post): position for position, post in enumerate(posts)}

    @classmethod
    def empty(cls) -> "Snapshot":
        post_index: MultiIndex[Post] = MultiIndex()
        post_index.build()
        page_index: MultiIndex[Page] = MultiIndex()
        page_index.build()
        return cls((), {}, post_index, page_index)

    def post_by_name(self, name: str) -> Optional[Post]:
        found = self.post_index.find("name", name)
        return found[0] if found else None

    def page_by_name(self, name: str) -> Optional[Page]:
        found = self.page_index.find("name", name)
        return found[0] if found else None

    def most_recent(self, offset: int, count: int) -> PostPage[Post]:
        return paginate(self.posts, offset, count)

    def by_tag(self, tag: str, offset: int, count: int) -> PostPage[Post]:
        return paginate(self.post_index.find("tag", tag.strip().lower()), offset, count)

    def by_category(self, category: str, offset: int, count: int) -> PostPage[Post]:
        return paginate(self.post_index.find("category", category.strip().lower()), offset, count)

    def series(self, name: str) -> List[Post]:
        """Posts of a series in reading order, oldest first."""
        return oldest_first(self.post_index.find("series", name))

    def series_index(self, post: Post) -> int:
        """Zero-based position of ``post`` within its series, or -1."""
        if not post.series_name:
            return -1
        for position, item in enumerate(self.series(post.series_name)):
            if item is post:
                return position
        return -1

    def previous_post(self, post: Post) -> Optional[Post]:
        """The next older post, or ``None`` for the oldest one."""
        position = self._positions.get(id(post))
        if position is None or position + 1 >= len(self.posts):
            return None
        return self.posts[position + 1]

    def next_post(self, post: Post) -> Optional[Post]:
        """The next newer post, or ``None`` for the newest one."""
        position = self._positions.get(id(post))
        if position is None or position == 0:
            return None
        return self.posts[position - 1]

    def tags(self) -> List[str]:
        return sorted(self.post_index.keys_for("tag"))

    def categories(self) -> List[str]:
        return sorted(self.post_index.keys_for("category"))


@dataclass(frozen=True, slots=True)
class ContentBundle:
    snapshot: Snapshot
    sitemap: Tuple[SitemapEntry, ...] = ()
    loaded_at: Optional[datetime] = None


@dataclass(slots=True)
class ContentStore:
    """Holds the currently published content and rebuilds it on :meth:`reload`.

    Reloads run one at a time. Readers never lock: each query reads the current
    bundle once and works on that bundle only, so a reload that finishes midway
    through a query is not visible to it.
    """

    posts_dir: Path
    pages_dir: Path
    base_url: str = config.SITE_URL
    strict_keys: bool = config.STRICT_KEYS
    _bundle: ContentBundle = field(default_factory=lambda: ContentBundle(Snapshot.empty()), init=False, repr=False)
    _reload_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def reload(self) -> Snapshot:
        """Rescan both content roots and publish the result.

        Any error aborts the reload and leaves the current content in place.
        """
        with self._reload_lock:
            try:
                bundle = self._load()
            except Exception:
                logger.exception("Content reload from %s and %s failed", self.posts_dir, self.pages_dir)
                raise
            self._bundle = bundle

        snapshot = bundle.snapshot
        logger.info(
            "Loaded %d posts, %d pages, %d sitemap entries",
            len(snapshot.posts),
            len(snapshot.pages),
            len(bundle.sitemap),
        )
        return snapshot

    def _load(self) -> ContentBundle:
        posts = [build_post(meta, strict_keys=self.strict_keys) for meta in load_tree(self.posts_dir)]
        pages = [build_page(meta, strict_keys=self.strict_keys) for meta in load_tree(self.pages_dir)]

        post_index: MultiIndex[Post] = MultiIndex()
        post_names: Set[str] = set()
        for post in posts:
            if post.name in post_names:
                raise ValidationError("name", post.name, "duplicate post name in field")
            post_names.add(post.name)
            post_index.add("name", post, post.name)
            post_index.add("tag", post, post.tags)
            post_index.add("category", post, post.category)
            if post.series_name:
                post_index.add("series", post, post.series_name)

        page_index: MultiIndex[Page] = MultiIndex()
        page_map: Dict[str, Page] = {}
        for page in pages:
            if page.name in page_map:
                raise ValidationError("name", page.name, "duplicate page name in field")
            page_index.add("name", page, page.name)
            page_map[page.name] = page

        post_index.build()
        page_index.build()

        snapshot = Snapshot(tuple(newest_first(posts)), page_map, post_index, page_index)
        try:
            sitemap = build_sitemap(snapshot.posts, snapshot.pages, post_index, self.base_url)
        except EmptyContentError:
            logger.warning("No posts found under %s; sitemap has no index entry", self.posts_dir)
            sitemap = build_sitemap(snapshot.posts, snapshot.pages, post_index, self.base_url, include_index=False)

        return ContentBundle(snapshot, tuple(sitemap), datetime.now(timezone.utc))

    def snapshot(self) -> Snapshot:
        """The published snapshot; hold on to it to run several queries against the same content."""
        return self._bundle.snapshot

    @property
    def loaded_at(self) -> Optional[datetime]:
        return self._bundle.loaded_at

    def sitemap(self) -> Tuple[SitemapEntry, ...]:
        return self._bundle.sitemap

    def post_by_name(self, name: str) -> Optional[Post]:
        return self.snapshot().post_by_name(name)

    def page_by_name(self, name: str) -> Optional[Page]:
        return self.snapshot().page_by_name(name)

    def most_recent(self, offset: int, count: int) -> PostPage[Post]:
        return self.snapshot().most_recent(offset, count)

    def by_tag(self, tag: str, offset: int, count: int) -> PostPage[Post]:
        return self.snapshot().by_tag(tag, offset, count)

    def by_category(self, category: str, offset: int, count: int) -> PostPage[Post]:
        return self.snapshot().by_category(category, offset, count)

    def series(self, name: str) -> List[Post]:
        return self.snapshot().series(name)

    def series_index(self, post: Post) -> int:
        return self.snapshot().series_index(post)

    def previous_post(self, post: Post) -> Optional[Post]:
        return self.snapshot().previous_post(post)

    def next_post(self, post: Post) -> Optional[Post]:
        return self.snapshot().next_post(post)

    def tags(self) -> List[str]:
        return self.snapshot().tags()

    def categories(self) -> List[str]:
        return self.snapshot().categories()


_store: Optional[ContentStore] = None
_store_lock = threading.Lock()


def get_store() -> ContentStore:
    """The process-wide store for the configured content directories."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                _store = ContentStore(config.POSTS_DIR, config.PAGES_DIR)
    return _store
