from __future__ import annotations

from typing import List, Mapping, Sequence
from urllib.parse import quote

from metapress.exceptions import EmptyContentError
from metapress.models.content import Page, Post
from metapress.models.listing import ChangeFrequency, SitemapEntry
from metapress.services.multi_index import MultiIndex


INDEX_PRIORITY = "1.0"
LISTING_PRIORITY = "0.3"
CONTENT_PRIORITY = "0.2"


def build_sitemap(
    posts: Sequence[Post],
    pages: Mapping[str, Page],
    post_index: MultiIndex[Post],
    base_url: str,
    *,
    include_index: bool = True,
) -> List[SitemapEntry]:
    """Derive sitemap entries from a fully built set of posts, pages and post indexes.

    ``posts`` and every index bucket must already be ordered newest first: the
    index entry and each tag/category entry take the timestamp of the first
    post they hold. Raises :class:`EmptyContentError` when the index entry is
    requested but there are no posts.
    """
    base = base_url.rstrip("/")
    entries: List[SitemapEntry] = []

    if include_index:
        if not posts:
            raise EmptyContentError("no posts to date the sitemap index entry")
        entries.append(SitemapEntry(f"{base}/", posts[0].updated, ChangeFrequency.HOURLY, INDEX_PRIORITY))

    for name in sorted(pages):
        page = pages[name]
        entries.append(SitemapEntry(base + page.url, page.updated, ChangeFrequency.MONTHLY, CONTENT_PRIORITY))

    for post in posts:
        entries.append(SitemapEntry(base + post.url, post.updated, ChangeFrequency.MONTHLY, CONTENT_PRIORITY))

    for index, prefix in (("tag", "tags"), ("category", "categories")):
        for key in sorted(post_index.keys_for(index)):
            latest = post_index.find(index, key)[0]
            entries.append(
                SitemapEntry(
                    f"{base}/{prefix}/{quote(key, safe='')}",
                    latest.updated,
                    ChangeFrequency.DAILY,
                    LISTING_PRIORITY,
                )
            )

    return entries
