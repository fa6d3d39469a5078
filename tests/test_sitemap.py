from datetime import datetime, timedelta, timezone

import pytest

from metapress.exceptions import EmptyContentError
from metapress.models.content import Page, Post, newest_first
from metapress.models.listing import ChangeFrequency
from metapress.services.multi_index import MultiIndex
from metapress.services.sitemap import build_sitemap


START = datetime(2011, 1, 1, 12, 0, tzinfo=timezone.utc)
BASE_URL = "https://blog.example.com/"


def post(name: str, day: int, category: str, tags=()) -> Post:
    return Post(
        name=name,
        title=name,
        summary="",
        path="",
        updated=START + timedelta(days=day),
        category=category,
        tags=frozenset(tags),
    )


def build(posts):
    index = MultiIndex()
    for item in posts:
        index.add("name", item, item.name)
        index.add("tag", item, item.tags)
        index.add("category", item, item.category)
    index.build()
    return tuple(newest_first(posts)), index


def test_entry_count_and_classification():
    posts, index = build(
        [
            post("one", 1, "java", ["jvm", "web"]),
            post("two", 5, "go", ["web"]),
            post("three", 3, "java"),
        ]
    )
    pages = {"about": Page(name="about", title="About", summary="", path="", updated=START)}

    entries = build_sitemap(posts, pages, index, BASE_URL)

    # 3 posts + 1 page + 2 tags + 2 categories + index
    assert len(entries) == 3 + 1 + 2 + 2 + 1
    root = entries[0]
    assert root.url == "https://blog.example.com/"
    assert root.change_frequency is ChangeFrequency.HOURLY
    assert root.priority == "1.0"
    assert root.last_modified == START + timedelta(days=5)

    by_url = {entry.url: entry for entry in entries}
    about = by_url["https://blog.example.com/pages/about"]
    assert about.change_frequency is ChangeFrequency.MONTHLY
    assert about.priority == "0.2"
    assert by_url["https://blog.example.com/2011/01/04/three"].priority == "0.2"

    web = by_url["https://blog.example.com/tags/web"]
    assert web.change_frequency is ChangeFrequency.DAILY
    assert web.priority == "0.3"
    assert web.last_modified == START + timedelta(days=5)
    assert by_url["https://blog.example.com/categories/java"].last_modified == START + timedelta(days=3)


def test_lastmod_is_rendered_with_offset():
    posts, index = build([post("one", 0, "java")])

    entries = build_sitemap(posts, {}, index, BASE_URL)

    assert entries[0].lastmod == "2011-01-01T12:00:00+00:00"


def test_tag_urls_are_quoted():
    posts, index = build([post("one", 0, "c#", ["c++"])])

    urls = [entry.url for entry in build_sitemap(posts, {}, index, BASE_URL)]

    assert "https://blog.example.com/tags/c%2B%2B" in urls
    assert "https://blog.example.com/categories/c%23" in urls


def test_no_posts_raises_empty_content_error():
    posts, index = build([])

    with pytest.raises(EmptyContentError):
        build_sitemap(posts, {}, index, BASE_URL)


def test_no_posts_without_index_entry():
    posts, index = build([])
    pages = {"about": Page(name="about", title="About", summary="", path="", updated=START)}

    entries = build_sitemap(posts, pages, index, BASE_URL, include_index=False)

    assert [entry.url for entry in entries] == ["https://blog.example.com/pages/about"]
