import pytest
from fastapi.testclient import TestClient

from metapress.main import app
from metapress.services.content_store import ContentStore, get_store


BASE_URL = "https://blog.example.com"


@pytest.fixture
def client(content_dirs, make_post, make_page):
    make_post("first.html", "First", hours=1, tags="Go", series="Basics", legacyId=7)
    make_post("second.html", "Second", hours=2, tags="go, web", series="Basics")
    make_post("third.html", "Third", hours=3, category="Life")
    make_page("about.html", "About")
    posts, pages = content_dirs
    store = ContentStore(posts, pages, base_url=BASE_URL)
    store.reload()

    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_recent_posts(client):
    response = client.get("/api/posts")

    assert response.status_code == 200
    body = response.json()
    assert [post["name"] for post in body["posts"]] == ["third", "second", "first"]
    assert body["total"] == 3
    assert body["has_older"] is False
    assert body["has_newer"] is False


def test_page_number_must_be_positive(client):
    assert client.get("/api/posts", params={"page": 0}).status_code == 422


def test_post_detail_includes_navigation_and_series(client):
    body = client.get("/api/posts/second").json()

    assert body["title"] == "Second"
    assert body["tags"] == ["go", "web"]
    assert body["previous"] == "first"
    assert body["next"] == "third"
    assert body["series"] == {"name": "Basics", "index": 1, "posts": ["first", "second"]}
    assert body["render_target"] == "posts/second"


def test_post_detail_legacy_comment_identifier(client):
    body = client.get("/api/posts/first").json()

    assert body["comment_identifier"].startswith("7 ")
    assert body["next"] == "second"
    assert body["previous"] is None


def test_missing_post_is_404(client):
    assert client.get("/api/posts/nope").status_code == 404


def test_posts_by_tag_is_case_insensitive(client):
    body = client.get("/api/tags/GO").json()

    assert body["tag"] == "go"
    assert [post["name"] for post in body["posts"]] == ["second", "first"]


def test_unknown_category_is_empty(client):
    body = client.get("/api/categories/unknown").json()

    assert body["posts"] == []
    assert body["total"] == 0


def test_series_listing(client):
    body = client.get("/api/series/Basics").json()

    assert [post["name"] for post in body["posts"]] == ["first", "second"]
    assert client.get("/api/series/Missing").status_code == 404


def test_page_detail(client):
    assert client.get("/api/pages/about").json()["title"] == "About"
    assert client.get("/api/pages/missing").status_code == 404


def test_sitemap_xml(client):
    response = client.get("/sitemap.xml")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    # 3 posts + 1 page + 2 tags + 2 categories + index
    assert response.text.count("<url>") == 9
    assert f"<loc>{BASE_URL}/</loc>" in response.text
    assert "<changefreq>hourly</changefreq>" in response.text


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
