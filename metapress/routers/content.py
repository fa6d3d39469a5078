from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import Response
from fastapi.templating import Jinja2Templates

from metapress import config
from metapress.models.content import Page, Post
from metapress.models.listing import PostPage
from metapress.services.content_store import ContentStore, get_store
from metapress.services.paginator import page_offset


router = APIRouter()
templates = Jinja2Templates(directory=str(config.TEMPLATES_DIR))


def get_page_number(page: int = Query(1, ge=1)) -> int:
    return page


@router.get("/api/posts", name="recent_posts")
def recent_posts(page: int = Depends(get_page_number), store: ContentStore = Depends(get_store)) -> Dict[str, Any]:
    return _listing(store.most_recent(page_offset(page), config.PAGE_LEN), page)


@router.get("/api/posts/{name}", name="post_detail")
def post_detail(name: str, store: ContentStore = Depends(get_store)) -> Dict[str, Any]:
    # One snapshot for every lookup so neighbours and series match the post.
    snapshot = store.snapshot()
    post = snapshot.post_by_name(name)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")

    detail = _post_summary(post)
    detail["brushes"] = list(post.brushes)
    detail["render_target"] = post.render_target
    detail["comment_identifier"] = post.comment_identifier(config.LEGACY_URL)
    detail["previous"] = _name_of(snapshot.previous_post(post))
    detail["next"] = _name_of(snapshot.next_post(post))
    if post.series_name:
        detail["series"] = {
            "name": post.series_name,
            "index": snapshot.series_index(post),
            "posts": [item.name for item in snapshot.series(post.series_name)],
        }
    return detail


@router.get("/api/tags/{tag}", name="posts_by_tag")
def posts_by_tag(tag: str, page: int = Depends(get_page_number), store: ContentStore = Depends(get_store)) -> Dict[str, Any]:
    listing = _listing(store.by_tag(tag, page_offset(page), config.PAGE_LEN), page)
    listing["tag"] = tag.lower()
    return listing


@router.get("/api/categories/{category}", name="posts_by_category")
def posts_by_category(
    category: str, page: int = Depends(get_page_number), store: ContentStore = Depends(get_store)
) -> Dict[str, Any]:
    listing = _listing(store.by_category(category, page_offset(page), config.PAGE_LEN), page)
    listing["category"] = category.lower()
    return listing


@router.get("/api/series/{name}", name="series_posts")
def series_posts(name: str, store: ContentStore = Depends(get_store)) -> Dict[str, Any]:
    posts = store.series(name)
    if not posts:
        raise HTTPException(status_code=404, detail="Series not found")
    return {"series": name, "posts": [_post_summary(post) for post in posts]}


@router.get("/api/pages/{name}", name="page_detail")
def page_detail(name: str, store: ContentStore = Depends(get_store)) -> Dict[str, Any]:
    page = store.page_by_name(name)
    if page is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return _page_summary(page)


@router.get("/sitemap.xml", name="sitemap", response_class=Response)
def sitemap(request: Request, store: ContentStore = Depends(get_store)) -> Response:
    return templates.TemplateResponse(
        request,
        "sitemap.xml",
        {"entries": store.sitemap()},
        media_type="application/xml",
    )


def _listing(posts: PostPage[Post], page: int) -> Dict[str, Any]:
    return {
        "page": page,
        "offset": posts.offset,
        "total": posts.total,
        "has_newer": posts.has_newer,
        "has_older": posts.has_older,
        "posts": [_post_summary(post) for post in posts.items],
    }


def _post_summary(post: Post) -> Dict[str, Any]:
    return {
        "name": post.name,
        "title": post.title,
        "summary": post.summary,
        "url": post.url,
        "category": post.category,
        "tags": post.sorted_tags,
        "updated": post.updated.isoformat(),
        "display_date": post.friendly_date,
    }


def _page_summary(page: Page) -> Dict[str, Any]:
    return {
        "name": page.name,
        "title": page.title,
        "summary": page.summary,
        "url": page.url,
        "render_target": page.render_target,
        "updated": page.updated.isoformat(),
    }


def _name_of(post: Optional[Post]) -> Optional[str]:
    return post.name if post is not None else None
