from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import pytest
import yaml


BASE_TIME = datetime(2011, 12, 3, 8, 0, tzinfo=timezone.utc).timestamp()


def write_content(
    root: Path,
    relative: str,
    meta: Optional[dict] = None,
    *,
    block: Optional[str] = None,
    mtime: Optional[float] = None,
) -> Path:
    """Write a content file whose metadata block holds ``meta`` (or the raw ``block``)."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    if block is None:
        block = yaml.safe_dump(meta or {}, sort_keys=False)
    path.write_text(f"<h1>Intro</h1>\n*{{META\n{block}META}}*\n<p>Body text</p>\n", encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def post_meta(title: str, **extra) -> dict:
    meta = {"title": title, "summary": f"About {title}", "category": "Programming"}
    meta.update(extra)
    return meta


@pytest.fixture
def content_dirs(tmp_path: Path) -> tuple[Path, Path]:
    posts = tmp_path / "posts"
    pages = tmp_path / "pages"
    posts.mkdir()
    pages.mkdir()
    return posts, pages


@pytest.fixture
def make_post(content_dirs) -> Callable[..., Path]:
    posts, _ = content_dirs

    def _make(relative: str, title: Optional[str] = None, *, hours: int = 0, **extra) -> Path:
        meta = post_meta(title or Path(relative).stem, **extra)
        return write_content(posts, relative, meta, mtime=BASE_TIME + hours * 3600)

    return _make


@pytest.fixture
def make_page(content_dirs) -> Callable[..., Path]:
    _, pages = content_dirs

    def _make(relative: str, title: Optional[str] = None, *, hours: int = 0) -> Path:
        meta = {"title": title or Path(relative).stem, "summary": "A page"}
        return write_content(pages, relative, meta, mtime=BASE_TIME + hours * 3600)

    return _make
