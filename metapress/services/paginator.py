from __future__ import annotations

from typing import Sequence, TypeVar

from metapress import config
from metapress.models.listing import PostPage


T = TypeVar("T")


def paginate(items: Sequence[T], offset: int, count: int) -> PostPage[T]:
    """Return ``items[offset:offset + count]`` along with the full length of ``items``."""
    if offset < 0:
        raise ValueError("offset must not be negative")
    if count < 0:
        raise ValueError("count must not be negative")
    return PostPage(items=tuple(items[offset : offset + count]), offset=offset, total=len(items))


def page_offset(page: int, page_len: int = config.PAGE_LEN) -> int:
    """Offset of a 1-based page number."""
    if page < 1:
        raise ValueError("page numbers start at 1")
    return (page - 1) * page_len
