from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from urllib.parse import quote
from typing import ClassVar, FrozenSet, Iterable, List, Optional, Tuple, TypeVar


@dataclass(frozen=True, slots=True, eq=False)
class Content:
    name: str
    title: str
    summary: str
    path: str
    updated: datetime

    template_prefix: ClassVar[str] = ""

    @property
    def render_target(self) -> str:
        return f"{self.template_prefix}{self.path}{self.name}"


@dataclass(frozen=True, slots=True, eq=False)
class Post(Content):
    category: str = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)
    brushes: Tuple[str, ...] = ()
    legacy_id: Optional[int] = None
    series_name: Optional[str] = None

    template_prefix: ClassVar[str] = "posts/"

    @property
    def has_tags(self) -> bool:
        return bool(self.tags)

    @property
    def sorted_tags(self) -> List[str]:
        return sorted(self.tags)

    @property
    def friendly_date(self) -> str:
        return self.updated.strftime("%B %d, %Y")

    @property
    def url(self) -> str:
        return f"/{self.updated.year:04d}/{self.updated.month:02d}/{self.updated.day:02d}/{quote(self.name, safe='')}"

    def comment_identifier(self, legacy_base: str) -> str:
        """Identifier for the comment thread; posts migrated from the old site keep their old id."""
        if self.legacy_id is None:
            return self.url
        return f"{self.legacy_id} {legacy_base}?p={self.legacy_id}"


@dataclass(frozen=True, slots=True, eq=False)
class Page(Content):
    template_prefix: ClassVar[str] = "pages/"

    @property
    def url(self) -> str:
        return f"/pages/{quote(self.name, safe='')}"


ContentT = TypeVar("ContentT", bound=Content)


def _updated(item: Content) -> datetime:
    return item.updated


def newest_first(items: Iterable[ContentT]) -> List[ContentT]:
    """Most recently updated first. Ties keep their incoming order."""
    return sorted(items, key=_updated, reverse=True)


def oldest_first(items: Iterable[ContentT]) -> List[ContentT]:
    """Chronological reading order. Ties keep their incoming order."""
    return sorted(items, key=_updated)
