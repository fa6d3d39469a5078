from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, Tuple, TypeVar


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PostPage(Generic[T]):
    """One page of an ordered listing together with the size of the full listing."""

    items: Tuple[T, ...]
    offset: int
    total: int

    @property
    def has_newer(self) -> bool:
        return self.offset > 0

    @property
    def has_older(self) -> bool:
        return self.offset + len(self.items) < self.total

    def __len__(self) -> int:
        return len(self.items)


class ChangeFrequency(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    MONTHLY = "monthly"


@dataclass(frozen=True, slots=True)
class SitemapEntry:
    url: str
    last_modified: datetime
    change_frequency: ChangeFrequency
    priority: str

    @property
    def lastmod(self) -> str:
        return self.last_modified.isoformat(timespec="seconds")
