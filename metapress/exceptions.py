from __future__ import annotations

from pathlib import Path
from typing import Optional


class ContentError(Exception):
    """Base class for errors raised while loading content."""


class MalformedContentError(ContentError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ValidationError(ContentError):
    def __init__(self, field: str, content_name: str, reason: Optional[str] = None) -> None:
        self.field = field
        self.content_name = content_name
        self.reason = reason or "missing required field"
        super().__init__(f"{content_name}: {self.reason} '{field}'")


class EmptyContentError(ContentError):
    """Raised when the sitemap index entry has no post to take its timestamp from."""
