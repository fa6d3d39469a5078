from __future__ import annotations

from datetime import datetime
from typing import Any, FrozenSet, Iterable, List, Optional

from metapress import config
from metapress.exceptions import ValidationError
from metapress.models.content import Page, Post
from metapress.services.meta_loader import MetaInfo


POST_KEYS = frozenset({"title", "summary", "category", "tags", "brushes", "date", "legacyId", "series"})
PAGE_KEYS = frozenset({"title", "summary"})


def build_post(meta: MetaInfo, *, strict_keys: bool = True) -> Post:
    if strict_keys:
        _reject_unknown_keys(meta, POST_KEYS)

    date = _optional_text(meta, "date")
    return Post(
        name=meta.name,
        title=_required_text(meta, "title"),
        summary=_required_text(meta, "summary"),
        path=meta.path,
        updated=_parse_date(meta, date) if date else meta.updated,
        category=_required_text(meta, "category").lower(),
        tags=frozenset(tag.lower() for tag in _split(meta, "tags")),
        brushes=tuple(_split(meta, "brushes")),
        legacy_id=_optional_int(meta, "legacyId"),
        series_name=_optional_text(meta, "series"),
    )


def build_page(meta: MetaInfo, *, strict_keys: bool = True) -> Page:
    if strict_keys:
        _reject_unknown_keys(meta, PAGE_KEYS)

    return Page(
        name=meta.name,
        title=_required_text(meta, "title"),
        summary=_required_text(meta, "summary"),
        path=meta.path,
        updated=meta.updated,
    )


def _reject_unknown_keys(meta: MetaInfo, allowed: FrozenSet[str]) -> None:
    for key in sorted(meta.vars):
        if key not in allowed:
            raise ValidationError(key, meta.name, "unknown field")


def _scalar_text(meta: MetaInfo, key: str, value: Any) -> str:
    # YAML turns bare numbers into int/float; keep what was written.
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError(key, meta.name, "expected text for field")
    return str(value).strip()


def _required_text(meta: MetaInfo, key: str) -> str:
    value = meta.vars.get(key)
    if value is None:
        raise ValidationError(key, meta.name)
    text = _scalar_text(meta, key, value)
    if not text:
        raise ValidationError(key, meta.name, "empty required field")
    return text


def _optional_text(meta: MetaInfo, key: str) -> Optional[str]:
    value = meta.vars.get(key)
    if value is None:
        return None
    return _scalar_text(meta, key, value) or None


def _optional_int(meta: MetaInfo, key: str) -> Optional[int]:
    value = meta.vars.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(key, meta.name, "expected an integer for field")
    return value


def _split(meta: MetaInfo, key: str) -> List[str]:
    value = meta.vars.get(key)
    if value is None:
        return []
    items: Iterable[Any]
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        items = [value]
    else:
        raise ValidationError(key, meta.name, "expected a comma-separated list for field")
    return [text for text in (_scalar_text(meta, key, item) for item in items) if text]


def _parse_date(meta: MetaInfo, value: str) -> datetime:
    try:
        parsed = datetime.strptime(value, config.DATE_FORMAT)
    except ValueError as exc:
        raise ValidationError("date", meta.name, f"expected MM/DD/YYYY HH:MM, got {value!r} for field") from exc
    return parsed.replace(tzinfo=config.content_timezone())
