from __future__ import annotations

import os
from datetime import timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo


BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

DEFAULT_POSTS_DIR = BASE_DIR / "content" / "posts"
DEFAULT_PAGES_DIR = BASE_DIR / "content" / "pages"
POSTS_DIR = Path(os.getenv("METAPRESS_POSTS_DIR", str(DEFAULT_POSTS_DIR))).expanduser()
PAGES_DIR = Path(os.getenv("METAPRESS_PAGES_DIR", str(DEFAULT_PAGES_DIR))).expanduser()

SITE_URL = os.getenv("METAPRESS_SITE_URL", "http://localhost:8000").rstrip("/")
LEGACY_URL = os.getenv("METAPRESS_LEGACY_URL", f"{SITE_URL}/")
TIMEZONE_NAME = os.getenv("METAPRESS_TIMEZONE", "UTC")
PAGE_LEN = int(os.getenv("METAPRESS_PAGE_LEN", "10"))
STRICT_KEYS = os.getenv("METAPRESS_STRICT_KEYS", "1").strip().lower() not in {"0", "false", "no", "off"}

META_START = "*{META"
META_END = "META}*"
DATE_FORMAT = "%m/%d/%Y %H:%M"


def content_timezone() -> tzinfo:
    """Timezone used for file modification times and explicit post dates."""
    if TIMEZONE_NAME.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(TIMEZONE_NAME)
