from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import yaml
from frontmatter.default_handlers import YAMLHandler

from metapress import config
from metapress.exceptions import MalformedContentError
from metapress.services.scanner import scan


logger = logging.getLogger(__name__)

_handler = YAMLHandler()


@dataclass(slots=True)
class MetaInfo:
    """Raw metadata of one content file, before validation."""

    name: str
    path: str
    updated: datetime
    source: Path
    vars: Dict[str, Any] = field(default_factory=dict)


def load_tree(root: Path) -> List[MetaInfo]:
    """Extract the metadata block of every file under ``root``."""
    return [load_meta(path, sub_path) for path, sub_path in scan(root)]


def load_meta(path: Path, sub_path: str = "") -> MetaInfo:
    block = _read_block(path)
    try:
        data = _handler.load(block)
    except yaml.YAMLError as exc:
        raise MalformedContentError(path, f"metadata block is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedContentError(path, "metadata block is not a key/value mapping")

    logger.debug("Loaded metadata block of %s", path)
    stat = path.stat()
    return MetaInfo(
        name=path.stem,
        path=sub_path,
        updated=datetime.fromtimestamp(stat.st_mtime, tz=config.content_timezone()),
        source=path,
        vars={str(key): value for key, value in data.items()},
    )


def _read_block(path: Path) -> str:
    lines: List[str] = []
    started = False
    try:
        with path.open("r", encoding="utf-8") as fp:
            for line in fp:
                if not started:
                    started = line.startswith(config.META_START)
                    continue
                if line.startswith(config.META_END):
                    return "".join(lines)
                lines.append(line)
    except UnicodeDecodeError as exc:
        raise MalformedContentError(path, f"not valid UTF-8 text: {exc}") from exc

    if not started:
        raise MalformedContentError(path, f"no '{config.META_START}' line found")
    raise MalformedContentError(path, f"metadata block is not closed by a '{config.META_END}' line")
