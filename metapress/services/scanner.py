from __future__ import annotations

from pathlib import Path
from typing import Iterator, Tuple


def scan(root: Path, sub_path: str = "") -> Iterator[Tuple[Path, str]]:
    """Walk ``root`` depth-first, yielding each file with its directory prefix.

    The prefix is built from the names of the directories between ``root`` and
    the file, each followed by ``/``; files directly under ``root`` get ``""``.
    Entries are visited in name order and hidden entries are skipped.
    Raises ``OSError`` if a directory cannot be listed.
    """
    entries = sorted(Path(root).iterdir(), key=lambda entry: entry.name)
    for entry in entries:
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            yield from scan(entry, f"{sub_path}{entry.name}/")
        elif entry.is_file():
            yield entry, sub_path
