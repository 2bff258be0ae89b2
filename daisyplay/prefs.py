"""Reading and writing the preferences file and per-book bookmarks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from xml.sax.saxutils import quoteattr

from daisyplay.markup import BookInfo, apply_attributes, read_tokens

BOOKMARK_DIR = ".daisy-player"
PREFS_NAME = ".daisy-player.xml"


@dataclass
class Preferences:
    """Settings kept between sessions."""

    current_sink: int = 0
    speed: float = 1.0
    cd_dev: str = "/dev/sr0"
    cddb_flag: str = "y"


@dataclass
class Bookmark:
    """Where playback of a book stopped."""

    item: int = 0
    elapsed_seconds: int = 0
    level: int = 1


def _scan_until(path: str | Path, tag: str, info: BookInfo) -> BookInfo | None:
    try:
        tokens = read_tokens(path)
    except OSError:
        return None
    for token in tokens:
        if token.is_text:
            continue
        apply_attributes(info, token.attributes)
        if token.tag == tag:
            break
    return info


def _write(path: str | Path, element: str, attributes: dict[str, str]) -> None:
    rendered = " ".join(f"{name}={quoteattr(value)}" for name, value in attributes.items())
    Path(path).write_text(
        f'<?xml version="1.0"?>\n<{element} {rendered}/>\n', encoding="utf-8"
    )


def load_preferences(path: str | Path) -> Preferences:
    """Read preferences from ``path``; a missing file gives the defaults."""
    info = _scan_until(path, "prefs", BookInfo())
    if info is None:
        return Preferences()
    flag = info.cddb_flag if info.cddb_flag in ("n", "y") else "y"
    return Preferences(
        current_sink=info.current_sink,
        speed=info.speed,
        cd_dev=info.cd_dev,
        cddb_flag=flag,
    )


def save_preferences(prefs: Preferences, path: str | Path) -> None:
    """Write ``prefs`` to ``path``."""
    _write(
        path,
        "prefs",
        {
            "current-sink": str(prefs.current_sink),
            "speed": f"{prefs.speed:f}",
            "cd_dev": prefs.cd_dev,
            "cddb_flag": prefs.cddb_flag[:1],
        },
    )


def bookmark_path(home: str | Path, title: str, mcn: str) -> str:
    """Return the bookmark file of a book below the user's home directory."""
    return os.path.join(os.fspath(home), BOOKMARK_DIR, f"{title}{mcn}")


def save_bookmark(bookmark: Bookmark, path: str | Path) -> bool:
    """Write ``bookmark`` to ``path``; return False when it cannot be written."""
    try:
        os.makedirs(os.path.dirname(os.fspath(path)) or ".", mode=0o755, exist_ok=True)
        _write(
            path,
            "bookmark",
            {
                "item": str(bookmark.item),
                "elapsed_seconds": str(bookmark.elapsed_seconds),
                "level": str(bookmark.level),
            },
        )
    except OSError:
        return False
    return True


def load_bookmark(path: str | Path, total_items: int) -> Bookmark | None:
    """Read the bookmark at ``path``; None when there is none.

    An item outside the book is replaced by the first item.
    """
    info = _scan_until(path, "bookmark", BookInfo(level=1))
    if info is None:
        return None
    item = info.current if 0 <= info.current < total_items else 0
    return Bookmark(item=item, elapsed_seconds=info.elapsed_seconds, level=info.level)