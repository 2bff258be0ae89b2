"""Reading discinfo.html, the list of books on a multi-book disc."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from daisyplay.markup import BookInfo, Token, apply_attributes, read_tokens
from daisyplay.paths import find_file
from daisyplay.timecodes import read_time


@dataclass
class DiscEntry:
    """One book listed on the disc."""

    label: str
    filename: str
    duration: float = 0.0
    level: int = 1


def _next_label(tokens: Iterator[Token]) -> str:
    for token in tokens:
        if token.label:
            return token.label
    return ""


def _book_duration(path: str) -> float:
    info = BookInfo()
    for token in read_tokens(path):
        if token.is_text:
            continue
        apply_attributes(info, token.attributes)
        if info.ncc_total_time:
            return read_time(info.ncc_total_time)
    return 0.0


def parse_discinfo(
    path: str | Path, directory: str | Path
) -> tuple[str, list[DiscEntry]]:
    """Return the disc title and its books; link targets are sought below ``directory``."""
    tokens = iter(read_tokens(path))
    title = ""
    entries: list[DiscEntry] = []
    for token in tokens:
        if token.is_text or token.is_end:
            continue
        if not title and token.tag == "title":
            title = _next_label(tokens)
            continue
        if token.tag == "a":
            href = token.attributes.href
            filename = find_file(str(directory), href) if href else None
            if filename is None:
                raise FileNotFoundError(f"Cannot read {href}")
            duration = _book_duration(filename)
            entries.append(
                DiscEntry(label=_next_label(tokens), filename=filename, duration=duration)
            )
    return title, entries


def total_duration(entries: Iterable[DiscEntry]) -> float:
    """Return the playing time of all books together."""
    return sum(entry.duration for entry in entries)