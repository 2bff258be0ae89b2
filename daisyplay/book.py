"""Opening a DAISY book directory and sizing its table of contents."""

from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass, field
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

from daisyplay.markup import read_tokens
from daisyplay.paths import find_index_names

NCC_NAME = "ncc.html"
_HEADINGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_NOT_PLAYABLE = 'Please try to play this book with "eBook-speaker"'


class BookError(Exception):
    """The directory does not hold a book that can be played."""


@dataclass
class Item:
    """One entry of the table of contents."""

    label: str = ""
    level: int = 0
    page_number: int = 0
    smil_file: str = ""
    smil_anchor: str = ""
    first_id: str = ""
    last_id: str = ""
    begin: float = 0.0
    duration: float = 0.0
    screen: int = 0
    x: int = 0
    y: int = 0
    filename: str = ""


@dataclass
class Book:
    """A book found on disk with room for its items."""

    directory: str
    version: str
    ncc_html: str | None = None
    ncx: str | None = None
    opf: str | None = None
    items: list[Item] = field(default_factory=list)
    items_in_opf: int = 0
    items_in_ncx: int = 0

    @property
    def total_items(self) -> int:
        return len(self.items)


def count_ncc_headings(path: str | Path) -> int:
    """Count the h1..h6 headings of an ncc.html file."""
    return sum(
        1
        for token in read_tokens(path)
        if not token.is_text and not token.is_end and token.tag in _HEADINGS
    )


def count_tags(path: str | Path, tag: str) -> int:
    """Count the opening elements named ``tag`` (ignoring case) in a document."""
    wanted = tag.lower()
    return sum(
        1
        for token in read_tokens(path)
        if not token.is_text and not token.is_end and token.tag == wanted
    )


def _smil_title(path: str) -> str:
    for token in read_tokens(path):
        if token.tag == "body":
            break
        if token.tag == "meta" and token.attributes.get("name").lower() == "title":
            return token.attributes.get("content")
    return ""


def _smil_names(directory: str) -> list[str]:
    return sorted(
        name
        for name in os.listdir(directory)
        if not name.startswith(".") and fnmatch.fnmatch(name.lower(), "*.smil")
    )


def create_ncc_html(directory: str | Path) -> str:
    """Write an ncc.html listing every SMIL file of ``directory``; return its path."""
    directory = os.fspath(directory)
    target = os.path.join(directory, NCC_NAME)
    lines = [
        '<?xml version="1.0"?>',
        "<html>",
        "   <head>",
        "   </head>",
        "   <body>",
    ]
    for name in _smil_names(directory):
        title = _smil_title(os.path.join(directory, name))
        lines.extend(
            [
                "      <h1>",
                f"         <a href={quoteattr(name)}>{escape(title)}</a>",
                "      </h1>",
            ]
        )
    lines.extend(["   </body>", "</html>", ""])
    Path(target).write_text("\n".join(lines), encoding="utf-8")
    return target


def _ncc_book(ncc_html: str) -> Book:
    total = count_ncc_headings(ncc_html)
    if total == 0:
        raise BookError(_NOT_PLAYABLE)
    return Book(
        directory=os.path.dirname(ncc_html),
        version="2.02",
        ncc_html=ncc_html,
        items=[Item() for _ in range(total)],
    )


def open_book(directory: str | Path) -> Book:
    """Locate the index files below ``directory`` and size the book's item list."""
    index = find_index_names(os.fspath(directory))
    if index.ncc_html:
        return _ncc_book(index.ncc_html)

    ncx = index.ncx if index.ncx and len(index.ncx) >= 4 else None
    opf = index.opf if index.opf and len(index.opf) >= 4 else None
    if ncx is None and opf is None:
        return _ncc_book(create_ncc_html(index.directory))

    items_in_opf = count_tags(opf, "itemref") if opf else 0
    items_in_ncx = count_tags(ncx, "navpoint") if ncx else 0
    if items_in_opf == 0 and items_in_ncx == 0:
        raise BookError(_NOT_PLAYABLE)
    total = max(items_in_opf, items_in_ncx)
    return Book(
        directory=index.directory,
        version="3",
        ncx=ncx,
        opf=opf,
        items=[Item() for _ in range(total)],
        items_in_opf=items_in_opf,
        items_in_ncx=items_in_ncx,
    )