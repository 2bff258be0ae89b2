"""Locating the files of a book on disk."""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import unquote


def convert_url_name(name: str) -> str:
    """Decode %XX escapes in a file reference."""
    return unquote(name, errors="surrogateescape")


def _sorted_entries(directory: str) -> list[os.DirEntry]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _search_name(directory: str, target: str) -> str | None:
    found = None
    for entry in _sorted_entries(directory):
        if entry.name.lower() == target:
            return os.path.join(directory, entry.name)
        if entry.is_dir(follow_symlinks=False):
            deeper = _search_name(os.path.join(directory, entry.name), target)
            if deeper is not None:
                found = deeper
    return found


def find_file(directory: str, name: str) -> str | None:
    """Find a file by base name, ignoring case, below ``directory``.

    A match in a directory itself wins over matches in its subdirectories;
    among subdirectories the last match in name order wins.
    """
    target = os.path.basename(name).lower()
    return _search_name(directory, target)


def find_by_substring(directory: str, needle: str) -> str | None:
    """Find the first path below ``directory`` whose name contains ``needle``."""
    if not needle:
        return None
    wanted = needle.lower()
    if wanted in directory.lower():
        return directory
    for entry in _sorted_entries(directory):
        path = os.path.join(directory, entry.name)
        if wanted in entry.name.lower():
            return path
        if entry.is_dir(follow_symlinks=False):
            found = find_by_substring(path, needle)
            if found is not None:
                return found
    return None


@dataclass(frozen=True)
class IndexNames:
    """The index files of a book and the directory it lives in."""

    directory: str
    ncc_html: str | None = None
    ncx: str | None = None
    opf: str | None = None

    @property
    def version(self) -> str:
        if self.ncc_html:
            return "2.02"
        if self.ncx or self.opf:
            return "3"
        return ""


def find_index_names(directory: str) -> IndexNames:
    """Locate ncc.html, the NCX and the OPF of the book below ``directory``."""
    ncc_html = find_file(directory, "ncc.html")
    ncx = find_by_substring(directory, ".ncx")
    opf = find_by_substring(directory, ".opf")
    book_dir = os.path.dirname(opf) if opf else directory
    return IndexNames(directory=book_dir, ncc_html=ncc_html, ncx=ncx, opf=opf)