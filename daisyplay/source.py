"""Finding where a book lives: a directory, an archive or a mounted disc."""

from __future__ import annotations

import bz2
import gzip
import os
import re
import shutil
import subprocess
import tarfile
import tempfile
import zipfile
from pathlib import Path

TMP_ROOT = "/tmp"
TMP_PREFIX = "daisy-player."
UNAR = "/usr/bin/unar"

KIND_DIRECTORY = "directory"
KIND_ZIP = "zip"
KIND_EPUB = "epub"
KIND_TAR = "tar"
KIND_GZIP = "gzip"
KIND_BZIP2 = "bzip2"
KIND_RAR = "rar"
KIND_CAB = "cab"
KIND_ISO9660 = "iso9660"

_NOT_FOUND = "No DAISY-CD or Audio-cd found"
_UNAR_HINT = "Be sure the package unar is installed onto your system."
_ISO_OFFSET = 0x8001
_OCTAL_ESCAPE = re.compile(r"\\([0-7]{3})")


class SourceError(Exception):
    """No book can be found at the given place."""


def find_mount_point(mounts_text: str) -> str | None:
    """Return the mount point of the first ISO 9660 or UDF file system listed."""
    for line in mounts_text.splitlines():
        lowered = line.lower()
        if "iso9660" not in lowered and "udf" not in lowered:
            continue
        fields = line.split(" ")
        if len(fields) < 2:
            return None
        return _OCTAL_ESCAPE.sub(lambda m: chr(int(m.group(1), 8)), fields[1])
    return None


def _header(path: str, size: int) -> bytes:
    with open(path, "rb") as handle:
        return handle.read(size)


def _is_epub(path: str) -> bool:
    try:
        with zipfile.ZipFile(path) as archive:
            if "mimetype" not in archive.namelist():
                return False
            return archive.read("mimetype").strip() == b"application/epub+zip"
    except (zipfile.BadZipFile, OSError, KeyError):
        return False


def archive_kind(path: str | os.PathLike[str]) -> str | None:
    """Return what kind of book container ``path`` is, or None if unknown."""
    path = os.fspath(path)
    if os.path.isdir(path):
        return KIND_DIRECTORY
    try:
        header = _header(path, _ISO_OFFSET + 5)
    except OSError:
        return None
    if zipfile.is_zipfile(path):
        return KIND_EPUB if _is_epub(path) else KIND_ZIP
    if tarfile.is_tarfile(path):
        return KIND_TAR
    if header.startswith(b"\x1f\x8b"):
        return KIND_GZIP
    if header.startswith(b"BZh"):
        return KIND_BZIP2
    if header.startswith(b"Rar!"):
        return KIND_RAR
    if header.startswith(b"MSCF"):
        return KIND_CAB
    if header[_ISO_OFFSET:_ISO_OFFSET + 5] == b"CD001":
        return KIND_ISO9660
    return None


def _extract_tar(path: str, target: str) -> None:
    with tarfile.open(path) as archive:
        if hasattr(tarfile, "data_filter"):
            archive.extractall(target, filter="data")
            return
        root = os.path.realpath(target)
        for member in archive.getmembers():
            destination = os.path.realpath(os.path.join(target, member.name))
            if os.path.commonpath([root, destination]) != root:
                raise SourceError(f"{member.name}: outside the destination")
            if not (member.isfile() or member.isdir()):
                raise SourceError(f"{member.name}: unsupported archive member")
        archive.extractall(target)


def _decompress(opener, path: str, target: str, suffix: str) -> None:
    name = os.path.basename(path)
    if name.lower().endswith(suffix) and len(name) > len(suffix):
        name = name[: -len(suffix)]
    else:
        name += ".out"
    with opener(path, "rb") as source, open(os.path.join(target, name), "wb") as out:
        shutil.copyfileobj(source, out)


def _unar(path: str, target: str) -> None:
    try:
        completed = subprocess.run(
            [UNAR, "-q", path, "-o", target],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except FileNotFoundError as exc:
        raise SourceError(_UNAR_HINT) from exc
    if completed.returncode != 0:
        raise SourceError(f"Cannot unpack {path}")


def _extract(kind: str, path: str, target: str) -> None:
    try:
        if kind in (KIND_ZIP, KIND_EPUB):
            with zipfile.ZipFile(path) as archive:
                archive.extractall(target)
        elif kind == KIND_TAR:
            _extract_tar(path, target)
        elif kind == KIND_GZIP:
            _decompress(gzip.open, path, target, ".gz")
        elif kind == KIND_BZIP2:
            _decompress(bz2.open, path, target, ".bz2")
        else:
            _unar(path, target)
    except (zipfile.BadZipFile, tarfile.TarError, EOFError, OSError) as exc:
        raise SourceError(f"{path}: {exc}") from exc


def resolve_book_path(path: str | os.PathLike[str], tmp_dir: str | os.PathLike[str]) -> str:
    """Return the directory holding the book given on the command line.

    Archives are unpacked into ``tmp_dir``; when that yields a single entry,
    that entry is the book, otherwise ``tmp_dir`` itself.
    """
    path = os.fspath(path)
    tmp_dir = os.fspath(tmp_dir)
    try:
        os.stat(path)
    except OSError as exc:
        raise SourceError(f"{path}: {exc.strerror}") from exc
    if not os.access(path, os.R_OK):
        raise SourceError(f"{path}: {os.strerror(13)}")
    kind = archive_kind(path)
    if kind is None:
        raise SourceError(_NOT_FOUND)
    if kind == KIND_DIRECTORY:
        return os.path.abspath(path)
    _extract(kind, path, tmp_dir)
    entries = sorted(os.listdir(tmp_dir))
    if not entries:
        raise SourceError(_NOT_FOUND)
    if len(entries) == 1:
        return os.path.join(tmp_dir, entries[0])
    return tmp_dir


def make_tmp_dir() -> str:
    """Create a private working directory below /tmp and return its path."""
    try:
        return tempfile.mkdtemp(prefix=TMP_PREFIX, dir=TMP_ROOT)
    except OSError as exc:
        raise SourceError(f"{TMP_ROOT}/{TMP_PREFIX}XXXXXX: {exc.strerror}") from exc


def remove_tmp_dir(path: str | os.PathLike[str] | None) -> bool:
    """Remove a working directory; paths outside /tmp are left alone.

    Returns True when something was removed.
    """
    if not path:
        return False
    absolute = os.path.abspath(os.fspath(path))
    if not absolute.startswith(TMP_ROOT + "/"):
        return False
    if not os.path.lexists(absolute):
        return False
    try:
        if os.path.isdir(absolute) and not os.path.islink(absolute):
            shutil.rmtree(absolute)
        else:
            os.unlink(absolute)
    except OSError as exc:
        raise SourceError(f"rm -rf {absolute}: {exc.strerror}") from exc
    return not Path(absolute).exists()