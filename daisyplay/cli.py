"""Command line of the player: options, book discovery and test output."""

from __future__ import annotations

import getopt
import os
import shutil
import stat
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from daisyplay.book import Book, BookError, open_book
from daisyplay.discinfo import parse_discinfo, total_duration
from daisyplay.display import format_total_length
from daisyplay.source import (
    SourceError,
    find_mount_point,
    make_tmp_dir,
    remove_tmp_dir,
    resolve_book_path,
)
from daisyplay.timecodes import split_hms

PROGRAM = "daisy-player"
SHORT_OPTIONS = "c:d:hijnvyONTD"
MOUNTS_PATH = "/proc/mounts"
MOUNT_TIMEOUT = 10.0
_NO_DISC = "No Daisy CD in drive."


@dataclass
class Options:
    """Settings taken from the command line."""

    path: str | None = None
    cd_dev: str = "/dev/sr0"
    audio_device: str | None = None
    ignore_bookmark: bool = False
    cddb_flag: str = "y"
    check_cddb: bool = False
    update_time: bool = True
    verbose: bool = False
    use_opf: bool = False
    use_ncx: bool = False
    test_mode: bool = False
    help: bool = False


def parse_args(argv: Sequence[str]) -> Options:
    """Read the command line; raise ValueError on an unknown or malformed option."""
    try:
        pairs, rest = getopt.gnu_getopt(list(argv), SHORT_OPTIONS)
    except getopt.GetoptError as exc:
        raise ValueError(str(exc)) from exc
    options = Options()
    for flag, value in pairs:
        if flag == "-c":
            options.cd_dev = value
        elif flag == "-d":
            if ":" not in value:
                raise ValueError("audio device must be given as audio_device:audio_type")
            options.audio_device = value
        elif flag == "-h":
            options.help = True
        elif flag == "-i":
            options.ignore_bookmark = True
        elif flag == "-n":
            options.cddb_flag = "n"
            options.check_cddb = False
        elif flag in ("-y", "-j"):
            options.cddb_flag = "y"
            options.check_cddb = True
        elif flag == "-T":
            options.update_time = False
        elif flag == "-v":
            options.verbose = True
        elif flag == "-N":
            options.use_ncx, options.use_opf = True, False
        elif flag == "-O":
            options.use_opf, options.use_ncx = True, False
        elif flag == "-D":
            options.test_mode = True
    if rest:
        options.path = rest[0]
    return options


def usage_text() -> str:
    """Return the usage message."""
    return (
        "Daisy-player\n"
        f"Usage: {PROGRAM} [directory_with_a_Daisy-structure] | [Daisy_book_archive]\n"
        "[-c cdrom_device] [-d audio_device:audio_type] "
        "[-h] [-i] [-T] [-n | -y] [-v]"
    )


def spine_lines(book: Book) -> list[str]:
    """Return the listing of every item's SMIL file and anchor."""
    lines = [f"SPINE ({book.total_items}):"]
    lines.extend(
        f"{number: 4d}: {item.smil_file}#{item.smil_anchor}"
        for number, item in enumerate(book.items, start=1)
    )
    return lines


def _quiet(command: list[str]) -> bool:
    try:
        completed = subprocess.run(
            command,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except FileNotFoundError:
        return False
    return completed.returncode == 0


def _read_mounts() -> str:
    try:
        return Path(MOUNTS_PATH).read_text(errors="replace")
    except OSError as exc:
        raise SourceError("Cannot read /proc/mounts.") from exc


def _disc_directory(cd_dev: str) -> tuple[str, bool]:
    try:
        info = os.stat(cd_dev)
    except OSError as exc:
        raise SourceError(f"Cannot read {cd_dev}: {exc.strerror}") from exc
    if not os.access(cd_dev, os.R_OK):
        raise SourceError(f"Cannot read {cd_dev}: {os.strerror(13)}")
    if not stat.S_ISBLK(info.st_mode):
        raise SourceError(f"{cd_dev} is not a cd device")
    _quiet(["eject", "-tp", cd_dev])
    mounted_here = False
    deadline = time.monotonic() + MOUNT_TIMEOUT
    while True:
        mount_point = find_mount_point(_read_mounts())
        if mount_point:
            return mount_point, mounted_here
        if time.monotonic() >= deadline:
            raise SourceError(_NO_DISC)
        _quiet(["udisksctl", "mount", "-b", cd_dev])
        mounted_here = True
        time.sleep(0.5)


def _print_discinfo(path: str, directory: str) -> None:
    title, entries = parse_discinfo(path, directory)
    if title:
        print(title)
    print(format_total_length(total_duration(entries), 1.0))
    print("Select an Audio_book:")
    for number, entry in enumerate(entries):
        hours, minutes, seconds = split_hms(entry.duration)
        print(f"{number} {entry.label}  {hours:02d}:{minutes:02d}:{seconds:02d}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_args(args)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        print(usage_text())
        return 1
    if options.help:
        print(usage_text())
        return 0
    if options.check_cddb and shutil.which("cddbget") is None:
        options.cddb_flag = "n"

    tmp_dir: str | None = None
    mounted_here = False
    try:
        tmp_dir = make_tmp_dir()
        if options.path:
            directory = resolve_book_path(options.path, tmp_dir)
        else:
            directory, mounted_here = _disc_directory(options.cd_dev)
        book = open_book(directory)
        discinfo = os.path.join(book.directory, "discinfo.html")
        if os.access(discinfo, os.R_OK):
            _print_discinfo(discinfo, book.directory)
        if options.test_mode:
            print("\n".join(spine_lines(book)))
        else:
            print(
                f"Found a DAISY {book.version} book with "
                f"{book.total_items} items in {book.directory}"
            )
        return 0
    except (SourceError, BookError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        if tmp_dir:
            remove_tmp_dir(tmp_dir)
        if mounted_here:
            _quiet(["udisksctl", "unmount", "-b", options.cd_dev, "--force"])


if __name__ == "__main__":
    raise SystemExit(main())