"""Text of the title line, item rows, clocks and help pages."""

from __future__ import annotations

from typing import Sequence

from daisyplay.book import Item
from daisyplay.timecodes import split_hms

WIDTH = 80
_DOTS_END = 59
_PAGE_COLUMN = 61


def _put(row: list[str], column: int, text: str) -> int:
    for char in text:
        if column >= len(row):
            break
        row[column] = char
        column += 1
    return column


def displayed_duration(
    items: Sequence[Item], nth: int, level: int, playing: int, speed: float
) -> int | None:
    """Return the whole seconds shown for item ``nth``, or None if it is hidden.

    An item that is not playing also counts the deeper items that follow it.
    """
    if items[nth].level > level and playing != nth:
        return None
    duration = 0
    index = nth
    while True:
        duration = int(duration + items[index].duration)
        index += 1
        if index >= len(items):
            break
        if playing == nth or items[index].level <= level:
            break
    return int(duration / speed)


def format_total_length(total_time: float, speed: float) -> str:
    """Return the "total length: HH:MM:SS" text for the given playing speed."""
    hours, minutes, seconds = split_hms(total_time / speed)
    return f"total length: {hours:02d}:{minutes:02d}:{seconds:02d}"


def format_clock(seconds: float, speed: float) -> str:
    """Return "MM:SS" for a number of seconds at the given playing speed."""
    scaled = int(seconds / speed)
    minutes = int(scaled / 60)
    rest = scaled - minutes * 60
    return f"{minutes:02d}:{rest:02d}"


def render_title_line(
    total_pages: int,
    level: int,
    depth: int,
    total_time: float,
    speed: float,
    screen: int,
    screens: int,
) -> str:
    """Return the 80-column status line shown under the title."""
    row = list("-" * WIDTH)
    column = _put(row, 0, "'h' for help -")
    if total_pages:
        _put(row, column, f" {total_pages} pages ")
    _put(row, 29, f" level: {level} of {depth} ")
    _put(row, 47, f" {format_total_length(total_time, speed)} ")
    _put(row, 74, f" {screen + 1}/{screens} ")
    return "".join(row)


def render_item_line(item: Item) -> str:
    """Return the row of one item: label, dot leader and page number."""
    row = [" "] * WIDTH
    column = _put(row, item.x + 1, item.label)
    end = len(item.label) + item.x
    if end % 2:
        column = _put(row, column, " ")
    for _ in range(end, _DOTS_END, 2):
        column = _put(row, column, " .")
    if item.page_number:
        _put(row, _PAGE_COLUMN, f" ({item.page_number:3d})")
    return "".join(row).rstrip()


def help_pages(audio_cd: bool, total_pages: int) -> list[list[str]]:
    """Return the three pages of key help, each a list of lines."""
    first = [
        "These commands are available in this version:",
        "=" * WIDTH,
        "",
        "cursor down,2   - move cursor to the next item",
        "cursor up,8     - move cursor to the previous item",
        "cursor right,6  - skip 10 seconds forwards",
        "cursor left,4   - skip 10 seconds backwards",
        "page-down,3     - view next page",
        "page-up,9       - view previous page",
        "enter           - start playing",
        "space,0         - pause/resume playing",
        "home,*          - play on normal speed",
        "",
        "Press any key for next page...",
    ]
    second = [
        "/               - search for a label",
        "d               - store current item to disk",
        "D,-             - decrease playing speed",
        "e,.             - quit daisy-player, place a bookmark and eject",
        "f               - find the currently playing item and place the cursor there",
        "g               - go to time in this song (MM:SS)"
        if audio_cd
        else "g               - go to time in this item (MM:SS)",
    ]
    if total_pages:
        second.append("G               - go to page number")
    second.extend(
        [
            "h,?             - give this help",
            "j,5             - just play current item",
            "l               - switch to next level",
            "L               - switch to previous level",
            "",
            "Press any key for next page...",
        ]
    )
    third = [
        "m               - mute sound output on/off",
        "n               - search forwards",
        "N               - search backwards",
        "o               - select next output sound device",
        "p               - place a bookmark",
        "q               - quit daisy-player and place a bookmark",
        "s               - stop playing",
        "T               - display the time passing during playback on/off",
        "U,+             - increase playing speed",
        "v,1             - decrease playback volume",
        "V,7             - increase playback volume (beware of Clipping)",
        "",
        "Press any key to leave help...",
    ]
    return [first, second, third]