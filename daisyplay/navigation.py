"""Cursor movement, paging and label search over the table of contents."""

from __future__ import annotations

from typing import MutableSequence, Sequence

from daisyplay.book import Item

LABEL_COLUMNS = 60


def layout_items(items: MutableSequence[Item], max_y: int) -> MutableSequence[Item]:
    """Assign each item its screen and row, and shorten labels that are too wide."""
    if max_y <= 0:
        raise ValueError("a screen needs at least one row")
    for index, item in enumerate(items):
        item.screen, item.y = divmod(index, max_y)
        if len(item.label) + item.x > LABEL_COLUMNS:
            item.label = item.label[: max(LABEL_COLUMNS - item.x, 0)]
    return items


def previous_item(items: Sequence[Item], current: int, level: int) -> int:
    """Return the nearest item at or before ``current`` that is visible at ``level``."""
    while current > 0 and items[current].level > level:
        current -= 1
    return current


def next_item(items: Sequence[Item], current: int, level: int) -> int | None:
    """Return the next item visible at ``level``, or None when there is none."""
    for index in range(current + 1, len(items)):
        if items[index].level <= level:
            return index
    return None


def next_screen(items: Sequence[Item], current: int) -> int | None:
    """Return the first item of the following screen, or None on the last screen."""
    old_screen = items[current].screen
    if old_screen == items[-1].screen:
        return None
    index = current + 1
    while items[index].screen == old_screen:
        index += 1
    return index


def previous_screen(items: Sequence[Item], current: int, max_y: int) -> int | None:
    """Return the first item of the preceding screen, or None on the first screen."""
    old_screen = items[current].screen
    if old_screen == 0:
        return None
    index = current - 1
    while items[index].screen == old_screen:
        index -= 1
    return index - (max_y - 1)


def _matches(item: Item, wanted: str) -> bool:
    return wanted in item.label.lower()


def search(
    items: Sequence[Item], text: str, start: int, backwards: bool = False
) -> int | None:
    """Find a label containing ``text``, ignoring case, wrapping around the book.

    Forwards the search runs from ``start`` to the end and then from the first
    item; backwards it runs from ``start`` down to the first item and then from
    the last. Returns the index found, or None.
    """
    wanted = text.lower()
    total = len(items)
    if backwards:
        order = [*range(min(start, total - 1), -1, -1), *range(total - 1, start, -1)]
    else:
        order = [*range(max(start, 0), total), *range(0, min(start, total))]
    return next((index for index in order if _matches(items[index], wanted)), None)


def change_level(level: int, depth: int, key: str) -> int:
    """Return the level after pressing 'l' (deeper) or 'L' (shallower)."""
    if key not in ("l", "L"):
        raise ValueError(f"unknown level key {key!r}")
    if depth == 1:
        return level
    if key == "l":
        level += 1
        return 1 if level > depth else level
    level -= 1
    return depth if level < 1 else level