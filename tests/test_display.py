import pytest

from daisyplay.book import Item
from daisyplay.display import (
    displayed_duration,
    format_clock,
    format_total_length,
    help_pages,
    render_item_line,
    render_title_line,
)
from daisyplay.timecodes import parse_go_to_time


def _items():
    return [
        Item(label="One", level=1, duration=10),
        Item(label="One a", level=2, duration=20),
        Item(label="Two", level=1, duration=30),
    ]


def test_duration_includes_deeper_items():
    items = _items()
    assert displayed_duration(items, 0, 1, -1, 1.0) == items[0].duration + items[1].duration


def test_duration_of_playing_item_is_its_own():
    items = _items()
    assert displayed_duration(items, 0, 1, 0, 1.0) == items[0].duration


def test_duration_hidden_item():
    items = _items()
    assert displayed_duration(items, 1, 1, -1, 1.0) is None
    assert displayed_duration(items, 1, 1, 1, 1.0) == items[1].duration


def test_duration_scales_with_speed():
    items = _items()
    normal = displayed_duration(items, 2, 1, -1, 1.0)
    assert displayed_duration(items, 2, 1, -1, 2.0) == normal // 2


def test_format_clock_zero():
    assert format_clock(0, 1.0) == "00:00"


@pytest.mark.parametrize("seconds", [0, 9, 59, 60, 61, 600, 3599, 5999])
def test_format_clock_round_trips(seconds):
    assert parse_go_to_time(format_clock(seconds, 1.0)) == seconds


def test_format_clock_speed_halves():
    assert format_clock(120, 2.0) == format_clock(60, 1.0)


@pytest.mark.parametrize("total", [0, 59, 3600, 3723, 86399])
def test_total_length_reads_back(total):
    text = format_total_length(total, 1.0)
    assert text.startswith("total length: ")
    hours, minutes, seconds = (int(part) for part in text.split(": ")[1].split(":"))
    assert hours * 3600 + minutes * 60 + seconds == total


def test_total_length_pinned():
    assert format_total_length(3723, 1.0) == "total length: 01:02:03"


def test_title_line_layout():
    line = render_title_line(12, 2, 3, 3723, 1.0, 0, 2)
    assert len(line) == 80
    assert line.startswith("'h' for help - 12 pages ")
    assert line[29:].startswith(" level: 2 of 3 ")
    assert line[47:].startswith(" total length: 01:02:03 ")
    assert line[74:].startswith(" 1/2 ")


def test_title_line_without_pages():
    line = render_title_line(0, 1, 1, 0, 1.0, 0, 1)
    assert "pages" not in line
    assert line[14:29] == "-" * 15


def test_item_line_label_position_and_page():
    item = Item(label="Chapter", x=1, page_number=12)
    line = render_item_line(item)
    assert line[item.x + 1:item.x + 1 + len(item.label)] == item.label
    assert line[61:] == f" ({item.page_number:3d})"


@pytest.mark.parametrize("length", range(1, 56))
def test_item_line_dot_leader_aligns(length):
    line = render_item_line(Item(label="a" * length, x=1))
    assert len(line) == 61
    assert line.endswith(" .")


def test_help_pages_content():
    pages = help_pages(False, 0)
    assert len(pages) == 3
    assert not any(line.startswith("G ") for line in pages[1])
    assert "g               - go to time in this item (MM:SS)" in pages[1]
    assert pages[2][-1] == "Press any key to leave help..."


def test_help_pages_audio_cd_and_pages():
    pages = help_pages(True, 10)
    assert "g               - go to time in this song (MM:SS)" in pages[1]
    assert "G               - go to page number" in pages[1]