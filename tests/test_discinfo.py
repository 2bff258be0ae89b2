import os

import pytest

from daisyplay.discinfo import DiscEntry, parse_discinfo, total_duration
from daisyplay.timecodes import read_time

DISCINFO = """<html><head><title>Disc Title</title></head><body>
<p><a href="one/one.html">First Book</a></p>
<p><a href="two/two.html">Second Book</a></p>
</body></html>
"""


def _ncc(total_time):
    meta = f'<meta name="ncc:totalTime" content="{total_time}"/>' if total_time else ""
    return f"<html><head>{meta}</head><body><h1>x</h1></body></html>\n"


@pytest.fixture
def disc(tmp_path):
    (tmp_path / "one").mkdir()
    (tmp_path / "two").mkdir()
    (tmp_path / "one" / "one.html").write_text(_ncc("0:01:05.3"), encoding="utf-8")
    (tmp_path / "two" / "two.html").write_text(_ncc("1:02:03"), encoding="utf-8")
    path = tmp_path / "discinfo.html"
    path.write_text(DISCINFO, encoding="utf-8")
    return tmp_path, path


def test_title_and_labels(disc):
    directory, path = disc
    title, entries = parse_discinfo(path, directory)
    assert title == "Disc Title"
    assert [entry.label for entry in entries] == ["First Book", "Second Book"]
    assert all(entry.level == 1 for entry in entries)


def test_filenames_resolved(disc):
    directory, path = disc
    _, entries = parse_discinfo(path, directory)
    assert entries[0].filename == os.path.join(str(directory), "one", "one.html")
    assert entries[1].filename == os.path.join(str(directory), "two", "two.html")


def test_durations_from_total_time(disc):
    directory, path = disc
    _, entries = parse_discinfo(path, directory)
    assert entries[0].duration == read_time("0:01:05")
    assert entries[1].duration == read_time("1:02:03")


def test_total_duration(disc):
    directory, path = disc
    _, entries = parse_discinfo(path, directory)
    assert total_duration(entries) == entries[0].duration + entries[1].duration


def test_total_duration_of_nothing():
    assert total_duration([]) == 0


def test_book_without_total_time(tmp_path):
    (tmp_path / "book.html").write_text(_ncc(""), encoding="utf-8")
    path = tmp_path / "discinfo.html"
    path.write_text('<html><body><a href="book.html">Only</a></body></html>', encoding="utf-8")
    title, entries = parse_discinfo(path, tmp_path)
    assert title == ""
    assert entries == [
        DiscEntry(label="Only", filename=os.path.join(str(tmp_path), "book.html"))
    ]


def test_missing_link_target(tmp_path):
    path = tmp_path / "discinfo.html"
    path.write_text('<html><body><a href="gone.html">Gone</a></body></html>', encoding="utf-8")
    with pytest.raises(FileNotFoundError):
        parse_discinfo(path, tmp_path)