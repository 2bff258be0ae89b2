import os

import pytest

from daisyplay.prefs import (
    Bookmark,
    Preferences,
    bookmark_path,
    load_bookmark,
    load_preferences,
    save_bookmark,
    save_preferences,
)


def test_missing_preferences_give_defaults(tmp_path):
    prefs = load_preferences(tmp_path / "absent.xml")
    assert prefs == Preferences()
    assert prefs.cd_dev == "/dev/sr0"


def test_preferences_round_trip(tmp_path):
    path = tmp_path / ".daisy-player.xml"
    original = Preferences(current_sink=2, speed=1.5, cd_dev="/dev/sr1", cddb_flag="n")
    save_preferences(original, path)
    assert load_preferences(path) == original


def test_preferences_file_layout(tmp_path):
    path = tmp_path / "prefs.xml"
    save_preferences(Preferences(), path)
    text = path.read_text(encoding="utf-8")
    assert '<prefs current-sink="0"' in text
    assert 'cddb_flag="y"' in text


def test_invalid_speed_falls_back_to_normal(tmp_path):
    path = tmp_path / "prefs.xml"
    path.write_text('<prefs current-sink="1" speed="5.0" cddb_flag="y"/>')
    prefs = load_preferences(path)
    assert prefs.speed == 1.0
    assert prefs.current_sink == 1


def test_unknown_cddb_flag_becomes_y(tmp_path):
    path = tmp_path / "prefs.xml"
    path.write_text('<prefs cddb_flag="x"/>')
    assert load_preferences(path).cddb_flag == "y"


def test_bookmark_path_layout(tmp_path):
    path = bookmark_path(tmp_path, "Audio-CD", "")
    assert path == os.path.join(str(tmp_path), ".daisy-player", "Audio-CD")


def test_bookmark_round_trip(tmp_path):
    path = bookmark_path(tmp_path, "Book", "mcn")
    bookmark = Bookmark(item=3, elapsed_seconds=42, level=2)
    assert save_bookmark(bookmark, path) is True
    assert load_bookmark(path, total_items=10) == bookmark


def test_bookmark_item_out_of_range_resets(tmp_path):
    path = tmp_path / "bm"
    save_bookmark(Bookmark(item=7, elapsed_seconds=5, level=1), path)
    loaded = load_bookmark(path, total_items=7)
    assert loaded.item == 0
    assert loaded.elapsed_seconds == 5


def test_negative_bookmark_item_resets(tmp_path):
    path = tmp_path / "bm"
    path.write_text('<bookmark item="-4" elapsed_seconds="0" level="1"/>')
    assert load_bookmark(path, total_items=3).item == 0


def test_missing_bookmark_is_none(tmp_path):
    assert load_bookmark(tmp_path / "nothing", total_items=3) is None


def test_bookmark_without_level_keeps_first_level(tmp_path):
    path = tmp_path / "bm"
    path.write_text('<bookmark item="1" elapsed_seconds="9"/>')
    assert load_bookmark(path, total_items=3) == Bookmark(item=1, elapsed_seconds=9, level=1)


def test_save_bookmark_unwritable_returns_false(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    assert save_bookmark(Bookmark(), blocker / "sub" / "bm") is False


@pytest.mark.parametrize("flag", ["n", "y"])
def test_cddb_flag_kept(tmp_path, flag):
    path = tmp_path / "prefs.xml"
    save_preferences(Preferences(cddb_flag=flag), path)
    assert load_preferences(path).cddb_flag == flag