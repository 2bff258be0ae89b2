import pytest

from daisyplay.book import BookError, Item
from daisyplay.smil import Clip, audio_clips, calculate_times, item_duration, seek_offset

SMIL = """<smil><head><meta name="title" content="Chapter"/></head><body><seq>
<par id="p1"><text src="a.html#t1"/>
<audio src="a.mp3" clip-begin="npt=0.000s" clip-end="npt=4.000s" id="a1"/></par>
<par id="p2"><audio src="b.mp3" clip-begin="npt=4.000s" clip-end="npt=9.000s" id="a2"/></par>
<par id="p3"><audio src="c.mp3" clip-begin="npt=9.000s" clip-end="npt=12.500s" id="a3"/></par>
</seq></body></smil>
"""

SILENT = """<smil><body><seq><par id="q1"><text src="a.html#t1"/></par></seq></body></smil>
"""


@pytest.fixture
def smil_path(tmp_path):
    path = tmp_path / "chapter.smil"
    path.write_text(SMIL, encoding="utf-8")
    return str(path)


def test_all_clips_in_order(smil_path):
    clips = audio_clips(smil_path)
    assert [clip.src for clip in clips] == ["a.mp3", "b.mp3", "c.mp3"]
    assert clips[0].begin == 0.0
    assert clips[-1].end == 12.5


def test_clips_between_anchors(smil_path):
    clips = audio_clips(smil_path, "p2", "p3")
    assert clips == [Clip("b.mp3", 4.0, 9.0)]


def test_anchor_ignores_case(smil_path):
    assert audio_clips(smil_path, "P2", "P3") == audio_clips(smil_path, "p2", "p3")


def test_stop_anchor_before_audio_is_not_a_stop(smil_path):
    assert len(audio_clips(smil_path, "", "p1")) == 3


def test_unknown_anchor_gives_nothing(smil_path):
    assert audio_clips(smil_path, "missing") == []


def test_item_duration_sums_clips(smil_path):
    clips = audio_clips(smil_path, "p1", "p3")
    assert item_duration(smil_path, "p1", "p3") == sum(c.duration for c in clips)
    assert len(clips) == 2


def test_calculate_times(smil_path):
    items = [
        Item(smil_file=smil_path, smil_anchor="p1"),
        Item(smil_file=smil_path, smil_anchor="p3"),
    ]
    total = calculate_times(items)
    assert items[0].duration == item_duration(smil_path, "p1", "p3")
    assert items[1].duration == item_duration(smil_path, "p3", "")
    assert items[1].begin == 9.0
    assert total == items[0].duration + items[1].duration


def test_item_without_smil_has_no_duration(smil_path):
    items = [Item(smil_file=""), Item(smil_file=smil_path, smil_anchor="p1")]
    total = calculate_times(items)
    assert items[0].duration == 0.0
    assert total == items[1].duration


def test_book_without_audio(tmp_path):
    path = tmp_path / "silent.smil"
    path.write_text(SILENT, encoding="utf-8")
    with pytest.raises(BookError):
        calculate_times([Item(smil_file=str(path))])


def test_seek_start():
    clips = [Clip("a.mp3", 0.0, 10.0), Clip("a.mp3", 10.0, 20.0)]
    assert seek_offset(clips, 0) == (0, 0.0)


def test_seek_into_second_clip():
    clips = [Clip("a.mp3", 0.0, 10.0), Clip("a.mp3", 10.0, 20.0)]
    assert seek_offset(clips, 15) == (1, 15.0)


def test_seek_beyond_end():
    clips = [Clip("a.mp3", 0.0, 10.0)]
    with pytest.raises(ValueError):
        seek_offset(clips, 30)


def test_seek_without_clips():
    with pytest.raises(ValueError):
        seek_offset([], 0)


def test_seek_negative():
    with pytest.raises(ValueError):
        seek_offset([Clip("a.mp3", 0.0, 10.0)], -1)