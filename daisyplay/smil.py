"""Audio clips of SMIL files and the playing times derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from daisyplay.book import BookError, Item
from daisyplay.markup import Token, read_tokens, skip_to_anchor
from daisyplay.timecodes import clip_bounds

_NO_AUDIO = 'This book has no audio. Play this book with "eBook-speaker"'


@dataclass(frozen=True)
class Clip:
    """A stretch of an audio file, in seconds."""

    src: str
    begin: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.begin


def _has_id(token: Token, anchor: str) -> bool:
    return bool(anchor) and token.attributes.id.lower() == anchor.lower()


def audio_clips(
    path: str | Path, anchor: str = "", stop_anchor: str = ""
) -> list[Clip]:
    """Return the audio clips that follow ``anchor`` in a SMIL file.

    Collection stops at the element whose id is ``stop_anchor``, but only once
    an audio element has been met. Audio elements without a begin are skipped.
    """
    clips: list[Clip] = []
    seen_audio = False
    for token in skip_to_anchor(read_tokens(path), anchor):
        if seen_audio and _has_id(token, stop_anchor):
            break
        if token.is_text or token.is_end or token.tag != "audio":
            continue
        seen_audio = True
        bounds = clip_bounds(token.attributes.clip_begin, token.attributes.clip_end)
        if bounds is None:
            continue
        clips.append(Clip(token.attributes.src, *bounds))
    return clips


def item_duration(path: str | Path, anchor: str = "", next_anchor: str = "") -> float:
    """Return the summed length of the clips of one item."""
    return sum(clip.duration for clip in audio_clips(path, anchor, next_anchor))


def calculate_times(items: Sequence[Item]) -> float:
    """Set the begin and duration of every item and return the total time.

    Raises BookError when the book holds no audio at all.
    """
    total = 0.0
    for index, item in enumerate(items):
        item.duration = 0.0
        if not item.smil_file:
            continue
        next_anchor = items[index + 1].smil_anchor if index + 1 < len(items) else ""
        clips = audio_clips(item.smil_file, item.smil_anchor, next_anchor)
        if clips:
            item.begin = clips[0].begin
        item.duration = sum(clip.duration for clip in clips)
        total += item.duration
    if total == 0:
        raise BookError(_NO_AUDIO)
    return total


def seek_offset(clips: Sequence[Clip], seconds: float) -> tuple[int, float]:
    """Find where ``seconds`` into an item falls among its clips.

    Returns the index of the clip and the position in its audio file.
    """
    if seconds < 0:
        raise ValueError("cannot seek to a negative time")
    if not clips:
        raise ValueError("the item has no audio clips")
    played = 0.0
    for index, clip in enumerate(clips):
        before = played
        played += clip.duration
        if played >= seconds:
            return index, clip.begin + (seconds - before)
    raise ValueError("time lies beyond the end of the item")