"""Parsing and splitting of clip times and clock values."""

from __future__ import annotations

import re

_INT_RE = re.compile(r"[ \t\n\r\v\f]*([+-]?\d+)")
_FLOAT_RE = re.compile(r"[ \t\n\r\v\f]*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _int_prefix(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _float_prefix(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def read_time(text: str) -> float:
    """Convert "h:m:s", "m:s" or "s" into seconds."""
    head, colon, seconds = text.rpartition(":")
    if not colon:
        return _float_prefix(text)
    if ":" in head:
        hours, _, minutes = head.rpartition(":")
    else:
        hours, minutes = "0", head
    return _int_prefix(hours) * 3600 + _int_prefix(minutes) * 60 + _float_prefix(seconds)


def parse_clock(value: str) -> float:
    """Convert a SMIL clip value such as "npt=12.5s" or "0:01:02.5" into seconds."""
    match = re.search(r"\d", value)
    if match is None:
        raise ValueError(f"no time in clip value {value!r}")
    digits = value[match.start():].split("s", 1)[0]
    if ":" not in digits:
        return _float_prefix(digits)
    return read_time(digits)


def clip_bounds(clip_begin: str, clip_end: str) -> tuple[float, float] | None:
    """Return (begin, end) in seconds, or None when there is no begin."""
    if not clip_begin:
        return None
    return parse_clock(clip_begin), parse_clock(clip_end)


def split_hms(seconds: float) -> tuple[int, int, int]:
    """Split a number of seconds into whole hours, minutes and seconds."""
    hours = int(seconds / 3600)
    minutes = int((seconds - hours * 3600) / 60)
    rest = int(seconds - (hours * 3600 + minutes * 60))
    return hours, minutes, rest


def parse_go_to_time(text: str) -> int:
    """Convert an "MM:SS" entry into seconds; an empty entry means 0."""
    if not text:
        return 0
    if len(text) != 5:
        raise ValueError("time must be given as MM:SS")
    digits = text[0] + text[1] + text[3] + text[4]
    if not digits.isdigit() or not digits.isascii():
        raise ValueError("time must be given as MM:SS")
    return int(text[0:2]) * 60 + int(text[3:5])