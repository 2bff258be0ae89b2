"""Discovery of ALSA sound cards and their master volume."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

AMIXER = "/usr/bin/amixer"
CARDS_PATH = "/proc/asound/cards"
_NAME_LIMIT = 79


@dataclass
class SoundDevice:
    """One output device with its mixer state."""

    device: str
    type: str
    name: str
    volume: str = ""
    muted: str = ""

    @property
    def spec(self) -> str:
        return f"{self.device}:{self.type}"


def parse_amixer(text: str) -> tuple[str, str] | None:
    """Read (volume, muted) from ``amixer get Master playback`` output.

    Returns None when the output has no playback control at all.
    """
    found = False
    volume = muted = ""
    for line in text.splitlines():
        if "playback" not in line.lower():
            continue
        found = True
        if "[" not in line:
            continue
        rest = line.split("[", 1)[1]
        volume = rest[:4].split("]", 1)[0]
        state = rest.rsplit("[", 1)[-1].split("]", 1)[0]
        muted = {"on": "no", "off": "yes"}.get(state, state)
    return (volume, muted) if found else None


def parse_asound_cards(text: str) -> list[SoundDevice]:
    """Read the card list in the format of /proc/asound/cards."""
    lines = text.splitlines()
    devices = []
    for first, second in zip(lines[0::2], lines[1::2]):
        card = first.lstrip().split(" ", 1)[0]
        description = second.lstrip().rstrip("\r\n").rsplit(" ", 1)[0]
        devices.append(
            SoundDevice(
                device=f"hw:{card}",
                type="alsa",
                name=f"(alsa) {description}"[:_NAME_LIMIT],
            )
        )
    return devices


def _amixer_output(device: str) -> str:
    try:
        completed = subprocess.run(
            [AMIXER, "-D", device, "get", "Master", "playback"],
            capture_output=True,
            text=True,
            env={**os.environ, "LANGUAGE": "C"},
            check=False,
        )
    except FileNotFoundError as exc:
        raise OSError(
            "Be sure the package alsa-utils is installed onto your system."
        ) from exc
    return completed.stdout


def list_alsa_cards(cards_path: str | Path = CARDS_PATH) -> list[SoundDevice]:
    """List the ALSA cards that have a playback master control."""
    text = Path(cards_path).read_text(errors="replace")
    cards = []
    for device in parse_asound_cards(text):
        state = parse_amixer(_amixer_output(device.device))
        if state is None:
            continue
        device.volume, device.muted = state
        cards.append(device)
    return cards