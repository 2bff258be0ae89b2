"""Tokenising of DAISY navigation, SMIL and HTML documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from pathlib import Path
from typing import Iterable, Iterator, Mapping

_ASCII_SPACE = " \t\n\r\v\f"
_INT_RE = re.compile(r"[ \t\n\r\v\f]*([+-]?\d+)")
_FLOAT_RE = re.compile(r"[ \t\n\r\v\f]*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_PAGE_COUNT_NAMES = (
    "dtb:totalpagecount",
    "ncc:maxpagenormal",
    "ncc:pagenormal",
    "ncc:page-normal",
)


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def clean_label(text: str) -> str:
    """Strip surrounding whitespace and blank out unprintable ASCII characters."""
    stripped = text.strip(_ASCII_SPACE)
    return "".join(
        " " if ord(ch) < 128 and not ch.isprintable() else ch for ch in stripped
    )


@dataclass(frozen=True)
class Attributes:
    """The attributes of one element, with lower-case names."""

    raw: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str, default: str = "") -> str:
        return self.raw.get(name.lower(), default)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.raw

    def _preferred(self, *names: str) -> str:
        for name in names:
            if name in self.raw:
                return self.raw[name]
        return ""

    @property
    def class_name(self) -> str:
        return self.get("class")

    @property
    def clip_begin(self) -> str:
        return self._preferred("clipbegin", "clip-begin")

    @property
    def clip_end(self) -> str:
        return self._preferred("clipend", "clip-end")

    @property
    def href(self) -> str:
        return self.get("href")

    @property
    def id(self) -> str:
        return self.get("id")

    @property
    def idref(self) -> str:
        return self.get("idref")

    @property
    def media_type(self) -> str:
        return self.get("media-type")

    @property
    def playorder(self) -> str:
        return self.get("playorder")

    @property
    def smilref(self) -> str:
        return self.get("smilref")

    @property
    def src(self) -> str:
        return self.get("src")

    @property
    def toc(self) -> str:
        return self.get("toc")

    @property
    def value(self) -> str:
        return self.get("value")


@dataclass(frozen=True)
class Token:
    """An opening tag, a closing tag ("/name") or a text label (empty tag)."""

    tag: str = ""
    label: str = ""
    attributes: Attributes = field(default_factory=Attributes)
    empty: bool = False

    @property
    def is_text(self) -> bool:
        return not self.tag

    @property
    def is_end(self) -> bool:
        return self.tag.startswith("/")

    @property
    def name(self) -> str:
        return self.tag.lstrip("/")


@dataclass
class BookInfo:
    """Book-wide settings gathered from element attributes."""

    daisy_version: str = ""
    daisy_title: str = ""
    bookmark_title: str = ""
    total_pages: int = 0
    ncc_total_time: str = ""
    current_sink: int = 0
    elapsed_seconds: int = 0
    current: int = 0
    level: int = 0
    seconds: int = 0
    current_id: str = ""
    ocr_language: str = ""
    cd_dev: str = "/dev/sr0"
    cddb_flag: str = "y"
    speed: float = 1.0


class _Collector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: list[Token] = []

    @staticmethod
    def _attributes(attrs: list[tuple[str, str | None]]) -> Attributes:
        return Attributes({name.lower(): value or "" for name, value in attrs})

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.tokens.append(Token(tag=tag.lower(), attributes=self._attributes(attrs)))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.tokens.append(
            Token(tag=tag.lower(), attributes=self._attributes(attrs), empty=True)
        )

    def handle_endtag(self, tag: str) -> None:
        self.tokens.append(Token(tag="/" + tag.lower()))

    def handle_data(self, data: str) -> None:
        label = clean_label(data)
        if label:
            self.tokens.append(Token(label=label))

    def unknown_decl(self, data: str) -> None:
        if data.startswith("CDATA["):
            self.handle_data(data[len("CDATA["):])


def tokenize(text: str) -> list[Token]:
    """Split a document into tag and text tokens in document order."""
    collector = _Collector()
    collector.feed(text)
    collector.close()
    return collector.tokens


def read_tokens(path: str | Path) -> list[Token]:
    """Read and tokenise the document at ``path``."""
    return tokenize(Path(path).read_text(encoding="utf-8", errors="replace"))


def apply_attributes(info: BookInfo, attributes: Attributes) -> BookInfo:
    """Update ``info`` in place from the attributes of one element and return it."""
    raw = attributes.raw
    if "current-sink" in raw:
        info.current_sink = _atoi(raw["current-sink"])
    if "elapsed_seconds" in raw:
        info.elapsed_seconds = _atoi(raw["elapsed_seconds"])
    if "id" in raw and raw["id"] != info.current_id:
        info.current_id = raw["id"]
    if "item" in raw:
        info.current = _atoi(raw["item"])
    if "level" in raw:
        info.level = _atoi(raw["level"])
    if "name" in raw:
        name = raw["name"].lower()
        content = raw.get("content", "")
        if "dc:format" in name:
            info.daisy_version = content
        if "dc:title" in name and not info.daisy_title:
            info.daisy_title = content
            info.bookmark_title = content.replace("/", "-", 1)
        if any(key in name for key in _PAGE_COUNT_NAMES):
            info.total_pages = _atoi(content)
        if "dtb:totaltime" in name or "ncc:totaltime" in name:
            info.ncc_total_time = content.split(".", 1)[0]
    if "seconds" in raw:
        info.seconds = max(_atoi(raw["seconds"]), 0)
    if "ocr_language" in raw:
        info.ocr_language = raw["ocr_language"]
    if "cd_dev" in raw:
        info.cd_dev = raw["cd_dev"]
    if "cddb_flag" in raw:
        info.cddb_flag = raw["cddb_flag"][:1]
    if "speed" in raw:
        speed = _atof(raw["speed"])
        info.speed = 1.0 if speed <= 0.1 or speed > 2 else speed
    return info


def skip_to_anchor(tokens: Iterable[Token], anchor: str) -> Iterator[Token]:
    """Return an iterator over the tokens following the element whose id is ``anchor``.

    An empty anchor yields every token; an unknown one yields nothing.
    """
    remaining = iter(tokens)
    if anchor:
        target = anchor.lower()
        for token in remaining:
            if token.attributes.id.lower() == target:
                break
    return remaining