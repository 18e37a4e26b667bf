"""Reading XPM texture files into in-memory pixel grids."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from cubcaster.colors import NONE_COLOR, lookup_color

TRANSPARENT = 0xFF000000
"""Pixel value stored for the ``None`` colour."""

_QUOTED = re.compile(r'"([^"]*)"')
_WORD_SEPARATOR = re.compile(r"[ \t]+")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_HEX_PREFIX = re.compile(r"\s*([+-]?)(?:0[xX])?([0-9a-fA-F]+)")
_NAME_LIMIT = 63
_PIXEL_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class XpmImage:
    """A decoded image: ``pixels`` holds 0xAARRGGBB values row by row."""

    width: int
    height: int
    pixels: tuple[int, ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y), or 0 outside the image."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return 0
        return self.pixels[y * self.width + x]


def split_words(text: str) -> list[str]:
    """Split text into words separated by spaces and tabs."""
    return [word for word in _WORD_SEPARATOR.split(text) if word]


def _blank_comments(text: str, opener: str, closer: str) -> str:
    pieces: list[str] = []
    quoted = False
    start = index = 0
    while index < len(text):
        if text[index] == '"':
            quoted = not quoted
        elif not quoted and text.startswith(opener, index):
            end = text.find(closer, index + len(opener))
            stop = len(text) if end == -1 else end + len(closer)
            pieces.append(text[start:index])
            pieces.append(" " * (stop - index))
            start = index = stop
            continue
        index += 1
    pieces.append(text[start:])
    return "".join(pieces)


def strip_comments(text: str) -> str:
    """Replace ``/* */`` and ``//`` comments outside quotes with spaces.

    The text keeps its length; a line comment is blanked together with its newline.
    """
    return _blank_comments(_blank_comments(text, "/*", "*/"), "//", "\n")


def _atoi(word: str) -> int:
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def text_to_rgb(name: str, end: str | None = None) -> int:
    """Turn an XPM colour value into 0xRRGGBB.

    ``#`` values are read as hexadecimal. Otherwise ``name`` (joined with
    ``end`` when given) is looked up among the named colours; unknown names
    give 0 and ``none`` gives -1.
    """
    if name.startswith("#"):
        match = _HEX_PREFIX.match(name, 1)
        if match is None:
            return 0
        value = int(match.group(2), 16)
        return -value if match.group(1) == "-" else value
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def _next_string(strings: Iterator[str], what: str) -> str:
    value = next(strings, None)
    if value is None:
        raise ValueError(f"XPM data ends before the {what}")
    return value


def _read_palette(strings: Iterator[str], count: int, cpp: int) -> dict[str, int]:
    palette: dict[str, int] = {}
    last_wins = cpp <= 2
    for _ in range(count):
        line = _next_string(strings, "colour table is complete")
        words = split_words(line[cpp:])
        try:
            marker = words.index("c")
        except ValueError:
            raise ValueError(f"XPM colour line has no 'c' entry: {line!r}") from None
        if marker + 1 >= len(words):
            raise ValueError(f"XPM colour line has no colour value: {line!r}")
        end = words[marker + 2] if marker + 2 < len(words) else None
        color = text_to_rgb(words[marker + 1], end)
        key = line[:cpp]
        if last_wins or key not in palette:
            palette[key] = color
    return palette


def parse_xpm(text: str) -> XpmImage:
    """Decode the text of an XPM file.

    Raises ValueError when the header, colour table or pixel rows are
    missing or malformed.
    """
    strings = iter(_QUOTED.findall(strip_comments(text)))
    header = split_words(_next_string(strings, "header"))
    if len(header) < 4:
        raise ValueError("XPM header needs width, height, colour count and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise ValueError("XPM header values must be positive")
    palette = _read_palette(strings, ncolors, cpp)
    pixels: list[int] = []
    for _ in range(height):
        row = _next_string(strings, "last pixel row")
        for x in range(width):
            color = palette.get(row[x * cpp:(x + 1) * cpp], 0)
            if color == NONE_COLOR:
                color = TRANSPARENT
            pixels.append(color & _PIXEL_MASK)
    return XpmImage(width=width, height=height, pixels=tuple(pixels))


def load_xpm(path: str | os.PathLike[str]) -> XpmImage:
    """Read and decode an XPM file; OSError and ValueError propagate."""
    return parse_xpm(Path(path).read_text(encoding="latin-1"))