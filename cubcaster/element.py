"""Scene elements, their kinds, and classification of raw scene lines."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

MAP_CHARS = "01NSEW "
PLAYER_CHARS = "NSEW"


class ElementType(enum.IntFlag):
    """Kinds of scene elements; combinable as a mask of what has been seen."""

    EMPTY = 0
    NORTH = 1 << 0
    SOUTH = 1 << 1
    WEST = 1 << 2
    EAST = 1 << 3
    FLOOR = 1 << 4
    CEIL = 1 << 5
    MAP = 1 << 6
    PLAYER_N = 1 << 7
    PLAYER_S = 1 << 8
    PLAYER_E = 1 << 9
    PLAYER_W = 1 << 10
    TEXTURES = NORTH | SOUTH | WEST | EAST
    COLORS = FLOOR | CEIL
    ALL = TEXTURES | COLORS | MAP
    PLAYER = PLAYER_N | PLAYER_S | PLAYER_E | PLAYER_W


_TEXTURE_PREFIXES = {
    "NO ": ElementType.NORTH,
    "SO ": ElementType.SOUTH,
    "WE ": ElementType.WEST,
    "EA ": ElementType.EAST,
}

_PLAYER_TYPES = {
    "N": ElementType.PLAYER_N,
    "S": ElementType.PLAYER_S,
    "E": ElementType.PLAYER_E,
    "W": ElementType.PLAYER_W,
}


@dataclass
class Element:
    """One parsed scene entry: a texture path, a colour, or a map row."""

    type: ElementType
    line: int
    content: str = ""
    color: int | None = None

    @property
    def length(self) -> int:
        """Length of the textual content."""
        return len(self.content)


def get_element(elements: Iterable[Element], element_type: ElementType) -> Element | None:
    """Return the first element sharing any flag with ``element_type``."""
    return next((e for e in elements if e.type & element_type), None)


def element_count(elements: Iterable[Element], element_type: ElementType) -> int:
    """Count elements sharing any flag with ``element_type``."""
    return sum(1 for e in elements if e.type & element_type)


def texture_type(line: str) -> ElementType:
    """Return the wall direction named by a texture line."""
    for prefix, kind in _TEXTURE_PREFIXES.items():
        if line.startswith(prefix):
            return kind
    raise ValueError(f"not a texture line: {line!r}")


def color_type(line: str) -> ElementType:
    """Return FLOOR for an ``F`` line and CEIL otherwise."""
    return ElementType.FLOOR if line.startswith("F ") else ElementType.CEIL


def player_type(line: str) -> ElementType:
    """Return the player facing of the first player character, or EMPTY."""
    return next((_PLAYER_TYPES[c] for c in line if c in _PLAYER_TYPES), ElementType.EMPTY)


def is_texture(line: str) -> bool:
    """Return True for ``NO``, ``SO``, ``WE`` and ``EA`` lines."""
    return line.startswith(tuple(_TEXTURE_PREFIXES))


def is_color(line: str) -> bool:
    """Return True for floor and ceiling colour lines."""
    return line.startswith(("F ", "C "))


def is_empty(line: str) -> bool:
    """Return True for a line holding only a newline."""
    return line == "\n"


def is_map_chars(line: str) -> bool:
    """Return True when every character before the newline is a map character."""
    row = line.split("\n", 1)[0]
    return all(char in MAP_CHARS for char in row)


def is_map_start(line: str) -> bool:
    """Return True when the line begins like a map row."""
    return line[:1] in ("1", " ") and line != ""