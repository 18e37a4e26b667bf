"""Checks applied to scene elements while and after they are parsed."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from cubcaster.element import PLAYER_CHARS, Element, ElementType
from cubcaster.errors import CubError
from cubcaster.textutil import ends_with

DUP_TEXTURE_ERR = "Texture is defined more than once"
EMPTY_TEXTURE_ERR = "Texture path is empty"
INVALID_TEXTURE_ERR = "Texture must be an .xpm file"
DUP_COLOR_ERR = "Color is defined more than once"
INVALID_COLOR_ERR = "Color must be three values from 0 to 255 separated by commas"
MAP_ERR = "Map must come after all textures and colors"
MAP_PLAYER_ERR = "Map line holds more than one player"
DUP_PLAYER_ERR = "Player is defined more than once"
MISSING_ERR = "Missing texture, color or map"
MISSING_PLAYER_ERR = "Map has no player"
INVALID_MAP_ERR = "Map is not closed by walls"

_FLOOR_CHARS = frozenset("0NSEW")


def validate_texture(element: Element, seen: ElementType) -> None:
    """Raise CubError if a texture element is a duplicate, empty or not an XPM path."""
    if seen & element.type:
        raise CubError(DUP_TEXTURE_ERR)
    if element.length == 0:
        raise CubError(EMPTY_TEXTURE_ERR)
    if not ends_with(element.content, ".xpm"):
        raise CubError(INVALID_TEXTURE_ERR)


def validate_color(element: Element, seen: ElementType) -> None:
    """Raise CubError if a colour element is a duplicate or holds no valid colour."""
    if seen & element.type:
        raise CubError(DUP_COLOR_ERR)
    if element.color is None:
        raise CubError(INVALID_COLOR_ERR)


def validate_map_line(element: Element, seen: ElementType) -> None:
    """Raise CubError if a map row comes too early or places a player wrongly."""
    if (seen & ElementType.ALL) | ElementType.MAP != ElementType.ALL:
        raise CubError(MAP_ERR)
    if not is_valid_player_count(element.content):
        raise CubError(MAP_PLAYER_ERR)
    if seen & ElementType.PLAYER and element.type & ElementType.PLAYER:
        raise CubError(DUP_PLAYER_ERR)


def validate_elements(elements: Iterable[Element], seen: ElementType) -> None:
    """Raise CubError unless the whole scene is complete and its map is closed."""
    if seen & ElementType.ALL != ElementType.ALL:
        raise CubError(MISSING_ERR)
    if not seen & ElementType.PLAYER:
        raise CubError(MISSING_PLAYER_ERR)
    if not is_valid_map(elements):
        raise CubError(INVALID_MAP_ERR)


def _solid(row: str, x: int) -> bool:
    return 0 <= x < len(row) and row[x] != " "


def _is_enclosed(rows: Sequence[str], x: int, y: int) -> bool:
    row = rows[y]
    return (
        _solid(row, x - 1)
        and _solid(row, x + 1)
        and y > 0
        and _solid(rows[y - 1], x)
        and y + 1 < len(rows)
        and _solid(rows[y + 1], x)
    )


def is_valid_map(elements: Iterable[Element]) -> bool:
    """Return True when every walkable cell of the map has a neighbour on all four sides."""
    rows = [element.content for element in elements if element.type & ElementType.MAP]
    return all(
        _is_enclosed(rows, x, y)
        for y, row in enumerate(rows)
        for x, char in enumerate(row)
        if is_floor(char)
    )


def is_floor(char: str) -> bool:
    """Return True for cells a player can stand on."""
    return char in _FLOOR_CHARS


def is_valid_player_count(text: str) -> bool:
    """Return True when the text holds at most one player character."""
    return sum(1 for char in text if char in PLAYER_CHARS) <= 1


def is_valid_file_extension(path: str) -> bool:
    """Return True for paths ending in ``.cub``."""
    return ends_with(path, ".cub")