"""Reading a scene file into a list of validated elements."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable

from cubcaster.element import (
    Element,
    ElementType,
    color_type,
    is_color,
    is_empty,
    is_map_chars,
    is_map_start,
    is_texture,
    player_type,
    texture_type,
)
from cubcaster.errors import CubError
from cubcaster.textutil import str_to_rgb
from cubcaster.validation import (
    validate_color,
    validate_elements,
    validate_map_line,
    validate_texture,
)

INVALID_ELEMENT_ERR = "Invalid element"
INVALID_FILE_ERR = "Cannot open the scene file"

_State = Callable[[list[Element], str, int, ElementType], ElementType]


def _accept(
    elements: list[Element],
    element: Element,
    check: Callable[[Element, ElementType], None],
    line: str,
    number: int,
    seen: ElementType,
) -> ElementType:
    try:
        check(element, seen)
    except CubError as err:
        raise CubError(err.message, line, number) from err
    elements.append(element)
    return element.type


def _texture_state(elements: list[Element], line: str, number: int, seen: ElementType) -> ElementType:
    element = Element(type=texture_type(line), line=number, content=line[3:].strip(" \n"))
    return _accept(elements, element, validate_texture, line, number, seen)


def _color_state(elements: list[Element], line: str, number: int, seen: ElementType) -> ElementType:
    try:
        color: int | None = str_to_rgb(line[2:].strip(" \n"))
    except ValueError:
        color = None
    element = Element(type=color_type(line), line=number, color=color)
    return _accept(elements, element, validate_color, line, number, seen)


def _map_state(elements: list[Element], line: str, number: int, seen: ElementType) -> ElementType:
    element = Element(
        type=ElementType.MAP | player_type(line),
        line=number,
        content=line.strip("\n"),
    )
    return _accept(elements, element, validate_map_line, line, number, seen)


def _invalid_state(elements: list[Element], line: str, number: int, seen: ElementType) -> ElementType:
    raise CubError(INVALID_ELEMENT_ERR, line, number)


def _next_state(line: str) -> _State | None:
    if is_texture(line):
        return _texture_state
    if is_color(line):
        return _color_state
    if is_empty(line):
        return None
    if is_map_start(line) and is_map_chars(line):
        return _map_state
    return _invalid_state


def parse_line(elements: list[Element], line: str, number: int, seen: ElementType) -> ElementType:
    """Parse one scene line, appending its element, and return the element's type.

    Blank lines give EMPTY, except once the map has started, where they are an error.
    """
    state = _next_state(line)
    if state is not None:
        return state(elements, line, number, seen)
    if seen & ElementType.MAP:
        raise CubError(INVALID_ELEMENT_ERR, line, number)
    return ElementType.EMPTY


def parse_lines(lines: Iterable[str]) -> list[Element]:
    """Parse scene lines (with their newlines) into elements in file order."""
    elements: list[Element] = []
    seen = ElementType.EMPTY
    for number, line in enumerate(lines, start=1):
        seen |= parse_line(elements, line, number, seen)
    validate_elements(elements, seen)
    return elements


def parse_file(path: str | os.PathLike[str]) -> list[Element]:
    """Read and parse a scene file."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="\n") as handle:
            return parse_lines(handle)
    except OSError as err:
        raise CubError(INVALID_FILE_ERR) from err