import pytest

from cubcaster import validation
from cubcaster.element import Element, ElementType, player_type
from cubcaster.errors import CubError
from cubcaster.validation import (
    is_floor,
    is_valid_file_extension,
    is_valid_map,
    is_valid_player_count,
    validate_color,
    validate_elements,
    validate_map_line,
    validate_texture,
)

ALL_BUT_MAP = ElementType.TEXTURES | ElementType.COLORS


def map_elements(rows):
    return [
        Element(type=ElementType.MAP | player_type(row), line=number, content=row)
        for number, row in enumerate(rows, start=1)
    ]


CLOSED = ["111111", "100001", "10N001", "111111"]


@pytest.mark.parametrize("char", ["0", "N", "S", "E", "W"])
def test_is_floor_true(char):
    assert is_floor(char) is True


@pytest.mark.parametrize("char", ["1", " ", "x", "\n"])
def test_is_floor_false(char):
    assert is_floor(char) is False


@pytest.mark.parametrize(
    "text, expected",
    [("1111", True), ("10N01", True), ("1NS1", False), ("NSEW", False)],
)
def test_is_valid_player_count(text, expected):
    assert is_valid_player_count(text) is expected


@pytest.mark.parametrize(
    "path, expected",
    [("maps/level.cub", True), (".cub", True), ("level.cub.txt", False), ("level", False)],
)
def test_is_valid_file_extension(path, expected):
    assert is_valid_file_extension(path) is expected


def test_texture_duplicate():
    element = Element(type=ElementType.NORTH, line=1, content="north.xpm")
    with pytest.raises(CubError) as err:
        validate_texture(element, ElementType.NORTH)
    assert err.value.message == validation.DUP_TEXTURE_ERR


def test_texture_duplicate_checked_before_empty():
    element = Element(type=ElementType.EAST, line=1, content="")
    with pytest.raises(CubError) as err:
        validate_texture(element, ElementType.EAST | ElementType.WEST)
    assert err.value.message == validation.DUP_TEXTURE_ERR


def test_texture_empty():
    element = Element(type=ElementType.SOUTH, line=1, content="")
    with pytest.raises(CubError) as err:
        validate_texture(element, ElementType.NORTH)
    assert err.value.message == validation.EMPTY_TEXTURE_ERR


def test_texture_wrong_extension():
    element = Element(type=ElementType.WEST, line=1, content="west.png")
    with pytest.raises(CubError) as err:
        validate_texture(element, ElementType.EMPTY)
    assert err.value.message == validation.INVALID_TEXTURE_ERR


def test_color_duplicate():
    element = Element(type=ElementType.FLOOR, line=1, color=0)
    with pytest.raises(CubError) as err:
        validate_color(element, ElementType.FLOOR)
    assert err.value.message == validation.DUP_COLOR_ERR


def test_color_missing_value():
    element = Element(type=ElementType.CEIL, line=1, color=None)
    with pytest.raises(CubError) as err:
        validate_color(element, ElementType.FLOOR)
    assert err.value.message == validation.INVALID_COLOR_ERR


def test_map_line_before_other_elements():
    element = map_elements(["1111"])[0]
    with pytest.raises(CubError) as err:
        validate_map_line(element, ElementType.TEXTURES)
    assert err.value.message == validation.MAP_ERR


def test_map_line_two_players():
    element = map_elements(["1NS1"])[0]
    with pytest.raises(CubError) as err:
        validate_map_line(element, ALL_BUT_MAP)
    assert err.value.message == validation.MAP_PLAYER_ERR


def test_map_line_second_player():
    element = map_elements(["1E01"])[0]
    with pytest.raises(CubError) as err:
        validate_map_line(element, ALL_BUT_MAP | ElementType.MAP | ElementType.PLAYER_N)
    assert err.value.message == validation.DUP_PLAYER_ERR


def test_elements_missing():
    with pytest.raises(CubError) as err:
        validate_elements(map_elements(CLOSED), ALL_BUT_MAP)
    assert err.value.message == validation.MISSING_ERR


def test_elements_missing_player():
    with pytest.raises(CubError) as err:
        validate_elements(map_elements(["111", "101", "111"]), ElementType.ALL)
    assert err.value.message == validation.MISSING_PLAYER_ERR


def test_elements_open_map():
    rows = ["1111", "1N01", "1 11"]
    with pytest.raises(CubError) as err:
        validate_elements(map_elements(rows), ElementType.ALL | ElementType.PLAYER_N)
    assert err.value.message == validation.INVALID_MAP_ERR
    assert err.value.line is None


def test_closed_map_is_valid():
    assert is_valid_map(map_elements(CLOSED)) is True


def test_closed_map_valid_in_reverse_order():
    assert is_valid_map(list(reversed(map_elements(CLOSED)))) is True


@pytest.mark.parametrize(
    "rows",
    [
        ["1N0", "111"],
        ["111", "1N0", "111"],
        ["1111", "1N01"],
        ["1111", "1N01", "1 11"],
        ["1111", "10N1", "11"],
        [" 111", " 0N1", " 111"],
    ],
)
def test_open_maps_are_invalid(rows):
    assert is_valid_map(map_elements(rows)) is False


def test_map_with_only_walls_and_spaces_is_valid():
    assert is_valid_map(map_elements(["  11", "1111"])) is True


def test_non_map_elements_are_ignored():
    elements = [Element(type=ElementType.NORTH, line=1, content="0")] + map_elements(CLOSED)
    assert is_valid_map(elements) is True