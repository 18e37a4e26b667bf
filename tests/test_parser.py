import pytest

from cubcaster import parser, validation
from cubcaster.element import ElementType
from cubcaster.errors import CubError
from cubcaster.parser import parse_file, parse_line, parse_lines
from cubcaster.textutil import str_to_rgb

HEADER = [
    "NO ./north.xpm\n",
    "SO ./south.xpm\n",
    "WE ./west.xpm\n",
    "EA ./east.xpm\n",
    "\n",
    "F 220,100,0\n",
    "C 225,30,0\n",
    "\n",
]

MAP = ["111111\n", "100001\n", "10N001\n", "111111\n"]

SCENE = HEADER + MAP


def test_parse_scene_types_in_order():
    elements = parse_lines(SCENE)
    assert [e.type for e in elements] == [
        ElementType.NORTH,
        ElementType.SOUTH,
        ElementType.WEST,
        ElementType.EAST,
        ElementType.FLOOR,
        ElementType.CEIL,
        ElementType.MAP,
        ElementType.MAP,
        ElementType.MAP | ElementType.PLAYER_N,
        ElementType.MAP,
    ]


def test_parse_scene_contents():
    elements = parse_lines(SCENE)
    assert [e.content for e in elements[:4]] == [
        "./north.xpm",
        "./south.xpm",
        "./west.xpm",
        "./east.xpm",
    ]
    assert [e.content for e in elements[6:]] == [row.strip("\n") for row in MAP]


def test_parse_scene_line_numbers():
    elements = parse_lines(SCENE)
    assert [e.line for e in elements] == [1, 2, 3, 4, 6, 7, 9, 10, 11, 12]


def test_parse_scene_colors():
    elements = parse_lines(SCENE)
    assert elements[4].color == str_to_rgb("220,100,0")
    assert elements[5].color == str_to_rgb("225,30,0")


def test_black_floor_color():
    lines = HEADER[:5] + ["F  0, 0 ,0 \n", "C 1,2,3\n"] + MAP
    assert parse_lines(lines)[4].color == 0


def test_last_line_without_newline():
    elements = parse_lines(HEADER + MAP[:-1] + ["111111"])
    assert elements[-1].content == "111111"


def test_parse_line_blank_before_map():
    elements = []
    assert parse_line(elements, "\n", 1, ElementType.EMPTY) == ElementType.EMPTY
    assert elements == []


def test_parse_line_texture():
    elements = []
    result = parse_line(elements, "EA  ./east.xpm \n", 3, ElementType.NORTH)
    assert result == ElementType.EAST
    assert elements[0].content == "./east.xpm"
    assert elements[0].line == 3


def test_parse_line_blank_after_map():
    with pytest.raises(CubError) as err:
        parse_line([], "\n", 7, ElementType.ALL)
    assert err.value.message == parser.INVALID_ELEMENT_ERR
    assert err.value.line_number == 7


def test_blank_line_inside_map_is_rejected():
    lines = HEADER + MAP[:2] + ["\n"] + MAP[2:]
    with pytest.raises(CubError) as err:
        parse_lines(lines)
    assert err.value.message == parser.INVALID_ELEMENT_ERR
    assert err.value.line_number == len(HEADER) + 3


def test_unknown_element():
    lines = HEADER[:2] + ["R 1920 1080\n"] + HEADER[2:] + MAP
    with pytest.raises(CubError) as err:
        parse_lines(lines)
    assert err.value.message == parser.INVALID_ELEMENT_ERR
    assert err.value.line == "R 1920 1080\n"
    assert err.value.line_number == 3


def test_duplicate_texture_reports_line():
    with pytest.raises(CubError) as err:
        parse_lines(["NO a.xpm\n", "NO b.xpm\n"])
    assert err.value.message == validation.DUP_TEXTURE_ERR
    assert err.value.line == "NO b.xpm\n"
    assert err.value.line_number == 2


def test_texture_not_xpm():
    with pytest.raises(CubError) as err:
        parse_lines(["SO ./south.png\n"])
    assert err.value.message == validation.INVALID_TEXTURE_ERR


def test_bad_color():
    lines = HEADER[:5] + ["F 256,0,0\n"]
    with pytest.raises(CubError) as err:
        parse_lines(lines)
    assert err.value.message == validation.INVALID_COLOR_ERR
    assert err.value.line_number == 6


def test_map_before_colors():
    with pytest.raises(CubError) as err:
        parse_lines(HEADER[:4] + MAP)
    assert err.value.message == validation.MAP_ERR


def test_spaces_only_line_counts_as_map_row():
    with pytest.raises(CubError) as err:
        parse_lines(["   \n"] + SCENE)
    assert err.value.message == validation.MAP_ERR
    assert err.value.line_number == 1


def test_second_player():
    lines = HEADER + ["111111\n", "1S0001\n", "10N001\n", "111111\n"]
    with pytest.raises(CubError) as err:
        parse_lines(lines)
    assert err.value.message == validation.DUP_PLAYER_ERR
    assert err.value.line_number == len(HEADER) + 3


def test_missing_map():
    with pytest.raises(CubError) as err:
        parse_lines(HEADER)
    assert err.value.message == validation.MISSING_ERR
    assert err.value.line is None


def test_missing_player():
    lines = HEADER + ["1111\n", "1001\n", "1111\n"]
    with pytest.raises(CubError) as err:
        parse_lines(lines)
    assert err.value.message == validation.MISSING_PLAYER_ERR


def test_open_map():
    lines = HEADER + ["1111\n", "1N01\n", "1 11\n"]
    with pytest.raises(CubError) as err:
        parse_lines(lines)
    assert err.value.message == validation.INVALID_MAP_ERR


def test_parse_file_matches_parse_lines(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text("".join(SCENE), encoding="utf-8")
    assert parse_file(path) == parse_lines(SCENE)


def test_parse_file_keeps_carriage_returns(tmp_path):
    path = tmp_path / "level.cub"
    path.write_bytes("".join(SCENE).replace("\n", "\r\n").encode("utf-8"))
    with pytest.raises(CubError) as err:
        parse_file(path)
    assert err.value.message == validation.INVALID_TEXTURE_ERR


def test_parse_file_missing(tmp_path):
    with pytest.raises(CubError) as err:
        parse_file(tmp_path / "absent.cub")
    assert err.value.message == parser.INVALID_FILE_ERR