import pytest

from cubcaster.xpm import (
    TRANSPARENT,
    XpmImage,
    load_xpm,
    parse_xpm,
    split_words,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"3 2 2 1 ",
"  c None",
". c #00FF00",
". .",
" ..",
};
"""


def _xpm(*strings: str) -> str:
    body = ",\n".join(f'"{s}"' for s in strings)
    return f"static char *img[] = {{\n{body}\n}};\n"


def test_split_words_on_spaces_and_tabs():
    assert split_words("  a\tb   c ") == ["a", "b", "c"]


def test_split_words_keeps_newlines_inside_words():
    assert split_words("a\nb c") == ["a\nb", "c"]


def test_strip_comments_block():
    text = "a /* x */ b"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result.split() == ["a", "b"]


def test_strip_comments_keeps_quoted_text():
    text = '"/* keep */ // too"'
    assert strip_comments(text) == text


def test_strip_comments_line_comment_takes_newline():
    result = strip_comments("x // note\ny")
    assert "note" not in result
    assert "\n" not in result
    assert result.split() == ["x", "y"]


def test_text_to_rgb_hex():
    assert text_to_rgb("#ff8000") == 0xFF8000


def test_text_to_rgb_named():
    assert text_to_rgb("white") == 0xFFFFFF
    assert text_to_rgb("ghost", "white") == 0xF8F8FF


def test_text_to_rgb_none_and_unknown():
    assert text_to_rgb("NONE") == -1
    assert text_to_rgb("nosuchcolour") == 0


def test_parse_sample_dimensions():
    image = parse_xpm(SAMPLE)
    assert (image.width, image.height) == (3, 2)
    assert len(image.pixels) == image.width * image.height


def test_parse_sample_pixels():
    image = parse_xpm(SAMPLE)
    assert image.pixel(0, 0) == 0x00FF00
    assert image.pixel(1, 0) == TRANSPARENT
    assert image.pixel(0, 1) == TRANSPARENT
    assert image.pixel(2, 1) == 0x00FF00


def test_pixel_outside_image_is_zero():
    image = parse_xpm(SAMPLE)
    assert image.pixel(3, 0) == 0
    assert image.pixel(0, -1) == 0


def test_pixel_reads_row_major():
    image = XpmImage(width=2, height=2, pixels=(10, 20, 30, 40))
    assert image.pixel(1, 0) == 20
    assert image.pixel(0, 1) == 30


def test_named_colour_with_two_words():
    image = parse_xpm(_xpm("1 1 1 1", "x c ghost white", "x"))
    assert image.pixel(0, 0) == 0xF8F8FF


def test_two_char_keys_last_definition_wins():
    image = parse_xpm(_xpm("2 1 2 2", "ab c #000001", "ab c #000002", "abab"))
    assert image.pixels == (0x000002, 0x000002)


def test_wide_keys_first_definition_wins():
    image = parse_xpm(_xpm("1 1 2 3", "abc c #000001", "abc c #000002", "abc"))
    assert image.pixel(0, 0) == 0x000001


def test_unknown_key_gives_zero():
    image = parse_xpm(_xpm("1 1 1 1", "a c #123456", "b"))
    assert image.pixel(0, 0) == 0


def test_quoted_text_in_comment_is_ignored():
    text = '/* "9 9 9 9" */\n' + SAMPLE
    assert parse_xpm(text) == parse_xpm(SAMPLE)


@pytest.mark.parametrize(
    "text",
    [
        "no strings at all",
        _xpm("0 2 1 1", "a c #000000", "a", "a"),
        _xpm("1 1"),
        _xpm("1 2 1 1", "a c #000000", "a"),
        _xpm("1 1 1 1", "a m #000000", "a"),
        _xpm("1 1 1 1", "a c", "a"),
        _xpm("1 1 2 1", "a c #000000"),
    ],
)
def test_malformed_data_raises(text):
    with pytest.raises(ValueError):
        parse_xpm(text)


def test_load_xpm_matches_parse(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SAMPLE, encoding="latin-1")
    assert load_xpm(path) == parse_xpm(SAMPLE)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_xpm(tmp_path / "absent.xpm")