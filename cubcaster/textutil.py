"""Small string helpers used by the scene parser."""

from __future__ import annotations

from collections.abc import Iterable

_DIGITS = frozenset("0123456789")
_UBYTE_MAX = 255


def ends_with(text: str | None, suffix: str | None) -> bool:
    """Return True when ``text`` ends with ``suffix``; missing values never match."""
    if text is None or suffix is None:
        return False
    return text.endswith(suffix)


def find_chars_index(text: str, chars: str) -> int:
    """Return the index of the first character of ``text`` found in ``chars``, or -1."""
    return next((index for index, char in enumerate(text) if char in chars), -1)


def join_strings(strings: Iterable[str | None]) -> str:
    """Concatenate the given strings, skipping missing ones."""
    return "".join(part for part in strings if part)


def is_all_digit(text: str) -> bool:
    """Return True when every character is an ASCII digit (vacuously true for '')."""
    return all(char in _DIGITS for char in text)


def str_to_ubyte(text: str) -> int:
    """Parse a decimal number in the range 0..255.

    Raises ValueError for empty input, non-digit characters or values above 255.
    """
    if not text or not is_all_digit(text):
        raise ValueError(f"not an unsigned byte: {text!r}")
    total = 0
    for char in text:
        total = total * 10 + int(char)
        if total > _UBYTE_MAX:
            raise ValueError(f"value out of byte range: {text!r}")
    return total


def str_to_rgb(text: str) -> int:
    """Parse ``"R,G,B"`` into a packed 0xRRGGBB integer.

    Each component may be surrounded by spaces. Raises ValueError when the
    text does not hold exactly three byte values separated by commas.
    """
    if text.count(",") != 2:
        raise ValueError(f"expected three comma separated values: {text!r}")
    red, green, blue = (str_to_ubyte(part.strip(" ")) for part in text.split(","))
    return red << 16 | green << 8 | blue