"""Loading a scene into a game and running it in a window."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence

import pygame

from cubcaster.element import Element, ElementType, get_element
from cubcaster.errors import CubError, format_error
from cubcaster.game import TITLE, Frame, Game, Key, build_map, player_from_elements
from cubcaster.parser import parse_file
from cubcaster.validation import is_valid_file_extension
from cubcaster.xpm import XpmImage, load_xpm

USAGE_ERR = "Usage: cubcaster <scene.cub>"
INVALID_EXT_ERR = "Scene file must have a .cub extension"
IMAGE_ERR = "Failed to load image"
FPS = 60

_TEXTURE_KINDS = (ElementType.NORTH, ElementType.SOUTH, ElementType.EAST, ElementType.WEST)

_KEYS = {
    pygame.K_w: Key.UP,
    pygame.K_s: Key.DOWN,
    pygame.K_a: Key.LEFT,
    pygame.K_d: Key.RIGHT,
    pygame.K_LEFT: Key.LEFT_ARROW,
    pygame.K_RIGHT: Key.RIGHT_ARROW,
    pygame.K_ESCAPE: Key.ESC,
}


def load_textures(elements: Iterable[Element]) -> dict[ElementType, XpmImage]:
    """Load the four wall textures named by the scene, keyed by direction."""
    elements = list(elements)
    textures: dict[ElementType, XpmImage] = {}
    for kind in _TEXTURE_KINDS:
        element = get_element(elements, kind)
        if element is None:
            raise CubError(IMAGE_ERR)
        try:
            textures[kind] = load_xpm(element.content)
        except (OSError, ValueError) as err:
            raise CubError(IMAGE_ERR, element.content, element.line) from err
    return textures


def create_game(path: str | os.PathLike[str]) -> Game:
    """Parse a ``.cub`` scene and build a ready-to-run game from it."""
    if not is_valid_file_extension(os.fspath(path)):
        raise CubError(INVALID_EXT_ERR)
    elements = parse_file(path)
    textures = load_textures(elements)
    ceiling = get_element(elements, ElementType.CEIL)
    floor = get_element(elements, ElementType.FLOOR)
    return Game(
        game_map=build_map(elements),
        player=player_from_elements(elements),
        north=textures[ElementType.NORTH],
        south=textures[ElementType.SOUTH],
        east=textures[ElementType.EAST],
        west=textures[ElementType.WEST],
        ceiling=ceiling.color if ceiling and ceiling.color is not None else 0,
        floor=floor.color if floor and floor.color is not None else 0,
    )


def _frame_surface(frame: Frame) -> pygame.Surface:
    data = b"".join((pixel & 0xFFFFFF).to_bytes(3, "big") for pixel in frame.pixels)
    return pygame.image.frombuffer(data, (frame.width, frame.height), "RGB")


def run(game: Game) -> None:
    """Open a window and run the game until it is closed or escape is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width, game.height))
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN and event.key in _KEYS:
                    game.press(_KEYS[event.key])
                elif event.type == pygame.KEYUP and event.key in _KEYS:
                    game.release(_KEYS[event.key])
            if not game.running:
                break
            game.update()
            if not game.running:
                break
            screen.blit(_frame_surface(game.render()), (0, 0))
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: run the scene named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        sys.stderr.write(format_error(USAGE_ERR))
        return 1
    try:
        game = create_game(args[0])
    except CubError as err:
        sys.stderr.write(format_error(err.message, err.line, err.line_number))
        return 1
    run(game)
    return 0