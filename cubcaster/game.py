"""Player state, movement and column rendering of the scene."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from cubcaster.element import Element, ElementType, get_element
from cubcaster.raycast import GameMap, Ray, Side, Vector, cast_ray
from cubcaster.textutil import find_chars_index

WIDTH = 640
HEIGHT = 480
SPEED = 0.05
ROTATION_ANGLE = 0.04
FOV = 66
TITLE = "cub3D"

_PIXEL_MASK = 0xFFFFFFFF
_MAX_WALL_HEIGHT = 2**31 - 1


class Key(enum.Enum):
    """Actions the player can hold down."""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    LEFT_ARROW = enum.auto()
    RIGHT_ARROW = enum.auto()
    ESC = enum.auto()


class _Texture(Protocol):
    width: int
    height: int

    def pixel(self, x: int, y: int) -> int: ...


@dataclass
class Player:
    """Position, facing and camera plane of the viewer."""

    position: Vector
    direction: Vector
    camera: Vector


@dataclass
class Frame:
    """A width x height grid of 0xAARRGGBB pixels, row by row."""

    width: int
    height: int
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = [0] * (self.width * self.height)

    def put(self, x: int, y: int, color: int) -> None:
        """Set a pixel; coordinates outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color & _PIXEL_MASK

    def get(self, x: int, y: int) -> int:
        """Return a pixel, or 0 outside the frame."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.pixels[y * self.width + x]
        return 0


def rotate(vector: Vector, angle: float) -> Vector:
    """Rotate a vector by ``angle`` radians."""
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    return Vector(vector.x * cos_a - vector.y * sin_a, vector.x * sin_a + vector.y * cos_a)


def move(position: Vector, direction: Vector, game_map: GameMap) -> Vector:
    """Step ``SPEED`` along ``direction``; stay put if the target is a wall or off the map."""
    target = Vector(position.x + direction.x * SPEED, position.y + direction.y * SPEED)
    if not game_map.is_walkable(target.x, target.y):
        return position
    return target


def _camera_for(direction: Vector) -> Vector:
    half_fov = math.tan(FOV * math.pi / 360)
    return Vector(-direction.y * half_fov, direction.x * half_fov)


def _direction_for(kind: ElementType) -> Vector:
    if kind & ElementType.PLAYER_N:
        return Vector(0.0, -1.0)
    if kind & ElementType.PLAYER_S:
        return Vector(0.0, 1.0)
    if kind & ElementType.PLAYER_E:
        return Vector(1.0, 0.0)
    if kind & ElementType.PLAYER_W:
        return Vector(-1.0, 0.0)
    return Vector(0.0, 0.0)


def build_map(elements: Iterable[Element]) -> GameMap:
    """Collect the map rows of a parsed scene."""
    return GameMap(tuple(e.content for e in elements if e.type & ElementType.MAP))


def player_from_elements(elements: Iterable[Element]) -> Player:
    """Place the player at the centre of its start cell, facing its start direction.

    Raises ValueError when the scene has no map or no player.
    """
    elements = list(elements)
    start = get_element(elements, ElementType.PLAYER)
    first_row = get_element(elements, ElementType.MAP)
    if start is None or first_row is None:
        raise ValueError("scene has no player on its map")
    position = Vector(
        find_chars_index(start.content, "NSWE") + 0.5,
        start.line - first_row.line + 0.5,
    )
    direction = _direction_for(start.type)
    return Player(position=position, direction=direction, camera=_camera_for(direction))


def wall_x(ray: Ray, position: Vector) -> float:
    """Fraction along the hit wall face where the ray struck, in [0, 1)."""
    if ray.side is Side.X:
        hit = position.y + ray.perp_dist * ray.direction.y
    else:
        hit = position.x + ray.perp_dist * ray.direction.x
    hit -= math.floor(hit)
    if (ray.side is Side.X and ray.direction.x > 0) or (
        ray.side is Side.Y and ray.direction.y < 0
    ):
        hit = 1 - hit
    return hit


@dataclass
class Game:
    """The running scene: map, player, textures, colours and held keys."""

    game_map: GameMap
    player: Player
    north: _Texture
    south: _Texture
    east: _Texture
    west: _Texture
    ceiling: int
    floor: int
    width: int = WIDTH
    height: int = HEIGHT
    keys: set[Key] = field(default_factory=set)
    running: bool = True
    frame: Frame = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.frame = Frame(self.width, self.height)

    def press(self, key: Key) -> None:
        """Mark a key as held."""
        self.keys.add(key)

    def release(self, key: Key) -> None:
        """Mark a key as no longer held."""
        self.keys.discard(key)

    def update(self) -> None:
        """Apply one tick of the held keys to the player."""
        if Key.ESC in self.keys:
            self.running = False
            return
        p = self.player
        d = p.direction
        moves = (
            (Key.UP, Vector(d.x, d.y)),
            (Key.DOWN, Vector(-d.x, -d.y)),
            (Key.LEFT, Vector(d.y, -d.x)),
            (Key.RIGHT, Vector(-d.y, d.x)),
        )
        for key, step in moves:
            if key in self.keys:
                p.position = move(p.position, step, self.game_map)
        if Key.LEFT_ARROW in self.keys:
            p.direction = rotate(p.direction, -ROTATION_ANGLE)
        if Key.RIGHT_ARROW in self.keys:
            p.direction = rotate(p.direction, ROTATION_ANGLE)
        if Key.LEFT_ARROW in self.keys or Key.RIGHT_ARROW in self.keys:
            p.camera = _camera_for(p.direction)

    def _texture_for(self, ray: Ray) -> _Texture:
        if ray.side is Side.X:
            return self.west if ray.direction.x < 0 else self.east
        return self.north if ray.direction.y < 0 else self.south

    def _draw_column(self, x: int, ray: Ray) -> None:
        height = self.height
        ratio = height / ray.perp_dist if ray.perp_dist > 0 else math.inf
        wall_height = int(min(ratio, _MAX_WALL_HEIGHT))
        unclipped_start = height // 2 - wall_height // 2
        wall_start = max(unclipped_start, 0)
        wall_end = min(height // 2 + wall_height // 2, height - 1)
        texture = self._texture_for(ray)
        step_y = texture.height / wall_height if wall_height else 0.0
        tex_x = int(wall_x(ray, self.player.position) * texture.width)
        tex_y = (wall_start - unclipped_start) * step_y
        for y in range(height):
            if y < wall_start:
                self.frame.put(x, y, self.ceiling)
            elif y > wall_end:
                self.frame.put(x, y, self.floor)
            else:
                self.frame.put(x, y, texture.pixel(tex_x, int(tex_y)))
                tex_y += step_y

    def render(self) -> Frame:
        """Draw every screen column into the frame and return it."""
        p = self.player
        for x in range(self.width):
            ray = cast_ray(self.game_map, p.position, p.direction, p.camera, x, self.width)
            self._draw_column(x, ray)
        return self.frame