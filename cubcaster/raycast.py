"""Grid ray casting with the digital differential analyser."""

from __future__ import annotations

import enum
from dataclasses import dataclass

NO_HIT = 1e30
"""Stand-in for an infinite step length along an axis the ray never crosses."""

WALL = "1"


@dataclass(frozen=True)
class Vector:
    """A 2D vector or point in map units."""

    x: float
    y: float


class Side(enum.Enum):
    """Which kind of grid line a ray crossed last."""

    X = 0
    Y = 1


@dataclass(frozen=True)
class Ray:
    """The outcome of casting one screen column's ray."""

    direction: Vector
    side: Side
    perp_dist: float
    map_x: int
    map_y: int


@dataclass(frozen=True)
class GameMap:
    """Map rows as strings; ``'1'`` marks a wall."""

    rows: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(self.rows))

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def tile(self, x: int, y: int) -> str:
        """Return the character at (x, y), or ``''`` outside the map."""
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return ""

    def is_walkable(self, x: float, y: float) -> bool:
        """Return True when the cell holding (x, y) exists and is not a wall.

        Coordinates are truncated toward zero to pick the cell.
        """
        cell = self.tile(int(x), int(y))
        return cell != "" and cell != WALL


def ray_direction(x: int, camera: Vector, direction: Vector, width: int) -> Vector:
    """Direction of the ray for screen column ``x`` of ``width`` columns."""
    offset = 2 * x / width - 1
    return Vector(direction.x + camera.x * offset, direction.y + camera.y * offset)


def delta_of(ray: Vector) -> Vector:
    """Ray length between successive grid lines on each axis."""
    return Vector(
        NO_HIT if ray.x == 0 else abs(1 / ray.x),
        NO_HIT if ray.y == 0 else abs(1 / ray.y),
    )


def step_of(ray: Vector) -> tuple[int, int]:
    """Grid step on each axis: 1 for a positive component, otherwise -1."""
    step_x = 2 * int(ray.x > 0) - 1
    step_y = 2 * int(ray.y > 0) - 1
    return step_x, step_y


def side_distance(delta: Vector, position: Vector, step: tuple[int, int]) -> Vector:
    """Ray length from ``position`` to the first grid line on each axis."""
    cell_x, cell_y = int(position.x), int(position.y)
    step_x, step_y = step
    if step_x < 0:
        dist_x = (position.x - cell_x) * delta.x
    else:
        dist_x = (cell_x + 1 - position.x) * delta.x
    if step_y < 0:
        dist_y = (position.y - cell_y) * delta.y
    else:
        dist_y = (cell_y + 1 - position.y) * delta.y
    return Vector(dist_x, dist_y)


def perpendicular_distance(side: Side, side_dist: Vector, delta: Vector) -> float:
    """Distance to the hit wall measured along the view direction."""
    if side is Side.X:
        return side_dist.x - delta.x
    return side_dist.y - delta.y


def _escaped(game_map: GameMap, map_x: int, map_y: int, step: tuple[int, int]) -> bool:
    step_x, step_y = step
    return (
        (map_x < 0 and step_x < 0)
        or (map_x >= game_map.width and step_x > 0)
        or (map_y < 0 and step_y < 0)
        or (map_y >= game_map.height and step_y > 0)
    )


def cast_ray(
    game_map: GameMap,
    position: Vector,
    direction: Vector,
    camera: Vector,
    x: int,
    width: int,
) -> Ray:
    """Cast the ray for screen column ``x`` until it enters a wall cell.

    Raises ValueError if the ray leaves the map without hitting a wall.
    """
    ray_dir = ray_direction(x, camera, direction, width)
    delta = delta_of(ray_dir)
    step = step_of(ray_dir)
    dist = side_distance(delta, position, step)
    dist_x, dist_y = dist.x, dist.y
    map_x, map_y = int(position.x), int(position.y)
    side = Side.X
    while True:
        if dist_x < dist_y:
            dist_x += delta.x
            map_x += step[0]
            side = Side.X
        else:
            dist_y += delta.y
            map_y += step[1]
            side = Side.Y
        if game_map.tile(map_x, map_y) == WALL:
            break
        if _escaped(game_map, map_x, map_y, step):
            raise ValueError("ray left the map without hitting a wall")
    perp = perpendicular_distance(side, Vector(dist_x, dist_y), delta)
    return Ray(direction=ray_dir, side=side, perp_dist=perp, map_x=map_x, map_y=map_y)