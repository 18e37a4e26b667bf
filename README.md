# cubcaster

A small first-person raycasting engine. It reads a `.cub` scene description
(four wall textures, floor and ceiling colours and a map drawn in text),
checks it, and lets you walk around the map in a 640x480 window drawn with
pygame.

## Installing

```
pip install .
```

## Running

```
cubcaster maps/level.cub
```

The single argument must be a file whose name ends in `.cub`. If the
argument is missing, the file cannot be opened, a texture cannot be loaded,
or the scene breaks any rule below, a coloured error report naming the
problem is written to standard error (with the offending line and its
number where there is one) and the command exits with status 1.

### Controls

| Key         | Action               |
|-------------|----------------------|
| W / S       | move forward / back  |
| A / D       | strafe left / right  |
| ← / →       | turn left / right    |
| Esc         | quit                 |

Closing the window quits as well. Moves into a wall, or off the map, are
ignored.

## The `.cub` format

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

        1111111111111
        1000000000001
   111111000N00000001
   100000000000000001
   111111111111111111
```

- `NO`, `SO`, `WE`, `EA` (each followed by a space) give a wall texture
  each; the path must not be empty, must end in `.xpm`, and each may appear
  only once. Texture paths are opened as given, relative to the current
  directory.
- `F` and `C` give the floor and ceiling colours as `R,G,B`, exactly three
  components, each between 0 and 255, each line at most once.
- Every texture and colour must appear before the first map row.
- Map rows start with `1` or a space and use only `1` (wall), `0` (floor),
  spaces, and `N`, `S`, `E`, `W` for the player's start cell and facing.
  There must be exactly one player in the whole map.
- Every walkable cell (`0` or a player) must be enclosed: none of its four
  neighbours may be a space or lie outside the map.
- Empty lines are allowed before the map, but not once the map has started.
- Any other line is rejected as an invalid element.

Textures are read from XPM files, with colours given as `#RRGGBB` or as X11
colour names; `None` marks transparent pixels.

## Using it as a library

```python
from cubcaster.parser import parse_file
from cubcaster.element import ElementType, get_element
from cubcaster.game import build_map, player_from_elements

elements = parse_file("maps/level.cub")
game_map = build_map(elements)
player = player_from_elements(elements)
ceiling = get_element(elements, ElementType.CEIL).color
```

- `cubcaster.parser.parse_lines` parses lines already in memory.
- `cubcaster.xpm.parse_xpm` and `cubcaster.xpm.load_xpm` decode XPM images
  into `XpmImage` objects; `cubcaster.colors.lookup_color` resolves colour
  names.
- `cubcaster.app.create_game` builds a `cubcaster.game.Game` from a scene
  file. `Game.press`, `Game.release` and `Game.update` drive the player with
  `Key` values, and `Game.render` draws the view into a `Frame` of
  0xAARRGGBB pixels without opening a window. `cubcaster.app.run` shows a
  game in a pygame window.
- `cubcaster.raycast.cast_ray` casts a single screen column's ray over a
  `GameMap`.

Broken rules are reported as `cubcaster.errors.CubError`;
`cubcaster.errors.format_error` builds the report the command prints.

## What it does not do

The window size, movement speed, turning speed and field of view are fixed.
There is no mouse look, no sprites, doors, minimap or sound, and transparent
texture pixels are drawn like any other colour.

## Running the tests

```
pip install .[test]
pytest
```