"""Raycasting engine for .cub scene files with XPM wall textures."""

__version__ = "0.1.0"

__all__ = [
    "app",
    "colors",
    "element",
    "errors",
    "game",
    "parser",
    "raycast",
    "textutil",
    "validation",
    "xpm",
]