"""Core value types shared by the board and the creatures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto

MAX_GHOSTS = 4
ESC = "\x1b"


class Direction(IntEnum):
    """Movement direction; the integer value is what step files record."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    STAY = 4


class GhostLevel(IntEnum):
    """How clever the ghosts are."""

    BEST = 0
    GOOD = 1
    NOVICE = 2


class Color(IntEnum):
    """Console colour attributes (intensity, red, green, blue bits)."""

    WHITE = 15
    YELLOW = 14
    LIGHTCYAN = 11
    DARKGRAY = 8
    LIGHTRED = 12
    LIGHTMAGENTA = 13


class Sign(Enum):
    """What a board cell currently holds."""

    PACMAN = auto()
    BREADCRUMBS = auto()
    WALL = auto()
    NONE = auto()
    GHOST_ON_CRUMB = auto()
    GHOST_ON_NONE = auto()
    FRUIT_ON_CRUMB = auto()
    FRUIT_ON_NONE = auto()
    TEXT = auto()


@dataclass(frozen=True)
class Coord:
    """A board position: x is the row, y is the column."""

    x: int = -1
    y: int = -1


@dataclass
class Cell:
    """A board position together with its content."""

    position: Coord = field(default_factory=Coord)
    sign: Sign = Sign.NONE