"""The playing field: a grid of cells built from a screen layout."""

from __future__ import annotations

import random
import sys

from .console import set_color
from .definitions import MAX_GHOSTS, Cell, Color, Coord, Sign

_GLYPHS = {
    Sign.TEXT: (" ", None),
    Sign.NONE: (" ", None),
    Sign.PACMAN: ("@", Color.YELLOW),
    Sign.BREADCRUMBS: (".", Color.LIGHTCYAN),
    Sign.WALL: ("#", Color.DARKGRAY),
    Sign.GHOST_ON_CRUMB: ("$", Color.LIGHTRED),
    Sign.GHOST_ON_NONE: (" ", None),
}

_NOT_FOR_FRUIT = {
    Sign.WALL,
    Sign.PACMAN,
    Sign.GHOST_ON_CRUMB,
    Sign.GHOST_ON_NONE,
    Sign.TEXT,
}


class Board:
    """A rows x cols grid of cells with the starting positions of creatures."""

    def __init__(self, pattern, rows, cols):
        self.rows = rows
        self.cols = cols
        self.text_pos = Coord()
        self.pacman_pos = Coord()
        self.ghost_coords = [Coord()] * MAX_GHOSTS
        self.curr_ghosts = 0
        self.num_of_breadcrumbs = 0
        self.cells: list[list[Cell]] = []

        has_pacman = False
        for i in range(rows):
            line = pattern[i] if i < len(pattern) else ""
            row = []
            for j in range(cols):
                ch = line[j] if j < len(line) else ""
                sign = Sign.NONE
                if ch == " ":
                    sign = Sign.BREADCRUMBS
                elif ch == "@":
                    if has_pacman:
                        sign = Sign.BREADCRUMBS
                    else:
                        sign = Sign.PACMAN
                        self.pacman_pos = Coord(i, j)
                        has_pacman = True
                elif ch == "#":
                    sign = Sign.WALL
                elif ch == "$":
                    if self.curr_ghosts >= MAX_GHOSTS:
                        sign = Sign.BREADCRUMBS
                    else:
                        sign = Sign.GHOST_ON_CRUMB
                        self.ghost_coords[self.curr_ghosts] = Coord(i, j)
                        self.curr_ghosts += 1
                elif ch == "%":
                    sign = Sign.TEXT
                elif ch == "&":
                    sign = Sign.TEXT
                    self.text_pos = Coord(i, j)
                if sign is Sign.BREADCRUMBS:
                    self.num_of_breadcrumbs += 1
                row.append(Cell(Coord(i, j), sign))
            self.cells.append(row)

    def print_board(self, color, stream=None):
        """Draw the whole board, optionally in colour."""
        out = stream if stream is not None else sys.stdout
        for row in self.cells:
            for cell in row:
                glyph = _GLYPHS.get(cell.sign)
                if glyph is None:
                    continue
                ch, glyph_color = glyph
                if color and glyph_color is not None:
                    set_color(glyph_color, out)
                out.write(ch)
            out.write("\n")

    def ghost_pos(self, ghost_num):
        """Starting position of the given ghost."""
        return self.ghost_coords[ghost_num]

    def random_fruit_pos(self, rng=None):
        """Pick a random cell where a fruit may appear."""
        rng = rng if rng is not None else random
        if not any(
            self.is_valid_fruit_pos(cell.position.x, cell.position.y)
            for row in self.cells
            for cell in row
        ):
            raise ValueError("no free cell for a fruit")
        while True:
            x = rng.randrange(self.rows)
            y = rng.randrange(self.cols)
            if self.is_valid_fruit_pos(x, y):
                return Coord(x, y)

    def is_valid_fruit_pos(self, x, y):
        """True if a fruit may be placed at row x, column y."""
        cell = self.cells[x][y]
        return cell.sign not in _NOT_FOR_FRUIT and not self.is_tunnel(cell)

    def is_tunnel(self, cell):
        """True for a non-wall cell on the border of the board."""
        pos = cell.position
        on_edge = (
            pos.x == 0 or pos.y == 0 or pos.x == self.rows - 1 or pos.y == self.cols - 1
        )
        return on_edge and cell.sign is not Sign.WALL