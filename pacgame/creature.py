"""Base behaviour shared by everything that moves on the board."""

from __future__ import annotations

import random
import sys

from .console import gotoxy, set_color
from .definitions import Cell, Direction, Coord, Sign

_STEPS = {
    Direction.UP: (-1, 0),
    Direction.DOWN: (1, 0),
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
}

_RANDOM_DIRECTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)


class Creature:
    """Something that walks the board one cell per move, wrapping through tunnels."""

    def __init__(self, initial_position, board, silent=False, rng=None, stream=None):
        self.start_pos = initial_position
        self.current_pos = initial_position
        self.new_pos = Cell()
        self.old_pos = Cell()
        self.direction = Direction.STAY
        self.board = board
        self.silent = silent
        self.rng = rng if rng is not None else random
        self.stream = stream

    @property
    def out(self):
        """The stream drawing goes to."""
        return self.stream if self.stream is not None else sys.stdout

    def _cell_at(self, coord):
        return self.board.cells[coord.x][coord.y]

    def next_coord(self, load=False):
        """The cell one step away in the current direction, wrapped at the edges."""
        dx, dy = _STEPS.get(self.direction, (0, 0))
        x = self.current_pos.x + dx
        y = self.current_pos.y + dy

        if x == self.board.rows:
            x = 0
        elif x == -1:
            x = self.board.rows - 1

        if y == self.board.cols:
            y = 0
        elif y == -1:
            y = self.board.cols - 1

        return Coord(x, y)

    def move(self, color, load):
        """Take one step and write the resulting signs back to the board."""
        target = self.next_coord(load)
        self.new_pos = Cell(target, self._cell_at(target).sign)

        here = self._cell_at(self.current_pos)
        self.old_pos = Cell(here.position, here.sign)

        self.check_collision(color, load)

        self._cell_at(self.old_pos.position).sign = self.old_pos.sign
        self._cell_at(self.new_pos.position).sign = self.new_pos.sign

    def hits_tunnel_or_wall(self):
        """Pick random directions until the intended cell is a valid one."""
        while not self.is_valid_pos():
            coord = self.coord_by_random_direction()
            self.new_pos = Cell(coord, self._cell_at(coord).sign)

    def coord_by_random_direction(self):
        """Turn to a random direction and return the cell it leads to."""
        self.random_direction()
        return Creature.next_coord(self, False)

    def random_direction(self):
        """Turn to one of the four moving directions at random."""
        self.direction = _RANDOM_DIRECTIONS[self.rng.randrange(4)]

    def is_valid_pos(self):
        """True if the intended cell is neither a wall nor a tunnel."""
        return self.new_pos.sign is not Sign.WALL and not self.is_tunnel(self.new_pos)

    def check_collision(self, color, load):
        """React to the content of the intended cell; the base creature ignores it."""

    def is_tunnel(self, cell):
        """True for a non-wall cell on the border of the board."""
        pos = cell.position
        on_edge = (
            pos.x == 0
            or pos.y == 0
            or pos.x == self.board.rows - 1
            or pos.y == self.board.cols - 1
        )
        return on_edge and cell.sign is not Sign.WALL

    def print_after_move(self, ch, is_color, color, old, new):
        """Blank the old cell and draw `ch` at the new one."""
        out = self.out
        gotoxy(old.y, old.x, out)
        out.write(" ")
        gotoxy(new.y, new.x, out)
        if is_color:
            set_color(color, out)
        out.write(ch)