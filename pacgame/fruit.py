"""The bonus fruit that wanders the board, appearing and vanishing."""

from __future__ import annotations

from .console import gotoxy, set_color
from .creature import Creature
from .definitions import Color, Coord, Sign

_NOT_FOR_FRUIT = {
    Sign.WALL,
    Sign.PACMAN,
    Sign.GHOST_ON_CRUMB,
    Sign.GHOST_ON_NONE,
    Sign.TEXT,
}


class Fruit(Creature):
    """A fruit worth 5 to 9 points, visible for a random number of moves."""

    def __init__(self, initial_position, board, silent=False, rng=None, stream=None):
        super().__init__(initial_position, board, silent, rng, stream)
        self.value = self.rng.randrange(5) + 5
        self.time_count = self.rng.randrange(40) + 30
        self.curr_time_count = self.time_count
        self.disappear = False

    def randomize_value(self):
        """Give the fruit a new random value from 5 to 9."""
        self.value = self.rng.randrange(5) + 5

    def relocate(self, color):
        """Move to a random valid cell and pick a new value."""
        if not any(
            self.is_valid_coord(x, y)
            for x in range(self.board.rows)
            for y in range(self.board.cols)
        ):
            raise ValueError("no free cell for a fruit")
        while True:
            x = self.rng.randrange(self.board.rows)
            y = self.rng.randrange(self.board.cols)
            if self.is_valid_coord(x, y):
                break
        self.current_pos = Coord(x, y)
        self.randomize_value()

    def is_valid_coord(self, x, y):
        """True if the fruit may be placed at row x, column y."""
        cell = self.board.cells[x][y]
        return cell.sign not in _NOT_FOR_FRUIT and not self.is_tunnel(cell)

    def show(self, color):
        """Put the fruit on the board at its current position."""
        cell = self._cell_at(self.current_pos)
        if cell.sign is Sign.BREADCRUMBS:
            cell.sign = Sign.FRUIT_ON_CRUMB
        elif cell.sign is Sign.NONE:
            cell.sign = Sign.FRUIT_ON_NONE

        if not self.silent:
            out = self.out
            gotoxy(self.current_pos.y, self.current_pos.x, out)
            if color:
                set_color(Color.LIGHTCYAN, out)
            out.write(str(self.value))

        self.disappear = False

    def disappearance(self, color):
        """Take the fruit off the board, restoring what was under it."""
        cell = self._cell_at(self.current_pos)
        out = self.out
        if not self.silent:
            gotoxy(self.current_pos.y, self.current_pos.x, out)

        if cell.sign is Sign.FRUIT_ON_CRUMB:
            cell.sign = Sign.BREADCRUMBS
            if not self.silent:
                if color:
                    set_color(Color.LIGHTCYAN, out)
                out.write(".")
        elif cell.sign is Sign.FRUIT_ON_NONE:
            cell.sign = Sign.NONE
            if not self.silent:
                out.write(" ")

    def update_position(self, color):
        """Move onto the intended cell, restoring what the fruit stood on."""
        if self.new_pos.sign is Sign.BREADCRUMBS:
            self.new_pos.sign = Sign.FRUIT_ON_CRUMB
        elif self.new_pos.sign is Sign.NONE:
            self.new_pos.sign = Sign.FRUIT_ON_NONE

        out = self.out
        if not self.silent:
            new, old = self.new_pos.position, self.old_pos.position
            gotoxy(new.y, new.x, out)
            if color:
                set_color(Color.LIGHTCYAN, out)
            out.write(str(self.value))
            gotoxy(old.y, old.x, out)

        if self.old_pos.sign in (Sign.FRUIT_ON_CRUMB, Sign.BREADCRUMBS):
            if not self.silent:
                if color:
                    set_color(Color.LIGHTCYAN, out)
                out.write(".")
            self.old_pos.sign = Sign.BREADCRUMBS
        else:
            if not self.silent:
                out.write(" ")
            self.old_pos.sign = Sign.NONE

        self.current_pos = self.new_pos.position

    def check_collision(self, color, load):
        """Avoid walls and tunnels, vanish on ghosts, never step onto the player."""
        if not self.is_valid_pos():
            self.hits_tunnel_or_wall()
        elif self.new_pos.sign in (Sign.GHOST_ON_CRUMB, Sign.GHOST_ON_NONE):
            self.hit(color, load)
        if self.new_pos.sign is not Sign.PACMAN:
            self.update_position(color)

    def hit(self, color, load):
        """The fruit was met by a ghost or the player."""
        self.curr_time_count = 0
        self.hide(color, load)

    def hide(self, color, load):
        """Vanish; when playing live, also choose the next place and time to appear."""
        self.disappear = True
        self.disappearance(color)
        if not load:
            self.relocate(color)
            self.time_count = self.rng.randrange(40) + 30

    def move(self, color, load):
        """Advance the appearance timer and, while visible, take a step."""
        if not load:
            if self.curr_time_count == 0 and not self.disappear:
                self.hide(color, load)
            elif self.time_count == self.curr_time_count:
                self.show(color)

        if not self.disappear:
            self.curr_time_count -= 1
            if not load:
                self.random_direction()
            super().move(color, load)
        else:
            self.curr_time_count += 1