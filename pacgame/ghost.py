"""Ghosts: creatures that hunt the player."""

from __future__ import annotations

from .console import gotoxy, set_color
from .creature import Creature
from .definitions import Color, Direction, GhostLevel, Sign

_GHOST_SIGNS = {Sign.GHOST_ON_CRUMB, Sign.GHOST_ON_NONE}


class Ghost(Creature):
    """A ghost whose cleverness depends on its level."""

    MAX_STEPS = 20

    def __init__(self, initial_position, level, board, silent=False, rng=None, stream=None):
        super().__init__(initial_position, board, silent, rng, stream)
        self.move_count = 0
        self.level = level

    def next_coord(self, load=False):
        """Choose a direction by level (unless replaying) and return the next cell."""
        if not load:
            if self.level is GhostLevel.BEST:
                self.chase_pacman()
            elif self.level is GhostLevel.GOOD:
                if self.move_count == self.MAX_STEPS:
                    self.random_direction()
                elif self.move_count == self.MAX_STEPS + 5:
                    self.chase_pacman()
                    self.move_count = 0
                elif 0 <= self.move_count < self.MAX_STEPS:
                    self.chase_pacman()
                self.move_count += 1
            elif self.level is GhostLevel.NOVICE:
                if self.move_count == 0:
                    self.random_direction()
                elif self.move_count == self.MAX_STEPS - 1:
                    self.move_count = 0
                else:
                    self.move_count += 1
        return super().next_coord(load)

    def check_collision(self, color, load):
        """Avoid walls, tunnels and other ghosts, then move."""
        if not self.is_valid_pos():
            self.hits_tunnel_or_wall()
        self.update_position(color)

    def is_valid_pos(self):
        return not self.is_ghost_in_cell() and super().is_valid_pos()

    def is_ghost_in_cell(self):
        """True if another ghost occupies the intended cell."""
        return self.new_pos.sign in _GHOST_SIGNS

    def update_position(self, color):
        """Move onto the intended cell, restoring what the ghost stood on."""
        if self.new_pos.sign in (Sign.BREADCRUMBS, Sign.GHOST_ON_CRUMB):
            self.new_pos.sign = Sign.GHOST_ON_CRUMB
        elif self.new_pos.sign in (Sign.NONE, Sign.GHOST_ON_NONE):
            self.new_pos.sign = Sign.GHOST_ON_NONE

        out = self.out
        if not self.silent:
            new, old = self.new_pos.position, self.old_pos.position
            gotoxy(new.y, new.x, out)
            if color:
                set_color(Color.LIGHTRED, out)
            out.write("$")
            gotoxy(old.y, old.x, out)

        if self.old_pos.sign in (Sign.GHOST_ON_CRUMB, Sign.BREADCRUMBS):
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

    def _open(self, x, y):
        return self.board.cells[x][y].sign is not Sign.WALL

    def chase_pacman(self):
        """Turn towards the player along the longer axis first."""
        x_pac, y_pac = self.board.pacman_pos.x, self.board.pacman_pos.y
        x, y = self.current_pos.x, self.current_pos.y

        def vertical():
            if x < x_pac and self._open(x + 1, y):
                self.direction = Direction.DOWN
                return True
            if x > x_pac and self._open(x - 1, y):
                self.direction = Direction.UP
                return True
            return False

        def horizontal():
            if y < y_pac and self._open(x, y + 1):
                self.direction = Direction.RIGHT
                return True
            if y > y_pac and self._open(x, y - 1):
                self.direction = Direction.LEFT
                return True
            return False

        if abs(x - x_pac) > abs(y - y_pac):
            vertical() or horizontal()
        else:
            horizontal() or vertical()