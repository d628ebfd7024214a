"""The player's creature."""

from __future__ import annotations

from .creature import Creature
from .definitions import Cell, Color, Sign

_BLOCKING = {
    Sign.GHOST_ON_CRUMB,
    Sign.GHOST_ON_NONE,
    Sign.FRUIT_ON_CRUMB,
    Sign.FRUIT_ON_NONE,
}


class Pacman(Creature):
    """The player: eats breadcrumbs, loses lives to ghosts."""

    PACMAN = "@"

    def __init__(
        self, initial_position, board, lives, score, silent=False, rng=None, stream=None
    ):
        super().__init__(initial_position, board, silent, rng, stream)
        self.lives = lives
        self.score = score
        self.eaten_breadcrumbs = 0

    def move(self, color, load):
        """Step and publish the new position to the board."""
        super().move(color, load)
        self.board.pacman_pos = self.current_pos

    def check_collision(self, color, load):
        """Stop at walls, leave ghost and fruit contact to the game, eat breadcrumbs."""
        sign = self.new_pos.sign
        if sign is Sign.WALL:
            if not self.silent:
                out = self.out
                self.print_after_move(
                    self.PACMAN, color, Color.YELLOW,
                    self.old_pos.position, self.old_pos.position,
                )
                out.flush()
            self.current_pos = self.old_pos.position
        elif sign not in _BLOCKING:
            if sign is Sign.BREADCRUMBS:
                self.score += 1
                self.eaten_breadcrumbs += 1
            self.update_position(color)

    def update_position(self, color):
        """Move onto the intended cell, leaving an empty cell behind."""
        self.old_pos.sign = Sign.NONE
        if not self.silent:
            self.print_after_move(
                self.PACMAN, color, Color.YELLOW,
                self.old_pos.position, self.new_pos.position,
            )
        self.current_pos = self.new_pos.position
        self.new_pos.sign = Sign.PACMAN

    def hit_by_ghost(self, color):
        """Return to the starting position and lose a life."""
        self.old_pos.sign = Sign.NONE
        self.new_pos = Cell(self.start_pos, Sign.PACMAN)
        if not self.silent:
            self.print_after_move(
                self.PACMAN, color, Color.YELLOW,
                self.old_pos.position, self.new_pos.position,
            )
        self.current_pos = self.new_pos.position
        self.board.pacman_pos = self.current_pos
        self.lives -= 1

    def eat_fruit(self, color):
        """Move onto the cell where a fruit was eaten."""
        self.new_pos.sign = Sign.PACMAN
        if not self.silent:
            self.print_after_move(
                self.PACMAN, color, Color.YELLOW,
                self.old_pos.position, self.new_pos.position,
            )
        self.current_pos = self.new_pos.position