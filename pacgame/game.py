"""One run of the game over a sequence of screens, live or replayed from step files."""

from __future__ import annotations

import random
import sys
import time

from . import console
from .board import Board
from .board_shapes import BoardShapes
from .console import clear_screen, gotoxy, set_color
from .definitions import ESC, Cell, Color, Coord, Direction, Sign
from .fruit import Fruit
from .ghost import Ghost
from .pacman import Pacman

PACMAN_LIVES = 3
SCORE = 0
PAC_IDX = 0
FRUIT_IDX = 1
GHOST_IDX = 2
MIN_LEN_LINE_FRUIT = 7
LEN_LINE = 7

_SCREEN_SUFFIX_LEN = 6

_KEY_DIRECTIONS = {
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "w": Direction.UP,
    "x": Direction.DOWN,
    "s": Direction.STAY,
}


def direction_from_key(key):
    """The direction a key stands for, or None for any other key."""
    if not isinstance(key, str):
        return None
    return _KEY_DIRECTIONS.get(key.lower())


def is_same_cell(first, second):
    """True if two coordinates name the same cell."""
    return first.x == second.x and first.y == second.y


def step_file_names(file_name):
    """The (steps, result) file names recorded for a screen file."""
    if len(file_name) < _SCREEN_SUFFIX_LEN:
        raise ValueError(f"not a screen file name: {file_name!r}")
    base = file_name[: len(file_name) - _SCREEN_SUFFIX_LEN]
    return base + "steps", base + "result"


def _next_int(tokens):
    token = next(tokens, None)
    if token is None:
        raise ValueError("malformed step line: missing number")
    try:
        return int(token)
    except ValueError:
        raise ValueError(f"malformed step line: {token!r} is not a number") from None


def _next_token(tokens):
    token = next(tokens, None)
    if token is None:
        raise ValueError("malformed step line: missing field")
    return token


class _ConsoleKeyboard:
    """Keyboard reading from the terminal."""

    @staticmethod
    def getch():
        return console.getch()

    @staticmethod
    def kbhit():
        return console.kbhit()


class Game:
    """Plays (or replays) the given screens one after another.

    `keyboard` is any object with getch() and kbhit(); by default the terminal.
    """

    def __init__(
        self, color, file_names, level, load, stream=None, rng=None, keyboard=None
    ):
        self.file_names = list(file_names)
        self.boards = []
        for name in self.file_names:
            shape = BoardShapes.from_file(name)
            self.boards.append(Board(shape.board_shape, shape.rows, shape.cols))
        self.color = color
        self.ghost_level = level
        self.load = load
        self.stream = stream
        self.rng = rng if rng is not None else random
        self.keyboard = keyboard if keyboard is not None else _ConsoleKeyboard()
        self.pacman_lives = PACMAN_LIVES
        self.game_score = SCORE
        self.time_point_win = 0
        self.time_point_death = 0
        self.curr_game_idx = 0
        self.curr_num_of_creatures = 0
        self.creatures = []
        self.game_over = False
        self.is_passed = True
        self.tick = 0.2
        self.replay_tick = 0.1

    @property
    def out(self):
        """The stream the game draws to."""
        return self.stream if self.stream is not None else sys.stdout

    @property
    def board(self):
        """The board currently being played."""
        return self.boards[self.curr_game_idx]

    def init_creatures(self, silent=False):
        """Place the player, the fruit and the ghosts on the current board."""
        board = self.board
        self.curr_num_of_creatures = board.curr_ghosts + GHOST_IDX
        pacman = Pacman(
            board.pacman_pos, board, self.pacman_lives, self.game_score,
            silent, self.rng, self.stream,
        )
        fruit = Fruit(
            board.random_fruit_pos(self.rng), board, silent, self.rng, self.stream
        )
        self.creatures = [pacman, fruit]
        self.init_ghosts(silent)

    def init_ghosts(self, silent=False):
        """Place the current board's ghosts after the player and the fruit."""
        board = self.board
        ghosts = [
            Ghost(
                board.ghost_pos(i - GHOST_IDX), self.ghost_level, board,
                silent, self.rng, self.stream,
            )
            for i in range(GHOST_IDX, self.curr_num_of_creatures)
        ]
        self.creatures[GHOST_IDX:] = ghosts

    def game_loop(self):
        """Play every screen live, recording steps and results."""
        lost = False
        out = self.out
        while not lost and self.curr_game_idx < len(self.boards):
            steps_file, result_file = self.open_files(
                self.file_names[self.curr_game_idx]
            )
            with steps_file, result_file:
                self.init_creatures(False)
                self.board.print_board(self.color, out)
                pacman = self.creatures[PAC_IDX]
                fruit = self.creatures[FRUIT_IDX]
                self.print_lives(pacman)
                self.print_score(pacman)

                user_key = self.keyboard.getch()
                flag = True
                self.game_over = False
                self.time_point_death = self.time_point_win = 0
                steps_file.write(f"{int(bool(self.color))}\n")

                while not self.game_over:
                    if user_key != ESC:
                        direction = direction_from_key(user_key)
                        if direction is not None:
                            pacman.direction = direction

                    while not self.keyboard.kbhit() and not self.game_over:
                        time.sleep(self.tick)
                        if user_key == ESC:
                            self.wait_for_unpause()
                            user_key = None

                        for i in range(self.curr_num_of_creatures):
                            if self.game_over:
                                break
                            if i == PAC_IDX or flag:
                                self.creatures[i].move(self.color, False)
                                self.write_step(steps_file, i, fruit)
                            if i == PAC_IDX:
                                self.time_point_win += 1
                                self.time_point_death += 1
                            self.pacman_hits_fruit(fruit, pacman)
                            self.update_pacman_status(
                                pacman, result_file, steps_file, fruit, False
                            )
                        flag = not flag

                        if self.is_game_over(pacman) or self.is_won(pacman):
                            self.game_over = True
                    if not self.game_over:
                        user_key = self.keyboard.getch()

                lost = self.set_for_next_board(result_file, pacman, False)
                if not lost:
                    result_file.write(
                        f"Point of time that the pacman won: {self.time_point_win}\n"
                    )

        self.print_if_won(lost)
        self.keyboard.getch()
        clear_screen(out)

    def load_game(self, silent):
        """Replay every screen from its recorded steps, checking the results."""
        lost = False
        out = self.out
        while not lost and self.curr_game_idx < len(self.boards):
            try:
                steps_file, result_file = self.open_files(
                    self.file_names[self.curr_game_idx]
                )
            except OSError:
                out.write("File doesn't exist!\n")
                return
            with steps_file, result_file:
                if steps_file.readline().rstrip("\r\n") == "1":
                    self.color = True

                self.init_creatures(silent)
                if not silent:
                    self.board.print_board(self.color, out)
                pacman = self.creatures[PAC_IDX]
                fruit = self.creatures[FRUIT_IDX]
                if not silent:
                    self.print_lives(pacman)
                    self.print_score(pacman)

                self.game_over = False
                self.time_point_death = self.time_point_win = 0

                for raw in steps_file:
                    if self.game_over:
                        break
                    if not silent:
                        time.sleep(self.replay_tick)
                    self.read_step(
                        steps_file, result_file, raw.rstrip("\r\n"),
                        fruit, pacman, silent,
                    )
                    if self.is_game_over(pacman) or self.is_won(pacman):
                        self.game_over = True

                lost = self.set_for_next_board(result_file, pacman, silent)
                self.print_silent()

        self.print_if_won(lost)

    def set_for_next_board(self, result_file, pacman, silent=False):
        """Close the current screen; return True if the player has lost."""
        out = self.out
        lost = False
        if not silent:
            clear_screen(out)
        if self.is_game_over(pacman):
            if self.color:
                set_color(Color.WHITE, out)
            if not silent:
                out.write("\n\n\t\t\t\tGAME OVER!\n")
            lost = True
        self.pacman_lives = pacman.lives
        self.game_score = pacman.score
        if silent:
            self.silent_mode(result_file)
        self.creatures = []
        self.curr_game_idx += 1
        return lost

    def print_silent(self):
        """Report whether the replay matched the recorded results."""
        self.out.write("Test Passed\n" if self.is_passed else "Test Failed\n")

    def print_if_won(self, lost):
        """Congratulate the player unless the game was lost."""
        if lost:
            return
        out = self.out
        if self.color:
            set_color(Color.WHITE, out)
        out.write("\n\n\t\t\t\tYOU WON! CONGRATULATION! :)\n")
        out.write("\n\n\t\t\t\tPress any key to continue...\n")

    def silent_mode(self, result_file):
        """Compare the next recorded result line with the replayed time points."""
        if self.color:
            set_color(Color.WHITE, self.out)
        tokens = result_file.readline().split()
        tag = tokens[LEN_LINE - 1] if len(tokens) >= LEN_LINE else None
        num = None
        if len(tokens) > LEN_LINE:
            try:
                num = int(tokens[LEN_LINE])
            except ValueError:
                num = None
        if (tag == "died:" and num != self.time_point_death) or (
            tag == "won:" and num != self.time_point_win
        ):
            self.is_passed = False

    def write_step(self, steps_file, index, fruit):
        """Record the last move of creature `index`."""
        parts = []
        if index == PAC_IDX:
            parts.append("Pacman ")
        elif index == FRUIT_IDX:
            parts.append("Fruit ")
            if fruit.curr_time_count == 1 and fruit.disappear:
                parts.append("disappearance ")
            elif fruit.time_count == fruit.curr_time_count + 1 and not fruit.disappear:
                pos = fruit.current_pos
                parts.append(f"appearance {pos.x} {pos.y} value: {fruit.value} ")
        elif GHOST_IDX <= index < GHOST_IDX + 4:
            parts.append(f"Ghost {index - GHOST_IDX} ")
        parts.append(f"{int(self.creatures[index].direction)}\n")
        steps_file.write("".join(parts))

    def read_step(self, steps_file, result_file, line, fruit, pacman, silent):
        """Replay one recorded step line."""
        tokens = iter(line.split())
        kind = next(tokens, "")

        if kind == "Pacman":
            creature = self.creatures[PAC_IDX]
            creature.direction = Direction(_next_int(tokens))
            creature.move(self.color, True)
            self.time_point_win += 1
            self.time_point_death += 1
        elif kind == "Fruit":
            self.handle_fruit_from_file(line, tokens, fruit)
        elif kind == "Ghost":
            ghost_num = _next_int(tokens)
            direction = Direction(_next_int(tokens))
            ghost = self.creatures[ghost_num + GHOST_IDX]
            ghost.direction = direction
            ghost.move(self.color, True)

        self.pacman_hits_fruit(fruit, pacman)
        self.update_pacman_status(pacman, result_file, steps_file, fruit, silent)

    def update_pacman_status(self, pacman, result_file, steps_file, fruit, silent=False):
        """Check the player against every ghost and refresh the status text."""
        for j in range(GHOST_IDX, self.curr_num_of_creatures):
            if self.game_over:
                break
            self.pacman_hits_ghost(pacman, j, result_file, steps_file, fruit, silent)
            if self.is_game_over(pacman):
                self.game_over = True
            elif not silent:
                self.print_lives(pacman)
        if not silent:
            self.print_score(pacman)

    def handle_fruit_from_file(self, line, tokens, fruit):
        """Replay a fruit step; `tokens` holds the fields after the word Fruit."""
        tokens = iter(tokens)
        if len(line) > MIN_LEN_LINE_FRUIT:
            state = _next_token(tokens)
            if state == "appearance":
                x = _next_int(tokens)
                y = _next_int(tokens)
                self.creatures[FRUIT_IDX].current_pos = Coord(x, y)
                _next_token(tokens)
                fruit.value = _next_int(tokens)
                fruit.show(self.color)
            else:
                fruit.hit(self.color, self.load)
        creature = self.creatures[FRUIT_IDX]
        creature.direction = Direction(_next_int(tokens))
        creature.move(self.color, self.load)

    def open_files(self, file_name):
        """Open the steps and result files of a screen, for writing or replay."""
        steps_name, result_name = step_file_names(file_name)
        mode = "r" if self.load else "w"
        steps_file = open(steps_name, mode, encoding="utf-8")
        try:
            result_file = open(result_name, mode, encoding="utf-8")
        except OSError:
            steps_file.close()
            raise
        return steps_file, result_file

    def is_game_over(self, pacman):
        """True once the player has no lives left."""
        return pacman.lives == 0

    def is_won(self, pacman):
        """True once every breadcrumb of the current board is eaten."""
        return pacman.eaten_breadcrumbs == self.board.num_of_breadcrumbs

    def pacman_hits_ghost(
        self, pacman, ghost_index, result_file, steps_file, fruit, silent=False
    ):
        """Handle the player meeting the ghost at `ghost_index`."""
        pac = self.creatures[PAC_IDX]
        ghost = self.creatures[ghost_index]
        target = ghost.new_pos.position
        if not (
            is_same_cell(pac.new_pos.position, target)
            or is_same_cell(pac.current_pos, target)
        ):
            return
        if pacman is not None:
            pacman.hit_by_ghost(self.color)
        if not self.load:
            result_file.write(
                f"Point of time that the pacman died: {self.time_point_death}\n"
            )
            ghost.move(self.color, False)
            self.write_step(steps_file, ghost_index, fruit)
        elif silent:
            self.silent_mode(result_file)

    def pacman_hits_fruit(self, fruit, pacman):
        """Let the player eat the fruit when they meet."""
        if fruit.disappear:
            return
        pac = self.creatures[PAC_IDX]
        fruit_creature = self.creatures[FRUIT_IDX]
        sign = Sign.NONE
        if is_same_cell(pac.current_pos, fruit_creature.new_pos.position):
            pacman.score += fruit.value
            fruit.hit(self.color, self.load)
        elif is_same_cell(fruit_creature.current_pos, pac.new_pos.position):
            pos = fruit_creature.current_pos
            sign = self.board.cells[pos.x][pos.y].sign
            self.score_after_fruit(Cell(pos, sign), pacman, fruit)
            fruit.hit(self.color, self.load)
            pacman.eat_fruit(self.color)
        fruit_creature.new_pos = Cell(Coord(0, 0), sign)

    def score_after_fruit(self, cell, pacman, fruit):
        """Add the fruit's value, plus the breadcrumb it was lying on."""
        if cell.sign is Sign.FRUIT_ON_CRUMB:
            pacman.score += fruit.value + 1
            pacman.eaten_breadcrumbs += 1
        else:
            pacman.score += fruit.value

    def wait_for_unpause(self):
        """Block until ESC is pressed again."""
        while self.keyboard.getch() != ESC:
            pass

    def print_lives(self, pacman):
        """Draw the lives counter in the board's text area."""
        out = self.out
        text = self.board.text_pos
        gotoxy(text.y, text.x, out)
        if self.color:
            set_color(Color.LIGHTRED, out)
        out.write(f"LIVES: {pacman.lives}\n")

    def print_score(self, pacman):
        """Draw the score in the board's text area."""
        out = self.out
        text = self.board.text_pos
        gotoxy(text.y, text.x + 1, out)
        if self.color:
            set_color(Color.LIGHTRED, out)
        out.write(f"SCORE: {pacman.score}")