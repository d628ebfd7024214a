import io
import random

import pytest

from pacgame.definitions import ESC, Cell, Coord, Direction, GhostLevel, Sign
from pacgame.game import (
    Game,
    direction_from_key,
    is_same_cell,
    step_file_names,
)

GHOST_SCREEN = "#####\n#@ $#\n#####\n"
# Pacman beside a single breadcrumb in a tunnel; the fruit can only start at (2, 1).
WIN_SCREEN = "###\n#@ \n#x#\n###\n"


class ScriptedKeyboard:
    def __init__(self, keys):
        self.keys = list(keys)

    def getch(self):
        if not self.keys:
            raise EOFError("no more keys")
        return self.keys.pop(0)

    def kbhit(self):
        return False


def make_game(tmp_path, screen, load=False, keys=(), name="level.screen"):
    path = tmp_path / name
    path.write_text(screen)
    game = Game(
        False,
        [str(path)],
        GhostLevel.NOVICE,
        load,
        stream=io.StringIO(),
        rng=random.Random(3),
        keyboard=ScriptedKeyboard(keys),
    )
    game.tick = 0
    game.replay_tick = 0
    return game


@pytest.mark.parametrize(
    "key, expected",
    [
        ("a", Direction.LEFT),
        ("A", Direction.LEFT),
        ("d", Direction.RIGHT),
        ("w", Direction.UP),
        ("X", Direction.DOWN),
        ("s", Direction.STAY),
    ],
)
def test_direction_from_key(key, expected):
    assert direction_from_key(key) is expected


def test_direction_from_unknown_key():
    assert direction_from_key("q") is None


def test_is_same_cell():
    assert is_same_cell(Coord(1, 2), Coord(1, 2))
    assert not is_same_cell(Coord(1, 2), Coord(2, 1))


def test_step_file_names():
    assert step_file_names("board1.screen") == ("board1.steps", "board1.result")


def test_step_file_names_too_short():
    with pytest.raises(ValueError):
        step_file_names("abc")


def test_init_creatures_places_everyone(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    pacman, fruit, ghost = game.creatures
    assert game.curr_num_of_creatures == 3
    assert pacman.current_pos == Coord(1, 1)
    assert fruit.current_pos == Coord(1, 2)
    assert ghost.current_pos == Coord(1, 3)
    assert pacman.lives == 3
    assert pacman.score == 0


def test_game_over_and_won(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    pacman = game.creatures[0]
    assert not game.is_game_over(pacman)
    pacman.lives = 0
    assert game.is_game_over(pacman)
    assert not game.is_won(pacman)
    pacman.eaten_breadcrumbs = game.board.num_of_breadcrumbs
    assert game.is_won(pacman)


def test_score_after_fruit_on_crumb(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    pacman, fruit = game.creatures[0], game.creatures[1]
    game.score_after_fruit(Cell(Coord(1, 2), Sign.FRUIT_ON_CRUMB), pacman, fruit)
    assert pacman.score == fruit.value + 1
    assert pacman.eaten_breadcrumbs == 1


def test_score_after_fruit_on_empty_cell(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    pacman, fruit = game.creatures[0], game.creatures[1]
    game.score_after_fruit(Cell(Coord(1, 2), Sign.FRUIT_ON_NONE), pacman, fruit)
    assert pacman.score == fruit.value
    assert pacman.eaten_breadcrumbs == 0


def test_write_step_pacman_and_ghost(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    game.creatures[0].direction = Direction.RIGHT
    steps = io.StringIO()
    game.write_step(steps, 0, game.creatures[1])
    game.write_step(steps, 2, game.creatures[1])
    assert steps.getvalue().splitlines() == ["Pacman 3", "Ghost 0 4"]


def test_write_step_fruit_appearance(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    fruit = game.creatures[1]
    fruit.time_count = 10
    fruit.curr_time_count = 9
    fruit.disappear = False
    fruit.current_pos = Coord(1, 2)
    fruit.value = 7
    fruit.direction = Direction.LEFT
    steps = io.StringIO()
    game.write_step(steps, 1, fruit)
    assert steps.getvalue() == "Fruit appearance 1 2 value: 7 2\n"


def test_write_step_fruit_disappearance(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    fruit = game.creatures[1]
    fruit.curr_time_count = 1
    fruit.disappear = True
    steps = io.StringIO()
    game.write_step(steps, 1, fruit)
    assert steps.getvalue() == "Fruit disappearance 4\n"


def test_silent_mode_matching_and_mismatching(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN, load=True)
    game.time_point_death = 5
    game.silent_mode(io.StringIO("Point of time that the pacman died: 5\n"))
    assert game.is_passed
    game.time_point_win = 2
    game.silent_mode(io.StringIO("Point of time that the pacman won: 3\n"))
    assert not game.is_passed


def test_print_silent(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN, load=True)
    game.print_silent()
    game.is_passed = False
    game.print_silent()
    assert game.stream.getvalue() == "Test Passed\nTest Failed\n"


def test_read_step_moves_pacman(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN, load=True)
    game.init_creatures(True)
    pacman, fruit = game.creatures[0], game.creatures[1]
    value = fruit.value
    game.read_step(io.StringIO(), io.StringIO(), "Pacman 3", fruit, pacman, True)
    assert pacman.current_pos == Coord(1, 2)
    assert game.time_point_win == 1
    assert game.time_point_death == 1
    assert pacman.eaten_breadcrumbs == 1
    assert pacman.score == 1 + value
    assert fruit.disappear


def test_read_step_malformed_line(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN, load=True)
    game.init_creatures(True)
    pacman, fruit = game.creatures[0], game.creatures[1]
    with pytest.raises(ValueError):
        game.read_step(io.StringIO(), io.StringIO(), "Pacman", fruit, pacman, True)


def test_handle_fruit_appearance_from_file(tmp_path):
    game = make_game(tmp_path, WIN_SCREEN, load=True)
    game.init_creatures(True)
    fruit = game.creatures[1]
    line = "Fruit appearance 2 1 value: 7 4"
    game.handle_fruit_from_file(line, iter(line.split()[1:]), fruit)
    assert fruit.value == 7
    assert fruit.current_pos == Coord(2, 1)
    assert game.board.cells[2][1].sign is Sign.FRUIT_ON_NONE


def test_pacman_hits_ghost_records_death(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    game.init_creatures(True)
    pacman, fruit, ghost = game.creatures
    ghost.new_pos = Cell(pacman.current_pos, Sign.GHOST_ON_NONE)
    result, steps = io.StringIO(), io.StringIO()
    game.pacman_hits_ghost(pacman, 2, result, steps, fruit, True)
    assert pacman.lives == 2
    assert result.getvalue() == "Point of time that the pacman died: 0\n"
    assert steps.getvalue().startswith("Ghost 0 ")


def test_wait_for_unpause_consumes_until_esc(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN, keys=["a", "b", ESC, "z"])
    game.wait_for_unpause()
    assert game.keyboard.keys == ["z"]


def test_open_files_creates_step_and_result_files(tmp_path):
    game = make_game(tmp_path, GHOST_SCREEN)
    steps, result = game.open_files(game.file_names[0])
    with steps, result:
        steps.write("0\n")
    assert (tmp_path / "level.steps").read_text() == "0\n"
    assert (tmp_path / "level.result").exists()


def test_game_loop_records_a_win_and_replays_it(tmp_path):
    game = make_game(tmp_path, WIN_SCREEN, keys=["d", "q"])
    game.game_loop()
    assert "YOU WON!" in game.stream.getvalue()
    result = (tmp_path / "level.result").read_text()
    assert result == "Point of time that the pacman won: 1\n"
    steps = (tmp_path / "level.steps").read_text().splitlines()
    assert steps[0] == "0"
    assert steps[1] == "Pacman 3"
    assert steps[2].startswith("Fruit appearance 1 1 value: ")

    replay = make_game(tmp_path, WIN_SCREEN, load=True)
    replay.load_game(True)
    output = replay.stream.getvalue()
    assert "Test Passed" in output
    assert replay.is_passed


def test_load_game_without_recordings(tmp_path):
    game = make_game(tmp_path, WIN_SCREEN, load=True)
    game.load_game(True)
    assert game.stream.getvalue() == "File doesn't exist!\n"