import io
import random

import pytest

from pacgame.board import Board
from pacgame.console import gotoxy, set_color
from pacgame.creature import Creature
from pacgame.definitions import Cell, Color, Coord, Direction, Sign

CLOSED = ["#####", "#   #", "#   #", "#   #", "#####"]
OPEN = ["#   #", "     ", "     ", "     ", "#   #"]


def make(pattern, pos, stream=None, silent=True):
    board = Board(pattern, len(pattern), len(pattern[0]))
    creature = Creature(pos, board, silent=silent, rng=random.Random(7), stream=stream)
    return board, creature


def snapshot(board):
    return [[cell.sign for cell in row] for row in board.cells]


def test_stay_keeps_position():
    _, creature = make(CLOSED, Coord(2, 2))
    assert creature.direction is Direction.STAY
    assert creature.next_coord(False) == Coord(2, 2)


@pytest.mark.parametrize(
    "direction, axis, sign",
    [
        (Direction.UP, "x", -1),
        (Direction.DOWN, "x", 1),
        (Direction.LEFT, "y", -1),
        (Direction.RIGHT, "y", 1),
    ],
)
def test_next_coord_moves_one_cell(direction, axis, sign):
    start = Coord(2, 2)
    _, creature = make(CLOSED, start)
    creature.direction = direction
    result = creature.next_coord(False)
    moved = getattr(result, axis) - getattr(start, axis)
    other = "y" if axis == "x" else "x"
    assert moved == sign
    assert getattr(result, other) == getattr(start, other)
    assert creature.current_pos == start


def test_next_coord_wraps_vertically():
    board, creature = make(OPEN, Coord(0, 2))
    creature.direction = Direction.UP
    assert creature.next_coord(False) == Coord(board.rows - 1, 2)
    creature.current_pos = Coord(board.rows - 1, 2)
    creature.direction = Direction.DOWN
    assert creature.next_coord(False) == Coord(0, 2)


def test_next_coord_wraps_horizontally():
    board, creature = make(OPEN, Coord(2, 0))
    creature.direction = Direction.LEFT
    assert creature.next_coord(False) == Coord(2, board.cols - 1)
    creature.current_pos = Coord(2, board.cols - 1)
    creature.direction = Direction.RIGHT
    assert creature.next_coord(False) == Coord(2, 0)


def test_base_move_into_wall_leaves_board_unchanged():
    board, creature = make(CLOSED, Coord(1, 1))
    before = snapshot(board)
    creature.direction = Direction.UP
    creature.move(False, False)
    assert creature.current_pos == Coord(1, 1)
    assert creature.new_pos.sign is Sign.WALL
    assert snapshot(board) == before


def test_base_move_records_old_and_new_cells():
    board, creature = make(CLOSED, Coord(2, 2))
    before = snapshot(board)
    creature.direction = Direction.RIGHT
    creature.move(False, False)
    assert creature.old_pos.position == Coord(2, 2)
    assert creature.new_pos.position == creature.next_coord(False)
    assert creature.new_pos.sign is Sign.BREADCRUMBS
    assert snapshot(board) == before


def test_random_direction_never_stays():
    _, creature = make(CLOSED, Coord(2, 2))
    seen = set()
    for _ in range(60):
        creature.random_direction()
        seen.add(creature.direction)
    assert Direction.STAY not in seen
    assert seen == {Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT}


def test_is_tunnel():
    board, creature = make(OPEN, Coord(2, 2))
    assert creature.is_tunnel(board.cells[0][1]) is True
    assert creature.is_tunnel(board.cells[0][0]) is False
    assert creature.is_tunnel(board.cells[2][2]) is False


def test_is_valid_pos():
    board, creature = make(OPEN, Coord(2, 2))
    creature.new_pos = Cell(Coord(0, 0), Sign.WALL)
    assert creature.is_valid_pos() is False
    creature.new_pos = Cell(Coord(1, 0), Sign.BREADCRUMBS)
    assert creature.is_valid_pos() is False
    creature.new_pos = Cell(Coord(2, 3), Sign.BREADCRUMBS)
    assert creature.is_valid_pos() is True


def test_hits_tunnel_or_wall_finds_valid_neighbour():
    board, creature = make(CLOSED, Coord(1, 1))
    creature.new_pos = Cell(Coord(0, 1), Sign.WALL)
    creature.hits_tunnel_or_wall()
    pos = creature.new_pos.position
    assert creature.is_valid_pos()
    assert abs(pos.x - 1) + abs(pos.y - 1) == 1
    assert creature.new_pos.sign is board.cells[pos.x][pos.y].sign


def test_coord_by_random_direction_is_next_coord():
    _, creature = make(CLOSED, Coord(2, 2))
    result = creature.coord_by_random_direction()
    assert result == creature.next_coord(False)
    assert creature.direction is not Direction.STAY


def test_print_after_move_with_color():
    buf = io.StringIO()
    _, creature = make(CLOSED, Coord(2, 2), stream=buf, silent=False)
    old, new = Coord(1, 2), Coord(2, 3)
    creature.print_after_move("@", True, Color.YELLOW, old, new)

    expected = io.StringIO()
    gotoxy(old.y, old.x, expected)
    expected.write(" ")
    gotoxy(new.y, new.x, expected)
    set_color(Color.YELLOW, expected)
    expected.write("@")
    assert buf.getvalue() == expected.getvalue()


def test_print_after_move_without_color():
    buf = io.StringIO()
    _, creature = make(CLOSED, Coord(2, 2), stream=buf, silent=False)
    creature.print_after_move("@", False, Color.YELLOW, Coord(1, 1), Coord(1, 2))

    colored = io.StringIO()
    set_color(Color.YELLOW, colored)
    assert colored.getvalue() not in buf.getvalue()
    assert buf.getvalue().endswith("@")