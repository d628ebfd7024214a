# pacgame

A Pac-Man game played in the terminal. Eat every breadcrumb on each screen
while ghosts hunt you. A fruit wanders the board and gives bonus points.
Drawing uses ANSI escape sequences, so the game needs a terminal that
understands them.

## Installing

    pip install .

## Playing

Put one or more `*.screen` files in the current directory and run:

    pacgame

The menu offers:

- `1`: start a new game without colour
- `2`: start a new game with colour
- `8`: show instructions and keys
- `9`: exit

Next you choose the ghost level: `a` best, `b` good or `c` novice. Best
ghosts always chase you. Good ghosts chase for 20 moves and then wander for
a few. Novice ghosts pick a random direction and keep it. After that you may
press `y` and type the name of a single screen. Any other key plays every
screen in the directory in sorted name order.

Keys during play (upper or lower case):

| Key   | Action         |
|-------|----------------|
| `W`   | up             |
| `X`   | down           |
| `A`   | left           |
| `D`   | right          |
| `S`   | stay           |
| `ESC` | pause / resume |

- Pacman starts with 3 lives. Lives and score carry over from one screen to the next.
- Each breadcrumb is worth one point.
- The fruit is worth 5 to 9 points. It shows up and vanishes at random times, and it also vanishes when a ghost meets it.
- A screen is won once every breadcrumb on it is eaten.
- The game ends when the lives run out.

Every screen played in a normal game records two files next to the screen
file. For `maze.screen` they are:

- `maze.steps`: every move
- `maze.result`: the move counts at which Pacman died or won

## Replaying

    pacgame -load

replays the recorded steps of every screen in the directory. To replay
without drawing and compare the replay with the recorded results, add
`-silent`:

    pacgame -load -silent

Each screen then prints `Test Passed` or `Test Failed`. If a screen has no
recorded files, the replay prints `File doesn't exist!` and stops.

## Screen files

A screen is a plain text file.

- The first line sets the width of the board.
- Lines longer than 80 characters are cut.
- Shorter lines are filled with breadcrumbs.

| Character     | Meaning |
|---------------|---------|
| `#`           | wall |
| ` ` (space)   | breadcrumb |
| `@`           | Pacman's start. Only the first one counts; later ones become breadcrumbs. |
| `$`           | a ghost's start. Up to four; later ones become breadcrumbs. |
| `&`           | top-left corner of a 3×20 area where lives and score are shown |

A cell on the edge of the board that is not a wall is a tunnel. Pacman
passes through it to the opposite side. Ghosts and the fruit do not.

## Using the package from Python

`pacgame.menu.GameMenu(directory, stream, keyboard)` runs the menu on any
directory. It draws to any text stream. Its keyboard can be any object with
`getch()` and `kbhit()` methods. `pacgame.game.Game` plays or replays a list
of screen files directly. The board is built by `pacgame.board_shapes.BoardShapes`
and `pacgame.board.Board`.

## Running the tests

    pip install .[test]
    pytest