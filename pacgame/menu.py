"""The start-up menu: choosing screens, levels and replay mode."""

from __future__ import annotations

import os
import sys

from .console import clear_screen
from .definitions import GhostLevel
from .game import Game, _ConsoleKeyboard

SCREEN_EXTENSION = ".screen"

_MENU_TEXT = (
    "(1) Start a new game without color\n"
    "(2) Start a new game with color\n"
    "(8) Present instructions and keys\n"
    "(9) EXIT \n"
)

_LEVEL_TEXT = "Choose level:\n(a) BEST\n(b) GOOD\n(c) NOVICE\n"

_LEVEL_KEYS = {
    "a": GhostLevel.BEST,
    "b": GhostLevel.GOOD,
    "c": GhostLevel.NOVICE,
}

_INSTRUCTIONS = (
    "As PACMAN your mission is simple:\n"
    "EAT ALL THE BREADCRUMBS!\n"
    "Navigate through the board using the keyboard's following:\n"
    "D- Right\n"
    "A- Left \n"
    "W- Up\n"
    "X- Down\n"
    "S- Stay\n"
    "There are ghosts hunting you and your job is to avoid them!\n"
    "Notice! The Pacman has 3 lives. \n"
    "Every time the Pacman is eaten by the ghosts the Pacman loses one life.\n"
    "If the Pacman has 0 lives - the game is OVER\n"
    "Collect as many breadcrumbs as possible to earn the highest score.\n"
    "* You can always pause and unpause your game using the ESC button.\n"
    "GOOD LUCK! :) \n\n"
)


def is_load_requested(argv):
    """True if the first command-line argument asks to replay recorded games."""
    return len(argv) > 0 and argv[0] == "-load"


def is_silent(argv):
    """True if the second command-line argument asks for a silent replay."""
    return len(argv) > 1 and argv[1] == "-silent"


def find_screen_files(directory):
    """Names of the screen files in `directory`, in sorted order."""
    names = [
        entry.name
        for entry in os.scandir(directory)
        if entry.is_file() and os.path.splitext(entry.name)[1] == SCREEN_EXTENSION
    ]
    return sorted(names)


class GameMenu:
    """Interactive menu that starts new games or replays recorded ones."""

    def __init__(self, directory=None, stream=None, keyboard=None):
        self.directory = directory if directory is not None else os.getcwd()
        self.stream = stream
        self.keyboard = keyboard if keyboard is not None else _ConsoleKeyboard()
        self.game = None
        self.file_names = find_screen_files(self.directory)

    @property
    def out(self):
        """The stream the menu writes to."""
        return self.stream if self.stream is not None else sys.stdout

    def _paths(self, names):
        return [os.path.join(self.directory, name) for name in names]

    def _new_game(self, color, names, level, load):
        self.game = Game(
            color, self._paths(names), level, load,
            stream=self.stream, keyboard=self.keyboard,
        )
        return self.game

    def instructions(self):
        """Show how to play."""
        self.out.write(_INSTRUCTIONS)

    def run(self, argv):
        """Replay recorded games if asked to, otherwise show the menu until exit."""
        if is_load_requested(argv):
            self.load_game(False, is_silent(argv))
            return

        out = self.out
        while True:
            out.write(_MENU_TEXT)
            out.flush()
            choice = self.keyboard.getch()
            clear_screen(out)
            if choice == "1":
                self.start_new_game(False)
            elif choice == "2":
                self.start_new_game(True)
            elif choice == "8":
                self.instructions()
            elif choice == "9":
                return
            else:
                out.write("Error! Please enter valid number\n\n")

    def load_game(self, color, silent):
        """Replay every screen from its recorded steps."""
        self._new_game(color, self.file_names, GhostLevel.NOVICE, True).load_game(silent)

    def level_choice(self):
        """Ask for the ghosts' level until a valid choice is made."""
        out = self.out
        while True:
            out.write(_LEVEL_TEXT)
            out.flush()
            choice = self.keyboard.getch()
            clear_screen(out)
            level = _LEVEL_KEYS.get(choice)
            if level is not None:
                return level
            out.write("Error! Please enter valid choice\n\n")

    def _read_word(self):
        out = self.out
        chars = []
        while True:
            try:
                ch = self.keyboard.getch()
            except EOFError:
                break
            if ch.isspace():
                if chars:
                    break
                continue
            out.write(ch)
            out.flush()
            chars.append(ch)
        out.write("\n")
        return "".join(chars)

    def start_new_game(self, color):
        """Choose a level and a screen (or all screens) and play."""
        self.game = None
        level = self.level_choice()
        out = self.out

        out.write("If you want to choose a specific screen please enter y for yes\n")
        out.flush()
        choice = self.keyboard.getch()
        clear_screen(out)

        if choice == "y":
            out.write("Please enter the screen name\n")
            out.flush()
            name = self._read_word()
            clear_screen(out)
            if self.find_screen(name):
                self._new_game(color, [name], level, False).game_loop()
            else:
                out.write("There is no such a screen!!\n\n\n")
        elif not self.file_names:
            out.write("There is no files!!\n")
        else:
            self._new_game(color, self.file_names, level, False).game_loop()

    def find_screen(self, name):
        """True if `name` is one of the screen files found."""
        return name in self.file_names


def main(argv=None):
    """Start the menu; `-load` replays recorded games, `-load -silent` checks them."""
    if argv is None:
        argv = sys.argv[1:]
    menu = GameMenu()
    try:
        menu.run(list(argv))
    except EOFError:
        pass
    return 0