"""Reading of screen files into a rectangular character layout."""

from __future__ import annotations


def _strip_eol(raw):
    if raw.endswith("\n"):
        raw = raw[:-1]
    if raw.endswith("\r"):
        raw = raw[:-1]
    return raw


class BoardShapes:
    """The character rows of one screen, with the score/lives text area expanded."""

    HEIGHT = 3
    WIDTH = 20
    ROWS = 25
    COLS = 80

    def __init__(self, lines):
        self.rows = 0
        self.cols = 0
        self.board_shape: list[str] = []

        source = iter(lines)
        max_cols = 0
        first_line = True

        for raw in source:
            if self.rows > self.ROWS:
                break
            line = _strip_eol(raw)

            if first_line:
                max_cols = min(len(line), self.COLS)
                first_line = False

            self.cols = min(len(line), self.COLS)
            row = []
            is_text = False
            for ch in line[: self.cols]:
                if ch == "&":
                    self.handle_text(source, line, max_cols)
                    is_text = True
                    break
                row.append(ch)

            if not is_text:
                if self.cols < max_cols:
                    row.append(" " * (max_cols - self.cols))
                self.board_shape.append("".join(row))
                self.rows += 1

        self.cols = max_cols

    @classmethod
    def from_file(cls, file_name):
        """Read a screen file."""
        with open(file_name, encoding="latin-1") as handle:
            return cls(handle)

    def handle_text(self, lines, line, max_cols):
        """Reserve a HEIGHT x WIDTH text block starting at the '&' of `line`."""
        source = iter(lines)
        tmp_col = -1
        first_line = False

        for i in range(self.HEIGHT):
            row = []
            j = 0
            while j < self.cols:
                ch = line[j]
                if ch == "&":
                    row.append(ch)
                    tmp_col = j
                    first_line = True
                if j == tmp_col:
                    row.append("%" * (self.WIDTH - 1 if first_line else self.WIDTH))
                    first_line = False
                    j += self.WIDTH
                    if j < self.cols:
                        ch = line[j]
                if j < self.cols:
                    row.append(ch)
                j += 1

            if j > self.cols:
                j -= 1
            if j < max_cols:
                row.append(" " * (max_cols - j))
            self.board_shape.append("".join(row))

            if i < self.HEIGHT - 1:
                raw = next(source, None)
                if raw is None:
                    line = line[:tmp_col] + " " + line[tmp_col + 1 :]
                else:
                    line = _strip_eol(raw)
                    self.cols = min(len(line), self.COLS)

        self.rows += self.HEIGHT