"""Colour mapping, an in-memory character screen and text encoding helpers."""

from __future__ import annotations

from enum import IntEnum
from typing import Mapping, Optional, Union

from rogueclone.core import ROGUE_COLUMNS, ROGUE_LINES

DEFAULT_COLOR_STR = "cbmyg"
WALL_CHARS = "-|#+"
FLOOR_CHARS = "."
MONSTER_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
OBJECT_CHARS = "%!?/=)]^*:,"

_TABLE_SIZE = 256
_UTF8_LIMITS = (0xBF, 0xDF, 0xEF, 0xF7, 0xFB, 0xFF)


class ColorPair(IntEnum):
    """Colour pairs: a foreground on black, or black on a background."""

    DEFAULT = 0
    WHITE = 1
    RED = 2
    GREEN = 3
    YELLOW = 4
    BLUE = 5
    MAGENTA = 6
    CYAN = 7
    WHITE_REVERSE = 8
    RED_REVERSE = 9
    GREEN_REVERSE = 10
    YELLOW_REVERSE = 11
    BLUE_REVERSE = 12
    MAGENTA_REVERSE = 13
    CYAN_REVERSE = 14


_COLOR_LETTERS = {
    "w": ColorPair.WHITE,
    "r": ColorPair.RED,
    "g": ColorPair.GREEN,
    "y": ColorPair.YELLOW,
    "b": ColorPair.BLUE,
    "m": ColorPair.MAGENTA,
    "c": ColorPair.CYAN,
    "W": ColorPair.WHITE_REVERSE,
    "R": ColorPair.RED_REVERSE,
    "G": ColorPair.GREEN_REVERSE,
    "Y": ColorPair.YELLOW_REVERSE,
    "B": ColorPair.BLUE_REVERSE,
    "M": ColorPair.MAGENTA_REVERSE,
    "C": ColorPair.CYAN_REVERSE,
}

CharLike = Union[str, int]


def _code(ch: CharLike) -> int:
    return ord(ch) if isinstance(ch, str) else int(ch)


class ColorMap:
    """Which colour pair each map character is drawn with."""

    def __init__(self) -> None:
        self._pairs = [ColorPair.DEFAULT] * _TABLE_SIZE

    def configure(self, color_str: str = DEFAULT_COLOR_STR, fchar: CharLike = "@",
                  use_color: bool = True) -> None:
        """Assign colours from a map string of up to five colour letters.

        The letters colour, in order: walls and doors, floor, monsters,
        objects and the player.  Lower case letters are colours on black,
        upper case ones black on that colour.
        """
        slots = [ColorPair.DEFAULT] * 5
        for index, letter in enumerate(color_str[:5]):
            slots[index] = _COLOR_LETTERS.get(letter, ColorPair.DEFAULT)
        groups = (WALL_CHARS, FLOOR_CHARS, MONSTER_CHARS, OBJECT_CHARS)
        for chars, pair in zip(groups, slots):
            for ch in chars:
                self.set_pair(ch, pair)
        self.set_pair(fchar, slots[4])
        if not use_color:
            for code in range(128):
                self.set_pair(code, ColorPair.DEFAULT)

    def pair_for(self, ch: CharLike) -> ColorPair:
        """The colour pair of ``ch``; the default pair for unknown characters."""
        code = _code(ch)
        if 0 <= code < _TABLE_SIZE:
            return self._pairs[code]
        return ColorPair.DEFAULT

    def set_pair(self, ch: CharLike, number: int) -> None:
        """Draw ``ch`` with colour pair ``number`` from now on."""
        code = _code(ch)
        if not 0 <= code < _TABLE_SIZE:
            raise ValueError(f"character code {code} has no colour slot")
        self._pairs[code] = ColorPair(number)


class Screen:
    """A character grid with a cursor, holding a colour pair per cell."""

    def __init__(self, lines: int = ROGUE_LINES, cols: int = ROGUE_COLUMNS,
                 colors: Optional[ColorMap] = None,
                 highlights: Optional[Mapping[str, int]] = None) -> None:
        self.lines = lines
        self.cols = cols
        self.colors = colors if colors is not None else ColorMap()
        self.highlights = {text: ColorPair(pair) for text, pair in (highlights or {}).items()}
        self.reverse = False
        self.attr = ColorPair.DEFAULT
        self.row = 0
        self.col = 0
        self.cells: list = []
        self.pairs: list = []
        self.clear()

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.lines and 0 <= col < self.cols):
            raise ValueError(f"position ({row}, {col}) is off the screen")

    def _put(self, ch: str) -> None:
        self.cells[self.row][self.col] = ch
        self.pairs[self.row][self.col] = self.attr
        if self.col + 1 < self.cols:
            self.col += 1
        elif self.row + 1 < self.lines:
            self.row += 1
            self.col = 0

    def move(self, row: int, col: int) -> None:
        """Put the cursor at ``row``, ``col``."""
        self._check(row, col)
        self.row, self.col = row, col

    def addch(self, ch: str) -> None:
        """Write one character at the cursor in its mapped colour."""
        self.attr = self.colors.pair_for(ch)
        self._put(ch)

    def mvaddch(self, row: int, col: int, ch: str) -> None:
        """Move, then write one character."""
        self.move(row, col)
        self.addch(ch)

    def addstr(self, text: str) -> None:
        """Write text at the cursor in the default colour."""
        self.attr = ColorPair.DEFAULT
        for ch in text:
            self._put(ch)

    def mvaddstr(self, row: int, col: int, text: str) -> None:
        """Move, then write text; reverse video and highlighted texts get colours."""
        self.move(row, col)
        if self.reverse:
            self.attr = ColorPair.CYAN
        else:
            self.attr = self.highlights.get(text, ColorPair.DEFAULT)
        for ch in text:
            self._put(ch)

    def inch(self, row: int, col: int) -> str:
        """The character shown at ``row``, ``col``."""
        self._check(row, col)
        return self.cells[row][col]

    def clrtoeol(self) -> None:
        """Blank the cursor's line from the cursor to its end."""
        for col in range(self.col, self.cols):
            self.cells[self.row][col] = " "
            self.pairs[self.row][col] = ColorPair.DEFAULT

    def clear(self) -> None:
        """Blank the whole screen and home the cursor."""
        self.cells = [[" "] * self.cols for _ in range(self.lines)]
        self.pairs = [[ColorPair.DEFAULT] * self.cols for _ in range(self.lines)]
        self.row = self.col = 0

    def line(self, row: int) -> str:
        """The full text of line ``row``."""
        self._check(row, 0)
        return "".join(self.cells[row])


def utf8_len(byte: int) -> int:
    """The length of a UTF-8 sequence that starts with ``byte``.

    Continuation bytes count as 1, and 0xfe and 0xff as 6.
    """
    for length, limit in enumerate(_UTF8_LIMITS, start=1):
        if byte <= limit:
            return length
    return len(_UTF8_LIMITS)


def eucjp_to_utf8(data: bytes) -> str:
    """Decode EUC-JP bytes; invalid input raises ValueError."""
    return data.decode("euc-jp")


def utf8_to_eucjp(text: str) -> bytes:
    """Encode text as EUC-JP, replacing what EUC-JP cannot hold with '?'."""
    return text.encode("euc-jp", errors="replace")