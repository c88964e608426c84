"""The message line, keyboard input and the status line."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, TextIO

from rogueclone.core import (
    CANCEL,
    MAX_ARMOR,
    MAX_GOLD,
    MAX_HP,
    MAX_STRENGTH,
    MAX_TITLE_LENGTH,
    MIN_ROW,
    Fighter,
    Stat,
)
from rogueclone.display import Screen

REDRAW_KEY = "\x12"
SAVE_SCREEN_KEY = "\x04"
DIRECTION_KEYS = "hjklyubn" + CANCEL
SCREEN_FILE = "rogue.screen"

MORE_MESSAGE = 11
DIRECTION_MESSAGE = 55
LABEL_MESSAGES = (56, 57, 58, 59, 60, 61)


@dataclass(frozen=True)
class _Layout:
    level: tuple
    gold: tuple
    hp: tuple
    strength: tuple
    armor: tuple
    exp: tuple
    hunger: int


_ENGLISH = _Layout((0, 7), (10, 16), (23, 27), (36, 41), (48, 53), (56, 61), 73)
_JAPANESE = _Layout((0, 4), (7, 13), (20, 26), (35, 41), (48, 54), (57, 63), 75)


class Messenger:
    """Shows messages on the top line and reads the player's keys."""

    def __init__(self, screen: Screen, messages: Sequence[str], keys: Iterable[str] = (),
                 *, bell: Optional[TextIO] = None, interactive: bool = True,
                 japanese: bool = False, on_interrupt: Optional[Callable[[], None]] = None,
                 screen_file: str | os.PathLike = SCREEN_FILE) -> None:
        self.screen = screen
        self.messages = messages
        self._keys = iter(keys)
        self._bell = bell
        self.interactive = interactive
        self.layout = _JAPANESE if japanese else _ENGLISH
        self.on_interrupt = on_interrupt
        self.screen_file = screen_file
        self.msg_line = ""
        self.msg_col = 0
        self.msg_cleared = True
        self.interrupted = False
        self.cant_int = False
        self.did_int = False
        self.add_strength = 0

    def _sound_bell(self) -> None:
        stream = self._bell if self._bell is not None else sys.stdout
        stream.write("\a")
        stream.flush()

    def _wait_for_ack(self) -> None:
        while self.rgetchar() != " ":
            pass

    def message(self, msg: str, interrupt: bool = False) -> None:
        """Show ``msg`` on the top line, first waiting out an unread message."""
        if not self.interactive:
            return
        if interrupt:
            self.interrupted = True
        self.cant_int = True
        if not self.msg_cleared:
            col = min(self.msg_col, self.screen.cols - 1)
            self.screen.mvaddstr(MIN_ROW - 1, col, self.messages[MORE_MESSAGE])
            self._wait_for_ack()
            self.check_message()
        self.msg_line = msg
        self.screen.mvaddstr(MIN_ROW - 1, 0, msg)
        self.screen.addch(" ")
        self.msg_cleared = False
        self.msg_col = len(msg)
        self.cant_int = False
        if self.did_int:
            self.did_int = False
            if self.on_interrupt is not None:
                self.on_interrupt()

    def remessage(self) -> None:
        """Show the last message again."""
        if self.msg_line:
            self.message(self.msg_line)

    def check_message(self) -> None:
        """Clear the top line if a message is on it."""
        if self.msg_cleared:
            return
        self.screen.move(MIN_ROW - 1, 0)
        self.screen.clrtoeol()
        self.msg_cleared = True

    def rgetchar(self) -> str:
        """The next key, handling redraw and screen-dump keys on the way.

        Raises EOFError when the key source runs dry.
        """
        for ch in self._keys:
            if ch == REDRAW_KEY:
                continue
            if ch == SAVE_SCREEN_KEY:
                self.save_screen()
                continue
            return ch
        raise EOFError("no more input")

    def get_direction(self) -> str:
        """Ask for a direction key; the escape key cancels."""
        self.message(self.messages[DIRECTION_MESSAGE])
        while (ch := self.rgetchar()) not in DIRECTION_KEYS:
            self._sound_bell()
        self.check_message()
        return ch

    def get_input_line(self, prompt: str, insert: str = "", if_cancelled: Optional[str] = None,
                       add_blank: bool = False, do_echo: bool = True) -> str:
        """Read a line after a prompt on the message line; '' when cancelled or empty."""
        text = self._do_input_line(True, 0, 0, prompt, insert, if_cancelled,
                                   add_blank, do_echo, None)
        return text or ""

    def input_line(self, row: int, col: int, insert: str = "",
                   first_ch: Optional[str] = None) -> Optional[str]:
        """Read a line at ``row``, ``col``; None when cancelled."""
        return self._do_input_line(False, row, col, "", insert, "", False, True, first_ch)

    def _clamp_col(self, col: int) -> int:
        return min(col, self.screen.cols - 1)

    def _do_input_line(self, is_msg, row, col, prompt, insert, if_cancelled,
                       add_blank, do_echo, first_ch) -> Optional[str]:
        screen = self.screen
        if is_msg:
            self.message(prompt)
            offset = len(prompt) + 1
        else:
            offset = 0
            screen.mvaddstr(row, col, prompt)
        buf: list = []
        if insert:
            screen.mvaddstr(row, self._clamp_col(col + offset), insert)
            buf = list(insert)
            screen.move(row, self._clamp_col(col + offset + len(buf)))
        pending = first_ch
        while True:
            if pending:
                ch, pending = pending, None
            else:
                ch = self.rgetchar()
            if ch in ("\r", "\n", CANCEL):
                break
            if ch == "\b":
                if buf:
                    buf.pop()
                    if do_echo:
                        pos = self._clamp_col(col + offset + len(buf))
                        screen.mvaddch(row, pos, " ")
                        screen.move(row, pos)
            elif ch >= " " and ch != "\x7f" and len(buf) < MAX_TITLE_LENGTH - 2:
                if ch != " " or buf:
                    buf.append(ch)
                    if do_echo:
                        screen.addch(ch)
        if is_msg:
            self.check_message()
        text = "".join(buf).rstrip(" ")
        if add_blank:
            text += " "
        if ch == CANCEL or not text or (len(text) == 1 and add_blank):
            if is_msg and if_cancelled:
                self.message(if_cancelled)
            return None if ch == CANCEL else ""
        return text

    def _field(self, row: int, col: int, text: str, width: int) -> None:
        self.screen.mvaddstr(row, col, text)
        for _ in range(len(text), width):
            self.screen.addch(" ")

    def print_stats(self, stat_mask: int, fighter: Fighter, cur_level: int,
                    armor_class: Callable, hunger_str: str = "") -> None:
        """Redraw the chosen fields of the bottom status line.

        ``armor_class`` is called with the worn armor to get the shown class.
        Over-limit gold, hit points, strength and armor enchantment are
        brought back to their limits on the way.
        """
        row = self.screen.lines - 1
        lay = self.layout
        label = bool(stat_mask & Stat.LABEL)
        level_lbl, gold_lbl, hp_lbl, str_lbl, arm_lbl, exp_lbl = (
            self.messages[n] for n in LABEL_MESSAGES)

        if stat_mask & Stat.LEVEL:
            if label:
                self.screen.mvaddstr(row, lay.level[0], level_lbl)
            self._field(row, lay.level[1], str(cur_level), 2)
        if stat_mask & Stat.GOLD:
            if label:
                fighter.gold = min(fighter.gold, MAX_GOLD)
                self.screen.mvaddstr(row, lay.gold[0], gold_lbl)
            self._field(row, lay.gold[1], str(fighter.gold), 6)
        if stat_mask & Stat.HP:
            if label:
                self.screen.mvaddstr(row, lay.hp[0], hp_lbl)
                if fighter.hp_max > MAX_HP:
                    fighter.hp_current -= fighter.hp_max - MAX_HP
                    fighter.hp_max = MAX_HP
            self._field(row, lay.hp[1], f"{fighter.hp_current}({fighter.hp_max})", 8)
        if stat_mask & Stat.STRENGTH:
            if label:
                self.screen.mvaddstr(row, lay.strength[0], str_lbl)
            if fighter.str_max > MAX_STRENGTH:
                fighter.str_current -= fighter.str_max - MAX_STRENGTH
                fighter.str_max = MAX_STRENGTH
            shown = fighter.str_current + self.add_strength
            self._field(row, lay.strength[1], f"{shown}({fighter.str_max})", 6)
        if stat_mask & Stat.ARMOR:
            if label:
                self.screen.mvaddstr(row, lay.armor[0], arm_lbl)
            if fighter.armor is not None and fighter.armor.d_enchant > MAX_ARMOR:
                fighter.armor.d_enchant = MAX_ARMOR
            self._field(row, lay.armor[1], str(armor_class(fighter.armor)), 2)
        if stat_mask & Stat.EXP:
            if label:
                self.screen.mvaddstr(row, lay.exp[0], exp_lbl)
            self._field(row, lay.exp[1], f"{fighter.exp}/{fighter.exp_points}", 11)
        if stat_mask & Stat.HUNGER:
            self.screen.mvaddstr(row, lay.hunger, hunger_str)
            self.screen.clrtoeol()

    def save_screen(self, path: str | os.PathLike | None = None) -> bool:
        """Dump the screen to a text file; rings the bell and returns False on failure."""
        target = self.screen_file if path is None else path
        try:
            with open(target, "w", encoding="utf-8") as handle:
                for row in range(self.screen.lines):
                    handle.write(self.screen.line(row).rstrip(" ") + "\n")
        except OSError:
            self._sound_bell()
            return False
        return True


def r_index(text: str, ch: str, last: bool = False) -> int:
    """Position of ``ch`` in ``text`` (the last one if ``last``), or -1."""
    return text.rfind(ch) if last else text.find(ch)


def is_digit(ch: str) -> bool:
    """True for the characters '0' to '9'."""
    return len(ch) == 1 and "0" <= ch <= "9"