"""Command-line arguments and ROGUEOPT environment options."""

from __future__ import annotations

import getopt
import os
import string
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from rogueclone.display import DEFAULT_COLOR_STR

USAGE = "usage: rogue message_file [options...] [save_file]"
MAX_VALUE_LENGTH = 30
ENV_SUFFIXES = "S123456789"

_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class UsageError(Exception):
    """The command line is not of the accepted form."""

    def __init__(self, message: str = USAGE) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class _OptionSpec:
    name: str
    flag: Optional[str]
    text: Optional[str]
    add_blank: bool
    no_colon: bool
    description: str


OPTIONS = (
    _OptionSpec("askquit", "ask_quit", None, False, False,
                "Ask whether quit or not on quit signal"),
    _OptionSpec("jump", "jump", None, False, False, "Show position only at end of run"),
    _OptionSpec("passgo", "pass_go", None, False, False, "Follow turnings in passageways"),
    _OptionSpec("tombstone", "show_skull", None, False, False,
                "Print out tombstone and score when killed"),
    _OptionSpec("color", "use_color", None, False, False, "Show characters in map with color"),
    _OptionSpec("fruit", None, "fruit", True, False, "Name of the fruit"),
    _OptionSpec("file", None, "save_file", False, False, "Save filename"),
    _OptionSpec("name", None, "nick_name", False, True, "Your nickname"),
    _OptionSpec("directory", None, "game_dir", False, False, "Game directory name"),
    _OptionSpec("map", None, "color_str", False, False, "Color mapping for characters"),
)


def get_value(text: str, add_blank: bool = False, no_colon: bool = False) -> str:
    """The option value at the start of ``text``, up to a comma.

    At most 30 one-byte characters are taken; multibyte characters are
    passed over without counting.  With ``no_colon`` colons become
    semicolons, and with ``add_blank`` a blank is appended.
    """
    out = []
    count = 0
    for ch in text:
        if ch == ",":
            break
        if ord(ch) >= 0x80:
            out.append(ch)
            continue
        if ch == ":" and no_colon:
            ch = ";"
        out.append(ch)
        count += 1
        if count >= MAX_VALUE_LENGTH:
            break
    value = "".join(out)
    return value + " " if add_blank else value


@dataclass
class GameOptions:
    """Settings the player can change through ROGUEOPT variables."""

    ask_quit: bool = True
    jump: bool = False
    pass_go: bool = True
    show_skull: bool = True
    use_color: bool = True
    fruit: str = "slime-mold "
    save_file: str = ""
    nick_name: str = ""
    game_dir: str = ""
    color_str: str = DEFAULT_COLOR_STR
    japanese: bool = False

    def apply(self, env: str) -> "GameOptions":
        """Read options from a comma-separated string.

        An option is named by any prefix of its name, in any case; a leading
        ``no`` turns a switch off, and ``=`` or ``:`` gives a text option its
        value.  Afterwards the game directory, if set, becomes current.
        """
        if not env:
            return self
        pos = 0
        end = len(env)
        while True:
            while pos < end and env[pos] in " ,":
                pos += 1
            if pos >= end:
                break
            negate = env.startswith(("no", "NO"), pos)
            if negate:
                pos += 2
            start = pos
            while pos < end and env[pos] not in ",=:":
                pos += 1
            name = env[start:pos].translate(_TO_LOWER)
            has_value = pos < end and env[pos] in "=:"
            for spec in OPTIONS:
                if not spec.name.startswith(name):
                    continue
                if spec.flag:
                    setattr(self, spec.flag, not negate)
                if spec.text and has_value:
                    add_blank = spec.add_blank and not self.japanese
                    setattr(self, spec.text,
                            get_value(env[pos + 1:], add_blank, spec.no_colon))
            while pos < end and env[pos] != ",":
                pos += 1
        if self.game_dir:
            os.chdir(self.game_dir)
        return self


def collect_env_options(environ: Optional[Mapping[str, str]] = None) -> str:
    """Join ROGUEOPTS and ROGUEOPT1 to ROGUEOPT9, each preceded by a comma."""
    env = os.environ if environ is None else environ
    parts = []
    for suffix in ENV_SUFFIXES:
        value = env.get(f"ROGUEOPT{suffix}")
        if value is not None:
            parts.append("," + value)
    return "".join(parts)


@dataclass
class Arguments:
    """What the command line asks for."""

    message_file: str
    rest_file: Optional[str] = None
    score_only: bool = False
    do_restore: bool = False


def parse_arguments(argv: Sequence[str]) -> Arguments:
    """Parse ``[-s] [-r] message_file [save_file]``; raises UsageError."""
    try:
        opts, rest = getopt.gnu_getopt(list(argv), "sr")
    except getopt.GetoptError as exc:
        raise UsageError() from exc
    score_only = do_restore = False
    for flag, _ in opts:
        if flag == "-s":
            score_only = True
        elif flag == "-r":
            do_restore = True
    if not rest or len(rest) >= 3:
        raise UsageError()
    return Arguments(
        message_file=rest[0],
        rest_file=rest[1] if len(rest) == 2 else None,
        score_only=score_only,
        do_restore=do_restore,
    )