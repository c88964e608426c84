"""Operating-system services: user name, files, time and seeding."""

from __future__ import annotations

import os
import time
from typing import Mapping, Optional

from rogueclone.core import RogueTime

DEFAULT_LOGIN = "A FIGHTER"


def login_name(environ: Optional[Mapping[str, str]] = None) -> str:
    """The player's name: $FIGHTER, the login name, $USER, or a default."""
    env = os.environ if environ is None else environ
    name = env.get("FIGHTER")
    if name is not None:
        return name
    try:
        return os.getlogin()
    except OSError:
        pass
    name = env.get("USER")
    if name is not None:
        return name
    return DEFAULT_LOGIN


def home_directory(environ: Optional[Mapping[str, str]] = None) -> str:
    """$HOME, or the current directory when it is unset."""
    env = os.environ if environ is None else environ
    home = env.get("HOME")
    if home is not None:
        return home
    return os.getcwd()


def file_id(path) -> int:
    """The inode number of ``path``, or -1 when it cannot be examined."""
    try:
        return os.stat(path).st_ino
    except OSError:
        return -1


def link_count(path) -> int:
    """The number of hard links to ``path``."""
    return os.stat(path).st_nlink


def _to_rogue_time(t: time.struct_time) -> RogueTime:
    return RogueTime(t.tm_year, t.tm_mon, t.tm_mday, t.tm_hour, t.tm_min, t.tm_sec)


def current_time() -> RogueTime:
    """The local time now."""
    return _to_rogue_time(time.localtime())


def file_mtime(path) -> RogueTime:
    """The local time at which ``path`` was last modified."""
    return _to_rogue_time(time.localtime(os.stat(path).st_mtime))


def delete_file(path) -> bool:
    """Remove ``path``; True when it was removed."""
    try:
        os.unlink(path)
    except OSError:
        return False
    return True


def make_seed() -> int:
    """A seed for the random number source, taken from the clock."""
    return int(time.time())