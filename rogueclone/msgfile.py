"""Loading of the numbered message file that holds the game's texts."""

from __future__ import annotations

import os
import re
from typing import Iterable

MESSAGE_COUNT = 507
MAX_MESSAGE_NUMBER = 500
MAX_MESSAGE_LENGTH = 79

_LEADING_NUMBER = re.compile(r"\s*([+-]?\d+)")


class MessageFileError(Exception):
    """The message file cannot be read or is malformed."""


def _leading_int(line: str) -> int:
    match = _LEADING_NUMBER.match(line)
    return int(match.group(1)) if match else 0


def parse_messages(lines: Iterable[str]) -> list:
    """Build the message table from lines of the form ``N "text"``.

    Lines that do not start with a number from 1 to 499 are ignored.
    A numbered line without a pair of double quotes is an error.
    """
    messages = [""] * MESSAGE_COUNT
    for line in lines:
        number = _leading_int(line)
        if not 0 < number < MAX_MESSAGE_NUMBER:
            continue
        start = line.find('"')
        if start < 0:
            raise MessageFileError(f"Illegal format in line {line!r}")
        end = line.find('"', start + 1)
        if end < 0:
            raise MessageFileError(f"Illegal format in line {line!r}")
        messages[number] = line[start + 1:end][:MAX_MESSAGE_LENGTH]
    return messages


def _decode(data: bytes) -> str:
    for encoding in ("utf-8", "euc-jp"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


def read_messages(path: str | os.PathLike) -> list:
    """Read the message table from the file at ``path``."""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise MessageFileError(f"Cannot open message file '{os.fspath(path)}'") from exc
    try:
        return parse_messages(_decode(data).splitlines())
    except MessageFileError as exc:
        raise MessageFileError(f"Illegal format '{os.fspath(path)}'") from exc