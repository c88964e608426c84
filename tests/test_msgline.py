import io

import pytest

from rogueclone.core import (
    MAX_GOLD,
    MAX_HP,
    MAX_ARMOR,
    MAX_TITLE_LENGTH,
    ROGUE_LINES,
    Fighter,
    GameObject,
    Stat,
)
from rogueclone.display import Screen
from rogueclone.msgline import Messenger, is_digit, r_index


def make_messages():
    messages = [""] * 507
    messages[11] = "--More--"
    messages[55] = "Direction? "
    messages[56] = "Level: "
    messages[57] = "Gold: "
    messages[58] = "Hp: "
    messages[59] = "Str: "
    messages[60] = "Arm: "
    messages[61] = "Exp: "
    return messages


def make(keys="", **kwargs):
    screen = Screen()
    bell = io.StringIO()
    messenger = Messenger(screen, make_messages(), keys, bell=bell, **kwargs)
    return messenger, screen, bell


def test_message_shows_on_top_line():
    messenger, screen, _ = make()
    messenger.message("You feel hungry")
    assert screen.line(0).startswith("You feel hungry")
    assert messenger.msg_line == "You feel hungry"
    assert messenger.msg_col == len("You feel hungry")
    assert messenger.msg_cleared is False


def test_second_message_waits_for_space():
    messenger, screen, _ = make("x ")
    messenger.message("first")
    messenger.message("second")
    assert screen.line(0).rstrip() == "second"
    with pytest.raises(EOFError):
        messenger.rgetchar()


def test_non_interactive_shows_nothing():
    messenger, screen, _ = make(interactive=False)
    messenger.message("hidden")
    assert screen.line(0).strip() == ""


def test_interrupt_flag():
    messenger, _, _ = make()
    messenger.message("ouch", True)
    assert messenger.interrupted is True


def test_check_message_and_remessage():
    messenger, screen, _ = make()
    messenger.message("again")
    messenger.check_message()
    assert screen.line(0).strip() == ""
    assert messenger.msg_cleared is True
    messenger.remessage()
    assert screen.line(0).rstrip() == "again"


def test_rgetchar_skips_redraw_and_saves_screen(tmp_path):
    target = tmp_path / "dump.txt"
    screen = Screen()
    messenger = Messenger(screen, make_messages(), "\x12\x04k", screen_file=target)
    screen.mvaddstr(2, 0, "wall")
    assert messenger.rgetchar() == "k"
    assert target.read_text(encoding="utf-8").splitlines()[2] == "wall"


def test_rgetchar_exhausted():
    messenger, _, _ = make("")
    with pytest.raises(EOFError):
        messenger.rgetchar()


def test_get_direction_rings_on_bad_key():
    messenger, screen, bell = make("xh")
    assert messenger.get_direction() == "h"
    assert bell.getvalue() == "\a"
    assert screen.line(0).strip() == ""


@pytest.mark.parametrize(
    "keys,expected",
    [("abc\r", "abc"), ("  ab\r", "ab"), ("abd\bc\n", "abc"), ("ab  \r", "ab")],
)
def test_get_input_line(keys, expected):
    messenger, _, _ = make(keys)
    assert messenger.get_input_line("Call it:", "", None, False, True) == expected


def test_get_input_line_add_blank_and_insert():
    messenger, _, _ = make("abc\r")
    assert messenger.get_input_line("Name:", "", None, True, True) == "abc "
    messenger, _, _ = make("z\r")
    assert messenger.get_input_line("Name:", "xy", None, False, True) == "xyz"


def test_get_input_line_cancel_shows_message():
    messenger, screen, _ = make("ab\033")
    assert messenger.get_input_line("Name:", "", "never mind", False, True) == ""
    assert screen.line(0).rstrip() == "never mind"


def test_get_input_line_length_limit():
    messenger, _, _ = make("a" * 40 + "\r")
    text = messenger.get_input_line("Name:", "", None, False, False)
    assert len(text) == MAX_TITLE_LENGTH - 2


def test_input_line_cancel_and_first_char():
    messenger, screen, _ = make("\033")
    assert messenger.input_line(5, 10, "", None) is None
    messenger, screen, _ = make("ello\r")
    assert messenger.input_line(5, 10, "", "h") == "hello"
    assert screen.line(5)[10:15] == "hello"


def test_print_stats_layout_and_caps():
    messenger, screen, _ = make()
    armor = GameObject(d_enchant=MAX_ARMOR + 5)
    fighter = Fighter(armor=armor, gold=MAX_GOLD * 2, hp_current=850, hp_max=900,
                      exp=3, exp_points=45)
    messenger.print_stats(Stat.ALL, fighter, 5, lambda a: a.d_enchant, "Hungry")
    line = screen.line(ROGUE_LINES - 1)
    assert line.startswith("Level: ")
    assert line[7:].startswith("5")
    assert fighter.gold == MAX_GOLD
    assert fighter.hp_max == MAX_HP
    assert fighter.hp_max - fighter.hp_current == 50
    assert armor.d_enchant == MAX_ARMOR
    assert f"{fighter.exp}/{fighter.exp_points}" in line
    assert str(MAX_GOLD) in line
    assert line.rstrip().endswith("Hungry")


def test_print_stats_adds_strength_bonus():
    messenger, screen, _ = make()
    messenger.add_strength = 2
    fighter = Fighter(str_current=12, str_max=16)
    messenger.print_stats(Stat.STRENGTH, fighter, 1, lambda a: 0)
    assert "14(16)" in screen.line(ROGUE_LINES - 1)


def test_save_screen_strips_lines(tmp_path):
    messenger, screen, _ = make()
    screen.mvaddstr(0, 3, "top")
    target = tmp_path / "screen.txt"
    assert messenger.save_screen(target) is True
    lines = target.read_text(encoding="utf-8").splitlines()
    assert len(lines) == ROGUE_LINES
    assert lines[0] == "   top"
    assert lines[1] == ""


def test_save_screen_failure_rings(tmp_path):
    messenger, _, bell = make()
    assert messenger.save_screen(tmp_path) is False
    assert bell.getvalue() == "\a"


def test_r_index():
    assert r_index("?!/=*\033", "/", False) == 2
    assert r_index("abcabc", "b", True) == 4
    assert r_index("abc", "z", False) == -1


def test_is_digit():
    assert is_digit("0") and is_digit("9")
    assert not is_digit("a")
    assert not is_digit("12")