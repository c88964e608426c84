import pytest

from rogueclone.msgfile import (
    MESSAGE_COUNT,
    MessageFileError,
    parse_messages,
    read_messages,
)


def test_parse_simple_line():
    msgs = parse_messages(['10 "hello there"\n'])
    assert msgs[10] == "hello there"
    assert len(msgs) == MESSAGE_COUNT


def test_unlisted_entries_are_empty():
    msgs = parse_messages(['3 "x"'])
    assert msgs[4] == ""
    assert msgs[0] == ""


def test_out_of_range_numbers_ignored():
    msgs = parse_messages(['0 "zero"', '500 "big"', '-2 "neg"'])
    assert all(m == "" for m in msgs)


def test_lines_without_number_ignored():
    msgs = parse_messages(["# comment", "", 'abc "text"'])
    assert all(m == "" for m in msgs)


def test_missing_opening_quote():
    with pytest.raises(MessageFileError):
        parse_messages(["5 no quotes here"])


def test_missing_closing_quote():
    with pytest.raises(MessageFileError):
        parse_messages(['5 "unterminated'])


def test_text_truncated():
    long_text = "a" * 120
    msgs = parse_messages([f'7 "{long_text}"'])
    assert msgs[7] == long_text[:79]


def test_later_line_overrides():
    msgs = parse_messages(['8 "first"', '8 "second"'])
    assert msgs[8] == "second"


def test_leading_whitespace_number():
    msgs = parse_messages(['   12 "spaced"'])
    assert msgs[12] == "spaced"


def test_read_utf8_file(tmp_path):
    path = tmp_path / "mesg"
    path.write_text('1 "alpha"\n2 "beta"\n', encoding="utf-8")
    msgs = read_messages(path)
    assert msgs[1] == "alpha"
    assert msgs[2] == "beta"


def test_read_eucjp_file(tmp_path):
    path = tmp_path / "mesg_j"
    path.write_bytes('11 "ようこそ"\n'.encode("euc-jp"))
    assert read_messages(path)[11] == "ようこそ"


def test_read_missing_file(tmp_path):
    with pytest.raises(MessageFileError):
        read_messages(tmp_path / "absent")


def test_read_bad_format(tmp_path):
    path = tmp_path / "bad"
    path.write_text('4 "broken\n', encoding="utf-8")
    with pytest.raises(MessageFileError):
        read_messages(path)