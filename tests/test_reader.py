from __future__ import annotations

from pathlib import Path

import pytest

from sumguard.core.errors import InputParseError
from sumguard.data.reader import iter_numbered, iter_numbers, parse_line, read_numbered, read_numbers


def test_parse_line_handles_whitespace_and_sign() -> None:
    assert parse_line("  42\n", 0) == 42
    assert parse_line("-17\r\n", 3) == -17
    assert parse_line("+5", 1) == 5


def test_parse_line_keeps_arbitrary_precision() -> None:
    big = "1" * 60
    assert parse_line(big, 0) == int(big)


def test_parse_line_rejects_garbage() -> None:
    with pytest.raises(InputParseError) as info:
        parse_line("12.5\n", 9)
    assert info.value.lineno == 9
    assert info.value.line == "12.5"
    assert isinstance(info.value, ValueError)


def test_iter_numbers_is_lazy_and_stops_at_bad_line() -> None:
    numbers = iter_numbers(["1", "2", "oops", "4"])
    assert next(numbers) == 1
    assert next(numbers) == 2
    with pytest.raises(InputParseError) as info:
        next(numbers)
    assert info.value.lineno == 2


def test_blank_lines() -> None:
    with pytest.raises(InputParseError):
        list(iter_numbers(["1", "", "2"]))
    assert list(iter_numbers(["1", "", "  ", "2"], skip_blank=True)) == [1, 2]


def test_read_numbers_from_file(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("35\n20\n15\n25\n47\n", encoding="utf-8")
    assert list(read_numbers(str(path))) == [35, 20, 15, 25, 47]


def test_read_numbers_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        list(read_numbers(str(tmp_path / "missing.txt")))


def test_numbered_lines_count_skipped_blanks() -> None:
    lines = ["1\n", "2\n", "\n", "3\n", "100\n"]
    assert list(iter_numbered(lines, skip_blank=True)) == [(0, 1), (1, 2), (3, 3), (4, 100)]


def test_read_numbered_from_file(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_bytes(b"5\r\n\r\n-6\r\n")
    assert list(read_numbered(str(path), skip_blank=True)) == [(0, 5), (2, -6)]


def test_undecodable_line_is_a_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_bytes(b"1\n2\n\xff\xfe\n4\n")
    numbers = read_numbers(str(path))
    assert next(numbers) == 1
    assert next(numbers) == 2
    with pytest.raises(InputParseError) as info:
        next(numbers)
    assert info.value.lineno == 2
    assert "utf-8" in info.value.reason
