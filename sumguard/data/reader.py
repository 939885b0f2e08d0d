from __future__ import annotations

import sys
from typing import Iterable, Iterator, Tuple

from ..core.errors import InputParseError


def parse_line(line: str, lineno: int) -> int:
    text = line.strip()
    try:
        return int(text)
    except ValueError:
        raise InputParseError(lineno, line.rstrip("\r\n")) from None


def iter_numbered(lines: Iterable[str], skip_blank: bool = False) -> Iterator[Tuple[int, int]]:
    """Lazily parse one integer per line, yielding ``(lineno, value)``.

    Line numbers are 0-based and count skipped blank lines, so they always
    point at the source line. Parsing stops at the first malformed line with
    InputParseError, so bad input never reaches the validator. Blank lines are
    malformed unless ``skip_blank`` is set.
    """
    for lineno, line in enumerate(lines):
        if skip_blank and not line.strip():
            continue
        yield lineno, parse_line(line, lineno)


def iter_numbers(lines: Iterable[str], skip_blank: bool = False) -> Iterator[int]:
    for _, value in iter_numbered(lines, skip_blank=skip_blank):
        yield value


def decode_lines(raw_lines: Iterable[bytes], encoding: str = "utf-8") -> Iterator[str]:
    # Decoding per line keeps the line number of an undecodable line exact.
    for lineno, raw in enumerate(raw_lines):
        try:
            yield raw.decode(encoding)
        except UnicodeDecodeError as exc:
            raise InputParseError(
                lineno,
                raw.rstrip(b"\r\n").decode(encoding, "backslashreplace"),
                f"not valid {encoding} ({exc.reason})",
            ) from None


def read_numbered(path: str, skip_blank: bool = False) -> Iterator[Tuple[int, int]]:
    """Yield ``(lineno, value)`` from a file, or from stdin when ``path`` is '-'."""
    if path == "-":
        yield from iter_numbered(decode_lines(sys.stdin.buffer), skip_blank=skip_blank)
        return
    with open(path, "rb") as fh:
        yield from iter_numbered(decode_lines(fh), skip_blank=skip_blank)


def read_numbers(path: str, skip_blank: bool = False) -> Iterator[int]:
    """Yield integers from a file, or from stdin when ``path`` is '-'."""
    for _, value in read_numbered(path, skip_blank=skip_blank):
        yield value
