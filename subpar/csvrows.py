"""Reading of simple comma-separated manifest files.

These files change very rarely; any deviation from the expected layout is
an error that should be investigated, so every problem raises CsvError
carrying as much context as possible.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from os import PathLike
from typing import TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")


class CsvError(ValueError):
    """A manifest file did not have the expected shape."""


def _parse_u8(text: str) -> int | None:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not all("0" <= c <= "9" for c in digits):
        return None
    value = int(digits)
    return value if value <= 255 else None


class CsvRow:
    """Cursor over the cells of one CSV line."""

    def __init__(self, line: int, data: str) -> None:
        self.line = line
        self.data = data
        self._cells = iter(data.split(","))

    def next(self) -> str:
        """Return the next cell."""
        try:
            return next(self._cells)
        except StopIteration:
            raise CsvError(
                f"Failed to parse line {self.line} of CSV: Insufficient cells\n{self.data}"
            ) from None

    def next_n(self, n: int) -> list[str]:
        """Return the next n cells."""
        return [self.next() for _ in range(n)]

    def next_as(self, convert: Callable[[str], T]) -> T:
        """Return the next cell converted by convert."""
        cell = self.next()
        try:
            return convert(cell)
        except (ValueError, TypeError) as exc:
            name = getattr(convert, "__name__", repr(convert))
            raise CsvError(
                f"Failed to parse line {self.line} of CSV: Wrong data type ({name}): "
                f"{exc!r}\n{self.data}"
            ) from exc

    def next_time(self) -> tuple[int, int, int]:
        """Return the next cell parsed as an hh:mm:ss time."""
        text = self.next()
        parts = text.split(":")
        if len(parts) != 3:
            raise CsvError(f"Malformed time '{text}' not hh:mm:ss")
        values = [_parse_u8(part) for part in parts]
        if any(v is None for v in values):
            raise CsvError(f"Unknown time: {parts!r}")
        hours, minutes, seconds = values
        return hours, minutes, seconds

    def finish(self) -> None:
        """Check that every cell of the line has been consumed."""
        remain = sum(1 for _ in self._cells)
        if remain:
            raise CsvError(f"Found {remain} unexpected fields in CSV line\n{self.data}")


def read_rows(
    path: str | PathLike[str], header: str, parse: Callable[[CsvRow], T]
) -> Iterator[T]:
    """Yield parse(row) for each data line of the file after checking its header."""
    with open(path, encoding="utf-8", newline="") as fh:
        first = fh.readline()
        if first.strip() != header:
            raise CsvError(
                f"Unexpected file header in {path}: {first.strip()!r} != {header!r}"
            )
        for number, raw in enumerate(fh, start=1):
            buf = raw.strip()
            log.debug('Parsing line %d buffer "%s"', number, buf)
            yield parse(CsvRow(number, buf))