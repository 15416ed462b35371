"""Human-readable size units."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class ByteSize:
    """A byte count shown with the largest fitting binary suffix."""

    value: int

    SIZE: ClassVar[int] = 1024
    DELIM: ClassVar[str] = ""
    SUFFIXES: ClassVar[tuple[str, ...]] = ("b", "kb", "mb")

    def __str__(self) -> str:
        rem, level = self.value, 0
        while rem >= self.SIZE and level + 1 < len(self.SUFFIXES):
            rem //= self.SIZE
            level += 1
        return f"{rem}{self.DELIM}{self.SUFFIXES[level]}"