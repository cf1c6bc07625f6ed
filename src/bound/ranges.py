"""Text ranges over (line, column) positions."""

from __future__ import annotations

from dataclasses import dataclass

Position = tuple[int, int]


@dataclass(frozen=True)
class TextRange:
    """An inclusive interval between two (line, column) positions."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            msg = f"Range start {self.start} is after its end {self.end}"
            raise ValueError(msg)

    @property
    def start(self) -> Position:
        return (self.start_line, self.start_column)

    @property
    def end(self) -> Position:
        return (self.end_line, self.end_column)

    def contains(self, line: int, column: int) -> bool:
        return self.start <= (line, column) <= self.end

    def is_before(self, line: int, column: int) -> bool:
        """Return True if the range ends strictly before the position."""
        return self.end < (line, column)

    def is_after(self, line: int, column: int) -> bool:
        """Return True if the range starts strictly after the position."""
        return self.start > (line, column)

    def to_list(self) -> list[int]:
        return [self.start_line, self.start_column, self.end_line, self.end_column]


__all__ = ["Position", "TextRange"]
