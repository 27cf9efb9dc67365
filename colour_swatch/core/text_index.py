"""Offset to line/character conversion for scanned text."""

from bisect import bisect_right

from colour_swatch.core.types import Position, Span


class TextIndex:
    """Line-start table for one text snapshot.

    Lines are split on \\n only; a \\r before it stays part of the line, which
    matches how editors count characters on CRLF files.
    """

    def __init__(self, text: str):
        self.length = len(text)
        self._starts = [0]
        start = text.find('\n')
        while start != -1:
            self._starts.append(start + 1)
            start = text.find('\n', start + 1)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def position_at(self, offset: int) -> Position:
        offset = min(max(0, offset), self.length)
        line = bisect_right(self._starts, offset) - 1
        return Position(line, offset - self._starts[line])

    def range_of(self, span: Span) -> tuple[Position, Position]:
        return self.position_at(span.offset), self.position_at(span.end)
