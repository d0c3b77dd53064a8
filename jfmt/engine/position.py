"""
Source text and position index.

Tree-sitter reports byte offsets while diagnostics are shown as 1-based
line/column pairs. SourceText keeps the UTF-8 bytes of one file together
with the offset at which every line starts, so both directions of the
conversion are a binary search plus a scan within a single line.

Columns are counted in Unicode code points from the start of the line.
"""

from bisect import bisect_right
from typing import Iterator, List, Optional, Tuple, Union

from .errors import OutOfRange
from .types import Position, Span


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


class SourceText:
    """Immutable UTF-8 text of one file plus its line-start index."""

    __slots__ = ('_data', '_line_starts')

    def __init__(self, data: Union[bytes, bytearray]):
        self._data = bytes(data)
        starts: List[int] = [0]
        pos = self._data.find(b'\n')
        while pos != -1:
            starts.append(pos + 1)
            pos = self._data.find(b'\n', pos + 1)
        self._line_starts = tuple(starts)

    @classmethod
    def from_str(cls, text: str) -> "SourceText":
        return cls(text.encode('utf-8'))

    @classmethod
    def coerce(cls, value: Union["SourceText", str, bytes]) -> "SourceText":
        """Accept a SourceText, str or bytes and return a SourceText."""
        if isinstance(value, SourceText):
            return value
        if isinstance(value, str):
            return cls.from_str(value)
        return cls(value)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def line_starts(self) -> Tuple[int, ...]:
        return self._line_starts

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, SourceText):
            return self._data == other._data
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"SourceText({len(self._data)} bytes, {self.line_count} lines)"

    def decode(self) -> str:
        return self._data.decode('utf-8', errors='replace')

    # === Offset <-> position ===

    def _check_offset(self, offset: int) -> None:
        if offset < 0 or offset > len(self._data):
            raise OutOfRange(f"offset {offset} outside text of {len(self._data)} bytes")

    def _check_span(self, span: Span) -> None:
        if span.end > len(self._data):
            raise OutOfRange(f"span [{span.start}, {span.end}) outside text of {len(self._data)} bytes")

    def line_of(self, offset: int) -> int:
        """Return the 1-based line containing offset."""
        self._check_offset(offset)
        return bisect_right(self._line_starts, offset)

    def offset_to_position(self, offset: int) -> Position:
        """Convert a byte offset to a 1-based (line, column) pair.

        The offset must fall on a character boundary; an offset inside a
        multi-byte UTF-8 sequence raises OutOfRange.
        """
        line = self.line_of(offset)
        if offset < len(self._data) and _is_continuation(self._data[offset]):
            raise OutOfRange(f"offset {offset} is inside a multi-byte character")
        line_start = self._line_starts[line - 1]
        column = 1 + sum(1 for b in self._data[line_start:offset] if not _is_continuation(b))
        return (line, column)

    def position_to_offset(self, line: int, column: int) -> int:
        """Convert a 1-based (line, column) pair back to a byte offset."""
        if line < 1 or line > self.line_count:
            raise OutOfRange(f"line {line} outside 1..{self.line_count}")
        if column < 1:
            raise OutOfRange(f"column {column} must be positive")

        line_start = self._line_starts[line - 1]
        line_end = self._line_starts[line] - 1 if line < self.line_count else len(self._data)
        offset = self.advance_chars(line_start, column - 1, limit=line_end)
        if offset is None:
            raise OutOfRange(f"column {column} beyond end of line {line}")
        return offset

    def advance_chars(self, offset: int, count: int, limit: Optional[int] = None) -> Optional[int]:
        """Return the offset `count` code points after `offset`, or None past `limit`."""
        if limit is None:
            limit = len(self._data)
        data = self._data
        pos = offset
        for _ in range(count):
            if pos >= limit:
                return None
            pos += 1
            while pos < limit and _is_continuation(data[pos]):
                pos += 1
        return pos

    # === Lines ===

    def line_span(self, line: int) -> Span:
        """Span of a line's content, without its '\\n' or a trailing '\\r'."""
        if line < 1 or line > self.line_count:
            raise OutOfRange(f"line {line} outside 1..{self.line_count}")
        start = self._line_starts[line - 1]
        end = self._line_starts[line] - 1 if line < self.line_count else len(self._data)
        if end > start and self._data[end - 1] == 0x0D:
            end -= 1
        return Span(start, end)

    def iter_lines(self) -> Iterator[Tuple[int, Span]]:
        """Yield (line_number, content_span) for every line.

        A text ending in a newline has no trailing empty line.
        """
        count = self.line_count
        if count > 1 and self._line_starts[-1] == len(self._data):
            count -= 1
        for line in range(1, count + 1):
            yield line, self.line_span(line)

    # === Slicing ===

    def slice(self, span: Span) -> bytes:
        self._check_span(span)
        return self._data[span.start:span.end]

    def text(self, span: Span) -> str:
        return self.slice(span).decode('utf-8', errors='replace')

    def char_length(self, span: Span) -> int:
        """Number of code points inside span."""
        return sum(1 for b in self.slice(span) if not _is_continuation(b))
