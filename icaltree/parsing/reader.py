"""Library for reading rfc5545 content lines from a stream.

Long content lines are split across multiple physical lines ("folded") by
inserting a line break followed by a single space or horizontal tab. The
reader reverses this, returning one logical content line at a time:

    DESCRIPTION:This is a lo
     ng description
      that exists on a long line.

is read as the single line:

    DESCRIPTION:This is a long description that exists on a long line.
"""

from __future__ import annotations

from collections.abc import Generator, Iterator
import io
import logging
from typing import TextIO

from icaltree.exceptions import CalendarParseError, LineTooLong

from .const import FOLD_INDENT, FOLD_LEN, LINE_TERMINATORS, WSP

__all__ = [
    "LineReader",
    "unfolded_lines",
    "fold_line",
]

_LOGGER = logging.getLogger(__name__)


class LineReader(Iterator[str]):
    """Iterator of unfolded logical lines read from a text stream.

    Each reader has its own lookahead state, so separate streams may be
    read concurrently with separate readers.
    """

    def __init__(self, stream: TextIO, max_line_length: int | None = None) -> None:
        """Initialize LineReader."""
        self._stream = stream
        self._max_line_length = max_line_length
        self._lookahead: str | None = None
        self._lookahead_number = 0
        self.lines = 0
        """Number of physical lines consumed from the stream."""
        self.line_number = 0
        """Physical line number where the last returned logical line started."""

    def _read_physical(self) -> tuple[str, int]:
        """Return the next physical line, either from lookahead or the stream."""
        if self._lookahead is not None:
            line, number = self._lookahead, self._lookahead_number
            self._lookahead = None
            return line, number
        try:
            line = self._stream.readline()
        except UnicodeDecodeError as err:
            raise CalendarParseError(
                f"Content is not valid {err.encoding} text",
                detailed_error=str(err),
                line_number=self.lines + 1,
            ) from err
        if line:
            self.lines += 1
        return line, self.lines

    def __iter__(self) -> LineReader:
        return self

    def __next__(self) -> str:
        """Return the next logical line with line terminators removed."""
        line, number = self._read_physical()
        if not line:
            raise StopIteration
        self.line_number = number
        parts = [_strip_terminator(line)]
        length = len(parts[0])
        too_long = self._exceeds(length)

        while True:
            following, following_number = self._read_physical()
            if not following:
                break
            if following[0] not in WSP:
                self._lookahead = following
                self._lookahead_number = following_number
                break
            continuation = _strip_terminator(following[1:])
            length += len(continuation)
            if not too_long:
                too_long = self._exceeds(length)
                parts.append(continuation)

        if too_long:
            # The rest of the folded line was consumed so reading can resume
            raise LineTooLong(
                f"Content line exceeds maximum length of {self._max_line_length}",
                detailed_error=f"{parts[0][:FOLD_LEN]}...",
                line_number=self.line_number,
            )
        return "".join(parts)

    def _exceeds(self, length: int) -> bool:
        return self._max_line_length is not None and length > self._max_line_length


def _strip_terminator(line: str) -> str:
    """Remove a single line terminator, keeping any other trailing characters."""
    for terminator in LINE_TERMINATORS:
        if line.endswith(terminator):
            return line[: -len(terminator)]
    return line


def unfolded_lines(
    content: str, max_line_length: int | None = None
) -> Generator[str, None, None]:
    """Read content and unfold lines."""
    yield from LineReader(io.StringIO(content), max_line_length=max_line_length)


def fold_line(line: str, width: int = FOLD_LEN) -> list[str]:
    """Split a logical line into physical lines of at most `width` characters.

    Continuation lines are prefixed with the fold indent, which is not
    counted towards the width, so unfolding always restores the input.
    """
    if width <= 0:
        raise ValueError(f"Fold width must be positive, got {width}")
    if len(line) <= width:
        return [line]
    folded = [line[0:width]]
    for pos in range(width, len(line), width):
        folded.append(f"{FOLD_INDENT}{line[pos:pos + width]}")
    _LOGGER.debug("Folded line into %d lines", len(folded))
    return folded
