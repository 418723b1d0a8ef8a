"""Line buffer and tokenizer for interpreter input."""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class LineReader:
    """
    Hold one input line and hand out its space-separated parameters.

    Tokens are split on single spaces, so consecutive spaces yield empty
    parameters; callers treat an empty parameter as missing.
    """

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._line = ""
        self._offset: Optional[int] = None

    @property
    def line(self) -> str:
        return self._line

    def read_line(self) -> bool:
        """
        Read the next line from the stream.

        Returns:
            False at end of input or on an empty line, True otherwise.
        """
        raw = self._stream.readline()
        if not raw:
            return False
        return self.load(raw.rstrip("\r\n"))

    def load(self, line: str) -> bool:
        """Replace the buffer with line and rewind. False if line is empty."""
        self._line = line
        self._offset = 0 if line else None
        return bool(line)

    def next_parameter(self) -> Optional[str]:
        """Return the next parameter, or None when the line is exhausted."""
        if self._offset is None:
            return None

        next_space = self._line.find(" ", self._offset)
        if next_space == -1:
            param = self._line[self._offset:]
            self._offset = None
        else:
            param = self._line[self._offset:next_space]
            self._offset = next_space + 1
        return param

    def rest(self) -> Optional[str]:
        """Return everything not consumed yet (for names containing spaces)."""
        if self._offset is None:
            return None
        remainder = self._line[self._offset:]
        self._offset = None
        return remainder
