"""Line assembly for the serial console and parsing of target values."""

from __future__ import annotations

import re

BUFFER_SIZE = 50
MESSAGE_SIZE = 32

_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


class LineAssembler:
    """Collect received bytes into lines terminated by CR or LF.

    A terminator only ends a line when something has been collected; at the
    start of a line it is kept as an ordinary character. At most
    ``BUFFER_SIZE - 1`` characters are held, and each delivered line is cut to
    ``MESSAGE_SIZE`` characters.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[str]:
        """Consume received bytes and return the lines they complete."""
        lines = []
        for byte in data:
            if byte in b"\r\n" and self._buffer:
                lines.append(self._buffer[:MESSAGE_SIZE].decode("latin-1"))
                self._buffer.clear()
            elif len(self._buffer) < BUFFER_SIZE - 1:
                self._buffer.append(byte)
        return lines

    @property
    def pending(self) -> bytes:
        """Bytes collected for the line in progress."""
        return bytes(self._buffer)


def parse_target(line: str | bytes) -> int:
    """Read a leading integer like ``atoi`` and return its magnitude as 16 bits."""
    if isinstance(line, bytes):
        line = line.decode("latin-1")
    match = _LEADING_INT.match(line)
    value = int(match.group(1)) if match else 0
    return abs(value) & 0xFFFF