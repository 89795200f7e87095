"""Reading here-document input line by line."""

from __future__ import annotations

import sys
from typing import TextIO


def read_line(stream: TextIO) -> str | None:
    """Return the next line with its newline, or ``None`` at end of input."""
    line = stream.readline()
    return line or None


def read_heredoc(limiter: str, stream: TextIO | None = None) -> str:
    """Collect lines from ``stream`` until a line equal to ``limiter``.

    The limiter line is consumed but not included. Reading also stops at the
    end of the input.
    """
    if stream is None:
        stream = sys.stdin
    terminator = limiter + "\n"
    collected = []
    while (line := read_line(stream)) is not None:
        if line.startswith(terminator):
            break
        collected.append(line)
    return "".join(collected)