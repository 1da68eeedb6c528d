"""Error reporting with line and column positions."""

from __future__ import annotations

import sys
from typing import TextIO


class ErrorReporter:
    """Tracks line starts in the source and reports positioned errors."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.any_errors = False
        self.file_name = ""
        self.line_num = 1
        self.tok_pos = 0
        self._line_pos: list[int] = []

    def newline(self) -> None:
        """Record that a new line starts at the current token position."""
        self.line_num += 1
        self._line_pos.append(self.tok_pos)

    def error(self, pos: int, message: str, *args: object) -> str:
        """Report ``message % args`` at character ``pos``; return the line written."""
        self.any_errors = True
        num = self.line_num
        start = None
        for line_start in reversed(self._line_pos):
            if line_start < pos:
                start = line_start
                break
            num -= 1

        text = message % args if args else message
        location = f"{num}.{pos - start}: " if start is not None else ""
        line = f"{self.file_name}:{location}{text}\n"
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(line)
        return line

    def reset(self, filename: str) -> str:
        """Start a fresh source file and return its text."""
        self.any_errors = False
        self.file_name = filename
        self.line_num = 1
        self._line_pos = [0]
        try:
            with open(filename, encoding="utf-8") as handle:
                return handle.read()
        except OSError:
            self.error(0, "cannot open")
            raise