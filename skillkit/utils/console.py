"""
Console helpers shared by the command-line tools.

ANSI styling is only applied when the target stream is a terminal, so
redirected output and captured output stay plain.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class Palette:
    color: bool = False

    @classmethod
    def for_stream(cls, stream: TextIO | None = None) -> Palette:
        stream = stream or sys.stdout
        isatty = getattr(stream, "isatty", None)
        return cls(color=bool(isatty and isatty()))

    def _wrap(self, code: str, s: str) -> str:
        if not self.color:
            return s
        return f"\033[{code}m{s}\033[0m"

    def bold(self, s: str) -> str:
        return self._wrap("1", s)

    def dim(self, s: str) -> str:
        return self._wrap("2", s)

    def green(self, s: str) -> str:
        return self._wrap("32", s)

    @property
    def PASS(self) -> str:
        return self._wrap("32", "✓")

    @property
    def FAIL(self) -> str:
        return self._wrap("31", "✗")

    @property
    def WARN(self) -> str:
        return self._wrap("33", "!")
