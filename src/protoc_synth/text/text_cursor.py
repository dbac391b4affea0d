"""Indentation-aware text buffer used by every block."""

from __future__ import annotations

import re
from typing import List

DEFAULT_INDENTATION = 4

NEW_LINE = "\n"


def _split_and_keep(text: str) -> List[str]:
    """Split on newlines, keeping the newline at the end of each piece."""
    return re.split(r"(?<=\n)", text)


class TextCursor:
    """Accumulates text and tracks indentation and line state.

    Indentation is only emitted at the start of a line whose content is not
    whitespace, so blank lines never carry trailing spaces.
    """

    def __init__(self) -> None:
        self._parts: List[str] = []
        self.current_indentation = 0
        self.is_start_of_line = False
        self.needs_new_line = False

    def __len__(self) -> int:
        return sum(len(p) for p in self._parts)

    def __str__(self) -> str:
        return "".join(self._parts)

    @property
    def text(self) -> str:
        return str(self)

    def clear(self) -> None:
        self._parts.clear()

    def clone(self) -> TextCursor:
        copy = TextCursor()
        copy._parts = list(self._parts)
        copy.current_indentation = self.current_indentation
        copy.is_start_of_line = self.is_start_of_line
        copy.needs_new_line = self.needs_new_line
        return copy

    def write(self, text: str) -> None:
        if not text:
            return

        for line in _split_and_keep(text):
            if self.is_start_of_line and line.strip():
                self._parts.append(" " * self.current_indentation)
            if line:
                self.is_start_of_line = line.endswith(NEW_LINE)
            self._parts.append(line)

    def write_line(self, text: str = "") -> None:
        self.write(text)
        self.new_line()

    def write_line_indent(self, text: str) -> None:
        self.indent()
        self.write_line(text)
        self.unindent()

    def new_line(self) -> None:
        self._parts.append(NEW_LINE)
        self.is_start_of_line = True

    def new_line_if_needed(self) -> None:
        if not self.needs_new_line:
            return
        self.new_line()
        self.needs_new_line = False

    def need_new_line(self) -> None:
        self.needs_new_line = True

    def reset_new_line(self) -> None:
        self.needs_new_line = False

    def indent(self, indentation: int = DEFAULT_INDENTATION) -> None:
        self.current_indentation += indentation

    def unindent(self) -> None:
        self.current_indentation = max(0, self.current_indentation - DEFAULT_INDENTATION)

    def write_open_brace_and_indent(self) -> None:
        self.write_line("{")
        self.indent()

    def unindent_and_write_close_brace(self) -> None:
        self.unindent()
        self.write_line("}")
