"""Builder over a Block tree with an active-block cursor."""

from __future__ import annotations

import re
import sys
from typing import Any, List, Optional

from .block import Block, BlockKind, NewLineKind
from .text_cursor import DEFAULT_INDENTATION

_LINE_BREAKS = re.compile(r"\r\n|\r|\n")


class BlockError(Exception):
    """Raised when the block stack is used inconsistently."""


class BlockGenerator:
    """Base class for generators that build text as a tree of blocks.

    All writes go to the active block. ``push_block`` opens a child of the
    active block and makes it active; ``pop_block`` closes it again.
    """

    def __init__(self) -> None:
        self.root_block = Block()
        self.active_block = self.root_block

    @property
    def current_indentation(self) -> int:
        return self.active_block.text.current_indentation

    def generate(self) -> str:
        return self.root_block.generate()

    def reset(self) -> None:
        """Discard everything written so far."""
        self.root_block = Block()
        self.active_block = self.root_block

    # -- block helpers --

    def add_block(self, block: Block) -> None:
        self.active_block.add_block(block)

    def push_block(self, kind: BlockKind = BlockKind.UNKNOWN, owner: Any = None) -> Block:
        block = Block(kind, owner)
        active_text = self.active_block.text
        block.text.current_indentation = active_text.current_indentation
        block.text.is_start_of_line = active_text.is_start_of_line
        block.text.needs_new_line = active_text.needs_new_line

        self.active_block.add_block(block)
        self.active_block = block
        return block

    def pop_block(self, new_line_kind: NewLineKind = NewLineKind.NEVER) -> Block:
        block = self.active_block
        if block.parent is None:
            raise BlockError("Cannot pop the root block")

        block.new_line_kind = new_line_kind
        self.active_block = block.parent
        return block

    def find_blocks(self, kind: BlockKind) -> List[Block]:
        return list(self.root_block.find_blocks(kind))

    def find_block(self, kind: BlockKind) -> Optional[Block]:
        blocks = self.find_blocks(kind)
        if len(blocks) > 1:
            raise BlockError(f"Expected at most one {kind.name} block, found {len(blocks)}")
        return blocks[0] if blocks else None

    # -- text delegation --

    def write(self, text: str) -> None:
        self.active_block.write(text)

    def write_line(self, text: str = "") -> None:
        self.active_block.write_line(text)

    def write_lines(self, text: str, trim_indentation: bool = False) -> None:
        """Write multi-line text, optionally removing the common indentation.

        Leading empty lines are dropped; empty lines after the first written
        line are kept.
        """
        lines = _LINE_BREAKS.split(text)
        indentation = sys.maxsize

        if trim_indentation:
            for line in lines:
                for i, ch in enumerate(line):
                    if ch.isspace():
                        continue
                    if i < indentation:
                        indentation = i
                        break

        found_non_empty_line = False
        for line in lines:
            if not found_non_empty_line and not line:
                continue

            self.write_line(line[indentation:] if len(line) >= indentation else line)
            found_non_empty_line = True

    def write_line_indent(self, text: str) -> None:
        self.active_block.write_line_indent(text)

    def new_line(self) -> None:
        self.active_block.new_line()

    def new_line_if_needed(self) -> None:
        self.active_block.new_line_if_needed()

    def need_new_line(self) -> None:
        self.active_block.need_new_line()

    def reset_new_line(self) -> None:
        self.active_block.reset_new_line()

    @property
    def needs_new_line(self) -> bool:
        return self.active_block.needs_new_line

    @needs_new_line.setter
    def needs_new_line(self, value: bool) -> None:
        self.active_block.needs_new_line = value

    def indent(self, indentation: int = DEFAULT_INDENTATION) -> None:
        self.active_block.indent(indentation)

    def unindent(self) -> None:
        self.active_block.unindent()

    def write_open_brace_and_indent(self) -> None:
        self.active_block.write_open_brace_and_indent()

    def unindent_and_write_close_brace(self) -> None:
        self.active_block.unindent_and_write_close_brace()
