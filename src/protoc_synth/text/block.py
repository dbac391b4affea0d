"""Block tree: the intermediate representation generators write into."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Callable, Iterator, List, Optional

from .text_cursor import DEFAULT_INDENTATION, NEW_LINE, TextCursor


class NewLineKind(Enum):
    """When a blank line is emitted around a block, relative to its siblings."""

    NEVER = auto()
    ALWAYS = auto()
    BEFORE_NEXT_BLOCK = auto()
    IF_NOT_EMPTY = auto()


class BlockKind(Enum):
    UNKNOWN = auto()
    BLOCK = auto()
    BLOCK_COMMENT = auto()
    INLINE_COMMENT = auto()
    HEADER = auto()
    FOOTER = auto()
    USINGS = auto()
    NAMESPACE = auto()
    ENUM = auto()
    ENUM_ITEM = auto()
    MESSAGE = auto()
    FIELD = auto()
    SERVICE = auto()
    METHOD = auto()


class Block:
    """A node of text with ordered child blocks.

    Text written directly into a block renders after its children, unless a
    child is added afterwards: pending text is then moved into an anonymous
    child first, so emission order always follows write order.
    """

    def __init__(self, kind: BlockKind = BlockKind.UNKNOWN, owner: Any = None):
        self.kind = kind
        self.owner = owner
        self.text = TextCursor()
        self.new_line_kind = NewLineKind.NEVER
        self.parent: Optional[Block] = None
        self.blocks: List[Block] = []
        self.check_generate: Optional[Callable[[], bool]] = None
        self._has_indent_changed = False

    def __repr__(self) -> str:
        return f"Block({self.kind.name}, owner={self.owner!r})"

    def add_block(self, block: Block) -> None:
        if len(self.text) != 0 or self._has_indent_changed:
            self._has_indent_changed = False
            pending = Block()
            pending.text = self.text.clone()
            self.text.clear()
            self.add_block(pending)

        block.parent = self
        self.blocks.append(block)

    def find_blocks(self, kind: BlockKind) -> Iterator[Block]:
        """Yield all descendants of the given kind, depth first in document order."""
        for block in self.blocks:
            if block.kind == kind:
                yield block
            yield from block.find_blocks(kind)

    def generate(self) -> str:
        if self.check_generate is not None and not self.check_generate():
            return ""

        if not self.blocks:
            return str(self.text)

        parts: List[str] = []
        previous: Optional[Block] = None
        rendered = [child.generate() for child in self.blocks]

        for index, child in enumerate(self.blocks):
            child_text = rendered[index]

            # A block that only introduces its successor is dropped with it.
            if index + 1 < len(self.blocks):
                if not rendered[index + 1] and child.new_line_kind == NewLineKind.IF_NOT_EMPTY:
                    continue

            if not child_text:
                continue

            if previous is not None and previous.new_line_kind == NewLineKind.BEFORE_NEXT_BLOCK:
                parts.append(NEW_LINE)

            parts.append(child_text)

            if child.new_line_kind == NewLineKind.ALWAYS:
                parts.append(NEW_LINE)

            previous = child

        if len(self.text) != 0:
            parts.append(str(self.text))

        return "".join(parts)

    @property
    def is_empty(self) -> bool:
        if any(not block.is_empty for block in self.blocks):
            return False
        return not str(self.text)

    # -- text delegation --

    def write(self, text: str) -> None:
        self.text.write(text)

    def write_line(self, text: str = "") -> None:
        self.text.write_line(text)

    def write_line_indent(self, text: str) -> None:
        self.text.write_line_indent(text)

    def new_line(self) -> None:
        self.text.new_line()

    def new_line_if_needed(self) -> None:
        self.text.new_line_if_needed()

    def need_new_line(self) -> None:
        self.text.need_new_line()

    def reset_new_line(self) -> None:
        self.text.reset_new_line()

    @property
    def needs_new_line(self) -> bool:
        return self.text.needs_new_line

    @needs_new_line.setter
    def needs_new_line(self, value: bool) -> None:
        self.text.needs_new_line = value

    def indent(self, indentation: int = DEFAULT_INDENTATION) -> None:
        self._has_indent_changed = True
        self.text.indent(indentation)

    def unindent(self) -> None:
        self._has_indent_changed = True
        self.text.unindent()

    def write_open_brace_and_indent(self) -> None:
        self.text.write_open_brace_and_indent()

    def unindent_and_write_close_brace(self) -> None:
        self.text.unindent_and_write_close_brace()
