from protoc_synth.text.block import Block, BlockKind, NewLineKind


def _block(text: str = "", new_line_kind: NewLineKind = NewLineKind.NEVER,
           kind: BlockKind = BlockKind.UNKNOWN) -> Block:
    block = Block(kind)
    block.write(text)
    block.new_line_kind = new_line_kind
    return block


def _parent(*children: Block) -> Block:
    parent = Block()
    for child in children:
        parent.add_block(child)
    return parent


class TestGenerate:
    def test_leaf_returns_its_text(self):
        assert _block("abc").generate() == "abc"

    def test_empty_sibling_is_skipped(self):
        parent = _parent(
            _block("x", NewLineKind.ALWAYS),
            _block("", NewLineKind.IF_NOT_EMPTY),
            _block("y"),
        )

        assert parent.generate() == "x\ny"

    def test_if_not_empty_drops_block_before_empty_sibling(self):
        parent = _parent(
            _block("x"),
            _block("b", NewLineKind.IF_NOT_EMPTY),
            _block(""),
        )

        assert parent.generate() == "x"

    def test_if_not_empty_keeps_block_before_non_empty_sibling(self):
        parent = _parent(
            _block("b\n", NewLineKind.IF_NOT_EMPTY),
            _block("c\n"),
        )

        assert parent.generate() == "b\nc\n"

    def test_before_next_block(self):
        parent = _parent(
            _block("a\n", NewLineKind.BEFORE_NEXT_BLOCK),
            _block("b\n"),
        )

        assert parent.generate() == "a\n\nb\n"

    def test_before_next_block_without_next(self):
        parent = _parent(
            _block("a\n", NewLineKind.BEFORE_NEXT_BLOCK),
            _block(""),
        )

        assert parent.generate() == "a\n"

    def test_always_appends_blank_line(self):
        parent = _parent(_block("a\n", NewLineKind.ALWAYS), _block("b\n"))

        assert parent.generate() == "a\n\nb\n"

    def test_check_generate_suppresses_block(self):
        block = _block("hidden")
        block.check_generate = lambda: False

        assert block.generate() == ""


class TestInterleaving:
    def test_text_written_before_child_stays_before_it(self):
        parent = Block()
        parent.write_line("head")
        parent.add_block(_block("body\n"))
        parent.write_line("tail")

        assert parent.generate() == "head\nbody\ntail\n"
        assert len(parent.blocks) == 2
        assert parent.blocks[0].kind == BlockKind.UNKNOWN
        assert parent.blocks[0].generate() == "head\n"

    def test_indent_change_creates_anonymous_block(self):
        parent = Block()
        parent.indent()
        child = _block("x")
        parent.add_block(child)

        assert len(parent.blocks) == 2
        assert parent.blocks[1] is child
        assert child.parent is parent

    def test_no_anonymous_block_without_pending_text(self):
        parent = Block()
        parent.add_block(_block("x"))

        assert len(parent.blocks) == 1


class TestFindBlocks:
    def test_depth_first_document_order(self):
        first = _block("1", kind=BlockKind.ENUM)
        nested = _block("2", kind=BlockKind.ENUM)
        holder = _parent(nested)
        holder.kind = BlockKind.MESSAGE
        last = _block("3", kind=BlockKind.ENUM)
        root = _parent(first, holder, last)

        assert list(root.find_blocks(BlockKind.ENUM)) == [first, nested, last]
        assert list(root.find_blocks(BlockKind.MESSAGE)) == [holder]
        assert list(root.find_blocks(BlockKind.SERVICE)) == []


class TestIsEmpty:
    def test_empty_tree(self):
        assert _parent(_block(""), _parent(_block(""))).is_empty is True

    def test_nested_text_makes_tree_non_empty(self):
        assert _parent(_block(""), _parent(_block("x"))).is_empty is False

    def test_own_text(self):
        assert _block("x").is_empty is False
        assert Block().is_empty is True
