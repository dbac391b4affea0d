from protoc_synth.text.text_cursor import TextCursor


def _cursor_at_line_start() -> TextCursor:
    cursor = TextCursor()
    cursor.is_start_of_line = True
    return cursor


class TestWrite:
    def test_indents_at_start_of_line(self):
        cursor = _cursor_at_line_start()
        cursor.indent()
        cursor.write_line("a")

        assert str(cursor) == "    a\n"

    def test_blank_lines_are_not_indented(self):
        cursor = _cursor_at_line_start()
        cursor.indent()
        cursor.write_line("a")
        cursor.write_line("")
        cursor.write_line("b")

        assert str(cursor) == "    a\n\n    b\n"

    def test_embedded_newlines_indent_each_line(self):
        cursor = _cursor_at_line_start()
        cursor.indent()
        cursor.write("x\ny\n")

        assert str(cursor) == "    x\n    y\n"
        assert cursor.is_start_of_line is True

    def test_mid_line_write_is_not_indented(self):
        cursor = _cursor_at_line_start()
        cursor.indent()
        cursor.write("rpc A")
        cursor.write("(B)")

        assert str(cursor) == "    rpc A(B)"
        assert cursor.is_start_of_line is False

    def test_empty_write_is_ignored(self):
        cursor = TextCursor()
        cursor.write("")

        assert len(cursor) == 0


class TestBraces:
    def test_open_and_close_brace(self):
        cursor = TextCursor()
        cursor.write("enum E ")
        cursor.write_open_brace_and_indent()
        cursor.write_line("A = 0;")
        cursor.unindent_and_write_close_brace()

        assert str(cursor) == "enum E {\n    A = 0;\n}\n"

    def test_write_line_indent(self):
        cursor = _cursor_at_line_start()
        cursor.write_line_indent("inner")
        cursor.write_line("outer")

        assert str(cursor) == "    inner\nouter\n"

    def test_unindent_stops_at_zero(self):
        cursor = TextCursor()
        cursor.unindent()

        assert cursor.current_indentation == 0


class TestNewLineFlags:
    def test_new_line_if_needed(self):
        cursor = TextCursor()
        cursor.new_line_if_needed()
        assert str(cursor) == ""

        cursor.need_new_line()
        cursor.new_line_if_needed()
        assert str(cursor) == "\n"
        assert cursor.needs_new_line is False

    def test_reset_new_line(self):
        cursor = TextCursor()
        cursor.need_new_line()
        cursor.reset_new_line()
        cursor.new_line_if_needed()

        assert str(cursor) == ""


class TestClone:
    def test_clone_is_independent(self):
        cursor = _cursor_at_line_start()
        cursor.indent()
        cursor.write_line("a")

        copy = cursor.clone()
        cursor.clear()

        assert str(copy) == "    a\n"
        assert copy.current_indentation == 4
        assert copy.is_start_of_line is True
        assert str(cursor) == ""
