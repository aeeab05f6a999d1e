from printer_bridge.printer.escpos import CommandBuffer


def test_records_directives_in_order():
    buffer = CommandBuffer().initialize().bold().text("hi").bold(False).newline()
    assert [directive for directive, _ in buffer.commands] == [
        "init", "bold", "text", "bold", "newline",
    ]
    assert buffer.build() == b"\x1b@\x1bE\x01hi\x1bE\x00\n"


def test_length_tracks_bytes():
    buffer = CommandBuffer().initialize().println("abc")
    assert len(buffer) == 2 + 3 + 1
    assert len(buffer) == len(buffer.build())
    assert bytes(buffer) == buffer.build()


def test_text_uses_codepage():
    buffer = CommandBuffer(codepage="cp949").text("사과")
    assert buffer.build() == "사과".encode("cp949")


def test_unencodable_text_is_replaced():
    buffer = CommandBuffer(codepage="ascii").text("a€b")
    assert buffer.build() == b"a?b"


def test_line_uses_fill_character_and_width():
    buffer = CommandBuffer(width=32, line_character="=").line()
    assert buffer.build() == b"=" * 32 + b"\n"
    assert CommandBuffer(width=4).line("-").build() == b"----\n"


def test_size_and_alignment_codes():
    buffer = CommandBuffer().quad_area().double_height().normal().align_center().align_right().align_left()
    assert buffer.build() == (
        b"\x1b!\x30" b"\x1b!\x10" b"\x1b!\x00" b"\x1ba\x01" b"\x1ba\x02" b"\x1ba\x00"
    )


def test_cut_does_not_feed():
    assert CommandBuffer().cut().build() == b"\x1dV\x00"
    assert CommandBuffer().cut(partial=True).build() == b"\x1dV\x01"


def test_clear_empties_buffer():
    buffer = CommandBuffer().initialize().println("x")
    assert not buffer.is_empty()
    buffer.clear()
    assert buffer.is_empty()
    assert len(buffer) == 0
    assert buffer.build() == b""
    assert buffer.commands == []


def test_preview_drops_control_codes():
    buffer = CommandBuffer().initialize().bold().println("사과").line("-").cut()
    assert buffer.preview() == "사과\n" + "-" * 32 + "\n--- CUT ---\n"
