from conftest import make_document

from printer_bridge.printer.document import LineItem
from printer_bridge.printer.escpos import CommandBuffer
from printer_bridge.printer.layout import format_amount, text_width
from printer_bridge.printer.receipt import ITEM_TABLE_HEADER, RULE, ReceiptBuilder, item_row


def build(document):
    return ReceiptBuilder(store_name="과일맛집1995").build(document)


def preview_lines(document):
    return build(document).preview().split("\n")


def test_item_row_fields():
    line = item_row(LineItem("사과세트", 2, 20000))
    assert line == "사과세트" + " " * 6 + "  2" + " 10,000" + "  20,000"
    assert line[len("사과세트") + 6:][:3] == "  2"
    assert text_width(line) == 32


def test_item_row_truncates_wide_name_to_seven_characters():
    line = item_row(LineItem("제주 한라봉 선물세트 특대", 1, 45000))
    assert line.startswith("제주 한라봉   ")
    assert line.endswith("  1 45,000  45,000")


def test_item_row_keeps_name_at_column_width():
    name = "가" * 7
    assert item_row(LineItem(name, 1, 1000)).startswith(name + "  1")


def test_item_row_latin_name_truncation():
    line = item_row(LineItem("ABCDEFGHIJKLMNOP", 1, 500))
    assert line.startswith("ABCDEFG" + " " * 7 + "  1")


def test_item_row_unit_price_is_unrounded_division():
    item = LineItem("귤", 3, 10000)
    assert item.unit_price == 10000 / 3
    assert "3,333.333" in item_row(item)


def test_unit_price_independent_of_quantity_layout():
    for quantity in (1, 2, 4, 5):
        item = LineItem("배", quantity, 20000)
        assert item.unit_price == 20000 / quantity


def test_builds_command_buffer():
    buffer = build(make_document())
    assert isinstance(buffer, CommandBuffer)
    data = buffer.build()
    assert data.startswith(b"\x1b@")
    assert data.endswith(b"\n\n\n\x1dV\x00")
    assert "[주문정보]".encode("cp949") in data


def test_header_block():
    buffer = build(make_document())
    directives = [d for d, _ in buffer.commands]
    assert directives[:4] == ["init", "align", "text", "newline"]
    data = buffer.build()
    header = b"\x1ba\x01" + b"=" * 32 + b"\n" + b"\x1b!\x30\x1bE\x01" + "과일맛집1995".encode("cp949")
    assert header in data


def test_plain_delivery_time():
    lines = preview_lines(make_document(delivery_hour=18, delivery_minute=30))
    assert "배달예정: 18:30" in lines
    assert not any("예약배달" in line for line in lines)
    assert not any("도착예정" in line for line in lines)


def test_scheduled_delivery_banner():
    lines = preview_lines(make_document(scheduled_delivery_hour=15, scheduled_delivery_minute=5))
    assert "** 15:05 예약배달 **" in lines
    assert "도착예정: 15:05" in lines
    assert not any("배달예정" in line for line in lines)


def test_scheduled_minute_defaults_to_zero():
    lines = preview_lines(make_document(scheduled_delivery_hour=9))
    assert "** 09:00 예약배달 **" in lines


def test_no_delivery_line_without_minute():
    lines = preview_lines(make_document(delivery_minute=None))
    assert not any("배달예정" in line for line in lines)


def test_order_label_and_timestamp():
    lines = preview_lines(make_document())
    assert "#1024" in lines
    assert "주문일시: 2026-02-12 02:08:03" in lines

    lines = preview_lines(make_document(display_code="A-12"))
    assert "A-12" in lines
    assert "#1024" not in lines


def test_customer_and_address():
    lines = preview_lines(make_document())
    assert "홍길동 / 010-1234-5678" in lines
    assert "서울시 강남구 테헤란로 1" in lines
    index = lines.index("서울시 강남구 테헤란로 1")
    assert lines[index + 1] == RULE


def test_second_address_line_when_present():
    lines = preview_lines(make_document(address2="101동 1001호"))
    index = lines.index("서울시 강남구 테헤란로 1")
    assert lines[index + 1] == "101동 1001호"


def test_item_table():
    document = make_document(items=(
        LineItem("사과세트", 2, 20000),
        LineItem("배", 1, 5000),
    ))
    lines = preview_lines(document)
    start = lines.index(ITEM_TABLE_HEADER)
    assert lines[start + 1] == item_row(document.items[0])
    assert lines[start + 2] == item_row(document.items[1])
    assert lines[start + 3] == RULE


def test_empty_item_table():
    lines = preview_lines(make_document(items=()))
    start = lines.index(ITEM_TABLE_HEADER)
    assert lines[start + 1] == RULE


def test_totals():
    document = make_document(total_product_amount=20000, delivery_fee=3000, distance_km=2.5)
    lines = preview_lines(document)
    assert document.total_amount == 23000
    assert any(line.startswith("상품합계:") and line.endswith("20,000원") for line in lines)
    assert any(line.startswith("배달비(2.5km):") and line.endswith("3,000원") for line in lines)
    total_lines = [line for line in lines if line.startswith("합계:")]
    assert len(total_lines) == 1
    assert total_lines[0].endswith(format_amount(20000 + 3000))
    assert text_width(total_lines[0]) == 16


def test_whole_kilometre_distance():
    lines = preview_lines(make_document(distance_km=3.0))
    assert any(line.startswith("배달비(3km):") for line in lines)


def test_build_is_deterministic():
    document = make_document()
    assert build(document).build() == build(document).build()
