"""Lays out delivery orders as ESC/POS receipts."""
from printer_bridge.printer.document import LineItem, ReceiptDocument
from printer_bridge.printer.escpos import CommandBuffer
from printer_bridge.printer.layout import (
    QUAD_WIDTH,
    RECEIPT_WIDTH,
    format_amount,
    format_number,
    row,
    text_width,
)

ITEM_TABLE_HEADER = "상품명       수량   가격    총합"
RULE = "-" * RECEIPT_WIDTH

# Item table columns, in print cells
NAME_WIDTH = 14
NAME_TRUNCATE_CHARS = 7
QTY_WIDTH = 3
UNIT_PRICE_WIDTH = 7
AMOUNT_WIDTH = 8

TRAILING_FEED_LINES = 3


def format_clock(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def format_distance(distance) -> str:
    if float(distance).is_integer():
        return str(int(distance))
    return str(distance)


def item_row(item: LineItem) -> str:
    """Format one item table row: name, quantity, unit price, line amount.

    Names wider than the name column are cut to a fixed character count,
    not to a cell count, so a mixed-width name may still overflow.
    """
    name = item.product_name
    if text_width(name) > NAME_WIDTH:
        name = name[:NAME_TRUNCATE_CHARS]
    name_field = name + " " * max(0, NAME_WIDTH - text_width(name))

    qty_field = str(item.quantity).rjust(QTY_WIDTH)
    unit_field = format_number(item.unit_price).rjust(UNIT_PRICE_WIDTH)
    amount_field = format_number(item.amount).rjust(AMOUNT_WIDTH)
    return f"{name_field}{qty_field}{unit_field}{amount_field}"


class ReceiptBuilder:
    """Renders a ReceiptDocument into a CommandBuffer.

    Layout, top to bottom: store header, reservation banner, order info,
    customer, delivery address, item table, totals, cut.
    """

    def __init__(self, store_name: str, width: int = RECEIPT_WIDTH,
                 line_character: str = "=", codepage: str = "cp949"):
        self.store_name = store_name
        self.width = width
        self.line_character = line_character
        self.codepage = codepage

    def new_buffer(self) -> CommandBuffer:
        return CommandBuffer(width=self.width, codepage=self.codepage,
                             line_character=self.line_character)

    def build(self, document: ReceiptDocument) -> CommandBuffer:
        """Build the full receipt for a document."""
        buffer = self.new_buffer().initialize()

        scheduled_time = None
        if document.is_scheduled:
            scheduled_time = format_clock(document.scheduled_delivery_hour,
                                          document.scheduled_delivery_minute or 0)

        self._header(buffer)
        if scheduled_time:
            self._reservation_banner(buffer, scheduled_time)
        self._order_info(buffer, document, scheduled_time)
        self._customer(buffer, document)
        self._address(buffer, document)
        self._items(buffer, document)
        self._totals(buffer, document)

        # Keep the last lines clear of the cutter
        buffer.feed(TRAILING_FEED_LINES)
        buffer.cut()
        return buffer

    def _header(self, buffer: CommandBuffer) -> None:
        buffer.align_center()
        buffer.line()
        buffer.quad_area()
        buffer.bold(True)
        buffer.println(self.store_name)
        buffer.bold(False)
        buffer.normal()
        buffer.align_left()
        buffer.line()

    def _reservation_banner(self, buffer: CommandBuffer, scheduled_time: str) -> None:
        buffer.align_center()
        buffer.double_height()
        buffer.bold(True)
        buffer.println(f"** {scheduled_time} 예약배달 **")
        buffer.bold(False)
        buffer.normal()
        buffer.align_left()

    def _order_info(self, buffer: CommandBuffer, document: ReceiptDocument,
                    scheduled_time) -> None:
        buffer.println("[주문정보]")
        buffer.double_height()
        buffer.bold(True)
        buffer.println(document.order_label)
        buffer.bold(False)
        buffer.normal()
        buffer.println(f"주문일시: {document.paid_at:%Y-%m-%d %H:%M:%S}")

        if scheduled_time:
            buffer.bold(True)
            buffer.println(f"도착예정: {scheduled_time}")
            buffer.bold(False)
        elif document.delivery_hour is not None and document.delivery_minute is not None:
            buffer.bold(True)
            buffer.println(f"배달예정: {format_clock(document.delivery_hour, document.delivery_minute)}")
            buffer.bold(False)
        buffer.println(RULE)

    def _customer(self, buffer: CommandBuffer, document: ReceiptDocument) -> None:
        buffer.println("[고객정보]")
        buffer.double_height()
        buffer.bold(True)
        buffer.println(f"{document.buyer_name} / {document.phone}")
        buffer.bold(False)
        buffer.normal()
        buffer.newline()

    def _address(self, buffer: CommandBuffer, document: ReceiptDocument) -> None:
        buffer.println("[배달주소]")
        buffer.double_height()
        buffer.bold(True)
        buffer.println(document.address1)
        if document.address2:
            buffer.println(document.address2)
        buffer.bold(False)
        buffer.normal()
        buffer.println(RULE)

    def _items(self, buffer: CommandBuffer, document: ReceiptDocument) -> None:
        buffer.println(ITEM_TABLE_HEADER)
        for item in document.items:
            buffer.println(item_row(item))
        buffer.println(RULE)

    def _totals(self, buffer: CommandBuffer, document: ReceiptDocument) -> None:
        distance = format_distance(document.distance_km)

        buffer.bold(True)
        buffer.println(row("상품합계:", format_amount(document.total_product_amount)))
        buffer.println(row(f"배달비({distance}km):", format_amount(document.delivery_fee)))
        buffer.bold(False)
        buffer.line()

        # Quad size halves the usable cells
        buffer.align_center()
        buffer.quad_area()
        buffer.bold(True)
        buffer.println(row("합계:", format_amount(document.total_amount), QUAD_WIDTH))
        buffer.bold(False)
        buffer.normal()
        buffer.align_left()
        buffer.line()
