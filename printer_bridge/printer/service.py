"""Print service tying layout, target resolution and transport together."""
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from printer_bridge.printer.connection import PrinterContext
from printer_bridge.printer.discovery import PrinterDiscovery, PrinterTarget
from printer_bridge.printer.document import ReceiptDocument
from printer_bridge.printer.errors import DeviceOffline
from printer_bridge.printer.facade import PrinterFacade, WindowsPrinterFacade
from printer_bridge.printer.receipt import ReceiptBuilder
from printer_bridge.printer.transport import Transport, create_transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrintResult:
    """Outcome of a successful print."""
    target: PrinterTarget
    byte_count: int
    preview: str


class PrintService:
    """Prints receipts on the single attached printer.

    Jobs are serialised: two RAW jobs written to the same port at once can
    interleave and garble both receipts.
    """

    def __init__(self, context: PrinterContext, transport: Transport, builder: ReceiptBuilder):
        self.context = context
        self.transport = transport
        self.builder = builder
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: dict, facade: Optional[PrinterFacade] = None) -> "PrintService":
        """Create a service from a Flask config mapping."""
        if facade is None:
            facade = WindowsPrinterFacade(
                query_timeout=config.get("DISCOVERY_TIMEOUT", 5.0),
                submit_timeout=config.get("SUBMIT_TIMEOUT", 10.0),
            )
        discovery = PrinterDiscovery(facade, vendor=config.get("PRINTER_VENDOR", "SEWOO"))
        context = PrinterContext(discovery, fallback_port=config.get("PRINTER_FALLBACK_PORT", "LPT1"))
        builder = ReceiptBuilder(
            store_name=config.get("STORE_NAME", ""),
            width=config.get("RECEIPT_WIDTH", 32),
            line_character=config.get("LINE_CHARACTER", "="),
            codepage=config.get("PRINTER_CODEPAGE", "cp949"),
        )
        return cls(context, create_transport(config, facade), builder)

    def is_online(self) -> bool:
        """Whether the printer looks ready to accept a job."""
        try:
            ready = self.transport.is_ready(self.context.get_target())
        except Exception:
            logger.exception("Printer readiness check failed")
            return False
        if ready is not None:
            return ready
        return self.context.is_online()

    def print_receipt(self, document: ReceiptDocument, check_status: bool = True) -> PrintResult:
        """Lay out and print one receipt.

        Raises:
            DeviceOffline: if ``check_status`` is set and the printer is not ready.
            TransmissionFailure: if the bytes could not be delivered.
        """
        with self._lock:
            if check_status and not self.is_online():
                raise DeviceOffline("Printer is not connected")

            target = self.context.get_target()
            buffer = self.builder.build(document)
            preview = buffer.preview()
            byte_count = self.transport.transmit(buffer, target)
            return PrintResult(target=target, byte_count=byte_count, preview=preview)

    def shutdown(self) -> None:
        """Release the printer target; call before the process exits."""
        self.context.release_target()

    def __repr__(self):
        return f"PrintService({self.transport!r}, {self.context!r})"
