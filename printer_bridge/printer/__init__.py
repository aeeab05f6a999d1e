"""Printer module for ESC/POS receipt printing."""
from printer_bridge.printer.connection import PrinterContext
from printer_bridge.printer.discovery import PrinterDiscovery, PrinterTarget
from printer_bridge.printer.document import LineItem, ReceiptDocument
from printer_bridge.printer.errors import (
    DeviceOffline,
    DiscoveryUnavailable,
    PrinterError,
    TransmissionFailure,
)
from printer_bridge.printer.escpos import CommandBuffer
from printer_bridge.printer.facade import PrinterFacade, WindowsPrinterFacade
from printer_bridge.printer.receipt import ReceiptBuilder
from printer_bridge.printer.service import PrintResult, PrintService
from printer_bridge.printer.transport import (
    DeviceFileTransport,
    SpoolerTransport,
    Transport,
    create_transport,
)

__all__ = [
    "CommandBuffer",
    "DeviceFileTransport",
    "DeviceOffline",
    "DiscoveryUnavailable",
    "LineItem",
    "PrintResult",
    "PrintService",
    "PrinterContext",
    "PrinterDiscovery",
    "PrinterError",
    "PrinterFacade",
    "PrinterTarget",
    "ReceiptBuilder",
    "ReceiptDocument",
    "SpoolerTransport",
    "TransmissionFailure",
    "Transport",
    "WindowsPrinterFacade",
    "create_transport",
]
