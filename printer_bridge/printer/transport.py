"""Transmission of finished command buffers to the printer."""
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from printer_bridge.printer.discovery import PrinterTarget
from printer_bridge.printer.errors import TransmissionFailure
from printer_bridge.printer.escpos import CommandBuffer
from printer_bridge.printer.facade import PrinterFacade

logger = logging.getLogger(__name__)

DEFAULT_PRINTER_NAME = "SEWOO SLK-TS 100"


class Transport(ABC):
    """Abstract base class for printer transports."""

    @abstractmethod
    def send(self, data: bytes, target: PrinterTarget) -> None:
        """Deliver raw bytes to the target.

        Raises:
            TransmissionFailure: if the bytes could not be delivered.
        """
        pass

    def transmit(self, buffer: CommandBuffer, target: PrinterTarget) -> int:
        """Send a command buffer and clear it once the OS accepts it.

        A failed send leaves the buffer untouched. Nothing is retried.

        Returns:
            Number of bytes sent.
        """
        if buffer.is_empty():
            raise TransmissionFailure("No data to print")

        data = buffer.build()
        self.send(data, target)
        buffer.clear()
        logger.info("Sent %d bytes to %s", len(data), target.name or target.port)
        return len(data)

    def is_ready(self, target: PrinterTarget) -> Optional[bool]:
        """Transport-level readiness, or None when the transport has no signal."""
        return None


class DeviceFileTransport(Transport):
    """Writes straight to a character device such as ``/dev/usb/lp0``."""

    def send(self, data: bytes, target: PrinterTarget) -> None:
        path = target.device_path
        try:
            with open(path, "wb") as device:
                device.write(data)
                device.flush()
        except OSError as e:
            raise TransmissionFailure(
                f"Failed to write to {path}: [{type(e).__name__}] {e}", e
            ) from e

    def is_ready(self, target: PrinterTarget) -> Optional[bool]:
        return os.path.exists(target.device_path)

    def __repr__(self):
        return "DeviceFileTransport()"


@contextmanager
def staged_job(data: bytes, directory: Optional[str] = None) -> Iterator[str]:
    """Write data to a uniquely named temp file, removed on exit."""
    fd, path = tempfile.mkstemp(prefix="receipt-", suffix=".bin", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        yield path
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove staged job %s: %s", path, e)


class SpoolerTransport(Transport):
    """Submits RAW jobs through the OS print spooler.

    Needed on Windows, where a printer on a virtual port such as ``USB001``
    cannot be opened as a file.
    """

    def __init__(self, facade: PrinterFacade, default_printer_name: str = DEFAULT_PRINTER_NAME,
                 staging_dir: Optional[str] = None):
        self.facade = facade
        self.default_printer_name = default_printer_name
        self.staging_dir = staging_dir

    def send(self, data: bytes, target: PrinterTarget) -> None:
        name = target.name or self.default_printer_name
        try:
            with staged_job(data, self.staging_dir) as path:
                self.facade.submit_raw_job(name, path)
        except TransmissionFailure:
            raise
        except OSError as e:
            raise TransmissionFailure(
                f"Failed to spool job for {name}: [{type(e).__name__}] {e}", e
            ) from e
        except Exception as e:
            raise TransmissionFailure(
                f"Spooler helper failed for {name}: [{type(e).__name__}] {e}", e
            ) from e

    def __repr__(self):
        return f"SpoolerTransport({self.default_printer_name!r})"


def create_transport(config: dict, facade: PrinterFacade) -> Transport:
    """Factory function to create the deployment's transport from config.

    Args:
        config: Mapping with ``PRINTER_TRANSPORT`` (``spooler`` or ``device``)
            and, for the spooler, ``PRINTER_DEFAULT_NAME``.
        facade: OS printer facade used by the spooler transport.

    Returns:
        Transport instance.
    """
    transport_type = str(config.get("PRINTER_TRANSPORT", "spooler")).lower()

    if transport_type == "spooler":
        return SpoolerTransport(
            facade,
            default_printer_name=config.get("PRINTER_DEFAULT_NAME", DEFAULT_PRINTER_NAME),
            staging_dir=config.get("PRINTER_STAGING_DIR"),
        )
    elif transport_type == "device":
        return DeviceFileTransport()
    else:
        raise ValueError(f"Unknown printer transport: {transport_type}")
